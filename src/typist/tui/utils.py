"""How many terminal cells a piece of text occupies.

Width is counted per grapheme cluster (via ``grapheme``) with ``wcwidth``
deciding single code points; SGR and other CSI sequences count as zero.
"""

from __future__ import annotations

import functools
import re
import unicodedata

import grapheme
import wcwidth

_CSI_RE = re.compile(r"\x1b\[[0-9;?]*[A-Za-z]")

# Code points that make a multi-codepoint cluster render as a wide emoji
_EMOJI_MARKERS = (
    (0xFE0F, 0xFE0F),  # variation selector 16
    (0x200D, 0x200D),  # zero width joiner
    (0x1F1E6, 0x1F1FF),  # regional indicators
    (0x1F3FB, 0x1F3FF),  # skin tones
)


def _is_control(cp: int) -> bool:
    return cp < 0x20 or 0x7F <= cp <= 0x9F


def grapheme_width(g: str) -> int:
    """Cells taken by one grapheme cluster: 0, 1 or 2."""
    if not g:
        return 0
    if len(g) == 1:
        return 0 if _is_control(ord(g)) else max(wcwidth.wcwidth(g), 0)

    if any(lo <= ord(ch) <= hi for ch in g for lo, hi in _EMOJI_MARKERS):
        return 2
    base = g[0]
    if ord(base) >= 0x1F000:
        return 2
    category = unicodedata.category(base)
    if category == "Cf" or category.startswith("M"):
        return 0
    return max(wcwidth.wcwidth(base), 0)


def graphemes(text: str) -> list[str]:
    """Split *text* into grapheme clusters."""
    return list(text) if text.isascii() else list(grapheme.graphemes(text))


def strip_ansi(text: str) -> str:
    return _CSI_RE.sub("", text)


@functools.lru_cache(maxsize=512)
def _cluster_width(text: str) -> int:
    return sum(grapheme_width(g) for g in grapheme.graphemes(text))


def visible_width(text: str) -> int:
    """Display width of *text*, ignoring escape sequences."""
    plain = strip_ansi(text)
    if plain.isascii() and plain.isprintable():
        return len(plain)
    return _cluster_width(plain)
