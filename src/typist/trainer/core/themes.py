"""Colour themes.

A theme maps the six semantic roles the renderer uses to RGB triples.
Themes are swapped as a whole; there is no per-role override.
"""

from __future__ import annotations

import logging
from dataclasses import dataclass

logger = logging.getLogger(__name__)

RGB = tuple[int, int, int]


@dataclass(frozen=True)
class Theme:
    name: str
    correct: RGB
    incorrect: RGB
    pending: RGB
    cursor: RGB
    accent: RGB
    text: RGB


THEMES: dict[str, Theme] = {
    "Light": Theme(
        name="Light",
        correct=(0, 128, 0),
        incorrect=(200, 0, 0),
        pending=(110, 110, 110),
        cursor=(0, 0, 200),
        accent=(128, 0, 128),
        text=(20, 20, 20),
    ),
    "Dark": Theme(
        name="Dark",
        correct=(80, 250, 123),
        incorrect=(255, 85, 85),
        pending=(98, 114, 164),
        cursor=(241, 250, 140),
        accent=(189, 147, 249),
        text=(248, 248, 242),
    ),
    "Sepia": Theme(
        name="Sepia",
        correct=(112, 130, 56),
        incorrect=(178, 34, 34),
        pending=(160, 130, 100),
        cursor=(205, 133, 63),
        accent=(139, 69, 19),
        text=(245, 222, 179),
    ),
    "Matrix": Theme(
        name="Matrix",
        correct=(0, 255, 65),
        incorrect=(255, 0, 0),
        pending=(0, 100, 0),
        cursor=(200, 255, 200),
        accent=(0, 200, 0),
        text=(0, 255, 65),
    ),
    "Ocean": Theme(
        name="Ocean",
        correct=(64, 224, 208),
        incorrect=(255, 99, 71),
        pending=(70, 130, 180),
        cursor=(255, 255, 255),
        accent=(0, 191, 255),
        text=(224, 255, 255),
    ),
}

THEME_NAMES: tuple[str, ...] = tuple(THEMES)
DEFAULT_THEME = "Dark"


def get_theme(name: str) -> Theme:
    """Look up a theme by name (case-insensitive), falling back to the default."""
    for theme_name, theme in THEMES.items():
        if theme_name.lower() == name.lower():
            return theme
    logger.warning("unknown theme %r, using %s", name, DEFAULT_THEME)
    return THEMES[DEFAULT_THEME]
