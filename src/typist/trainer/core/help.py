"""Help screen content.

``HELP_LINES`` is a list of ``(text, is_heading)`` pairs; the renderer
bolds headings and the session clamps the scroll offset to its length.
"""

from __future__ import annotations

from typist import __version__

HelpLine = tuple[str, bool]


def _section(title: str, *lines: str) -> list[HelpLine]:
    return [(title, True)] + [(line, False) for line in lines] + [("", False)]


HELP_LINES: list[HelpLine] = [
    *_section(
        "KEYBOARD CONTROLS",
        "• Esc: Open menu / Close menu / Cancel current test",
        "• Tab: Quick restart test",
        "• Ctrl+C: Exit application",
        "• ↑/↓: Navigate menus or scroll help",
        "• Enter: Select menu option",
    ),
    *_section(
        "TEST MODES",
        "• Timed: Type as many words as possible within time limit",
        "• Words: Type a specific number of words",
        "• Quote: Type a random quote",
        "• Custom: Type custom text (set in settings file)",
    ),
    *_section(
        "SETTINGS",
        "• Repeat Mode: Practice the same text multiple times",
        "  - Perfect for practicing problematic words",
        "  - Settings cannot be changed while active",
        "• End on First Error: Test stops on first mistake",
        "  - Useful for perfect accuracy practice",
    ),
    *_section(
        "STATISTICS",
        "• WPM (Words Per Minute): Based on 5 characters = 1 word",
        "• Raw WPM: Speed without error penalty",
        "• Accuracy: Percentage of correct characters",
    ),
    *_section(
        "THEMES",
        "• Light: High contrast light theme",
        "• Dark: High contrast dark theme",
        "• Sepia: Easy on the eyes, warm colors",
        "• Matrix: Classic green on black",
        "• Ocean: Calming blue tones",
    ),
    *_section(
        "CREDITS",
        "typist - a terminal typing-speed test",
        "Settings live in ~/.typist/settings.json",
        f"Version {__version__}",
    ),
    ("Use ↑/↓ to scroll, Esc to return to menu", False),
]
