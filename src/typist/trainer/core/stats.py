"""Speed and accuracy statistics.

WPM counts five characters as one word.  WPM uses correctly typed
characters, raw WPM uses every typed character, and both share the same
elapsed-time denominator.
"""

from __future__ import annotations

import logging
from dataclasses import dataclass, field

logger = logging.getLogger(__name__)

CHARS_PER_WORD = 5


def calculate_wpm(chars: int, elapsed_s: float) -> float:
    """Calculate words per minute, or 0.0 when no time has passed."""
    if elapsed_s <= 0:
        return 0.0
    return (chars / CHARS_PER_WORD) / (elapsed_s / 60.0)


def calculate_accuracy(correct: int, total: int) -> float:
    """Percentage of correct characters, 0.0 when nothing was typed."""
    if total <= 0:
        return 0.0
    return 100.0 * correct / total


@dataclass
class StatsState:
    wpm: float = 0.0
    raw_wpm: float = 0.0
    accuracy: float = 0.0
    wpm_samples: list[float] = field(default_factory=list)
    raw_wpm_samples: list[float] = field(default_factory=list)
    # Set once the test is finished
    duration_s: float | None = None


class StatsEngine:
    """Live statistics for one test, frozen when the test finishes."""

    def __init__(self) -> None:
        self.state = StatsState()

    @property
    def finished(self) -> bool:
        return self.state.duration_s is not None

    def reset(self) -> None:
        self.state = StatsState()

    def update(self, correct: int, total: int, elapsed_s: float) -> None:
        """Refresh the live values."""
        if self.finished:
            return
        self.state.wpm = calculate_wpm(correct, elapsed_s)
        self.state.raw_wpm = calculate_wpm(total, elapsed_s)
        self.state.accuracy = calculate_accuracy(correct, total)

    def sample(self, elapsed_s: float) -> int:
        """Append one sample per whole elapsed second not yet sampled.

        Returns the number of samples appended.
        """
        if self.finished:
            return 0
        added = 0
        while len(self.state.wpm_samples) < int(elapsed_s):
            self.state.wpm_samples.append(self.state.wpm)
            self.state.raw_wpm_samples.append(self.state.raw_wpm)
            added += 1
        return added

    def finish(self, correct: int, total: int, duration_s: float) -> StatsState:
        """Freeze the final snapshot; later updates and samples are ignored."""
        if not self.finished:
            self.update(correct, total, duration_s)
            self.state.duration_s = max(0.0, duration_s)
            logger.debug(
                "stats frozen: wpm=%.1f raw=%.1f acc=%.1f samples=%d",
                self.state.wpm,
                self.state.raw_wpm,
                self.state.accuracy,
                len(self.state.wpm_samples),
            )
        return self.state
