"""Built-in text corpus: word lists per difficulty and a set of quotes."""

from __future__ import annotations

import logging
import random

from typist.trainer.core.config import Custom, Difficulty, Quote, SessionConfig, Timed, Words
from typist.trainer.core.text_source import TextSource

logger = logging.getLogger(__name__)

EASY_WORDS = [
    "the", "be", "to", "of", "and", "a", "in", "that", "have", "it",
    "for", "not", "on", "with", "he", "as", "you", "do", "at", "this",
    "but", "his", "by", "from", "they", "we", "say", "her", "she", "or",
    "an", "will", "my", "one", "all", "would", "there", "what", "so", "up",
    "out", "if", "about", "who", "get", "go", "me", "when", "make", "can",
    "like", "time", "no", "just", "him", "know", "take", "into", "year", "your",
    "good", "some", "could", "them", "see", "other", "than", "then", "now", "look",
]

MEDIUM_WORDS = [
    "after", "work", "first", "well", "way", "even", "new", "want", "because", "any",
    "these", "give", "day", "most", "great", "between", "need", "feel", "high", "really",
    "something", "school", "still", "system", "every", "right", "program", "next", "question", "during",
    "play", "small", "number", "again", "world", "area", "course", "company", "under", "problem",
    "hand", "place", "case", "week", "point", "group", "different", "home", "country", "away",
    "moment", "child", "part", "believe", "each", "life", "always", "those", "before", "back",
    "never", "through", "study", "must", "public", "market", "level", "night", "state", "another",
]

HARD_WORDS = [
    "government", "president", "important", "business", "everything", "community", "national", "information",
    "experience", "technology", "management", "environment", "international", "education", "organization",
    "professional", "development", "particularly", "relationship", "understanding", "responsibility",
    "significant", "opportunity", "approximately", "characteristic", "circumstances", "consideration",
    "philosophy", "rhythm", "necessary", "conscientious", "accommodate", "bureaucracy", "entrepreneur",
    "questionnaire", "miscellaneous", "surveillance", "exaggerate", "acquaintance", "parliament",
    "Wednesday", "February", "pharaoh", "mischievous", "liaison", "millennium", "occurrence", "recommend",
]

QUOTES = [
    "The quick brown fox jumps over the lazy dog.",
    "Simplicity is prerequisite for reliability.",
    "Programs must be written for people to read, and only incidentally for machines to execute.",
    "The best way to predict the future is to invent it.",
    "Premature optimization is the root of all evil in programming, or at least most of it.",
    "Any fool can write code that a computer can understand. Good programmers write code that humans "
    "can understand.",
    "First, solve the problem. Then, write the code.",
    "Talk is cheap. Show me the code.",
    "It always seems impossible until it is done, and then it seems as if it could never have been "
    "any other way at all.",
    "Do not go where the path may lead, go instead where there is no path and leave a trail behind "
    "you for others to follow.",
    "In the middle of every difficulty lies opportunity, and the trick is noticing it before it "
    "slips quietly away again.",
    "Whether you think you can, or you think you cannot, you are right, and that belief shapes "
    "nearly everything that follows.",
]

DEFAULT_CUSTOM_TEXT = "Set customText in your settings file to practise with your own text."

# Words generated per second of a timed test
TIMED_WORDS_PER_SECOND = 3


class Corpus:
    """Generates target text for a test configuration.

    Pass a seeded ``random.Random`` for reproducible output.
    """

    def __init__(
        self,
        rng: random.Random | None = None,
        *,
        custom_text: str | None = None,
        custom_words: list[str] | None = None,
    ) -> None:
        self._rng = rng or random.Random()
        self.custom_text = custom_text
        self.custom_words = list(custom_words or [])

    def word_list(self, difficulty: Difficulty) -> list[str]:
        match difficulty:
            case Difficulty.EASY:
                return EASY_WORDS
            case Difficulty.MEDIUM:
                return MEDIUM_WORDS
            case Difficulty.HARD:
                return HARD_WORDS
            case Difficulty.CUSTOM:
                if self.custom_words:
                    return self.custom_words
                logger.warning("custom difficulty selected without custom words; using medium")
                return MEDIUM_WORDS
        raise ValueError(f"unknown difficulty: {difficulty!r}")

    def words(self, difficulty: Difficulty, count: int) -> str:
        pool = self.word_list(difficulty)
        return " ".join(self._rng.choice(pool) for _ in range(max(0, count)))

    def quote(self) -> str:
        return self._rng.choice(QUOTES)

    def text_for(self, config: SessionConfig) -> TextSource:
        """Build the target text for one test."""
        match config.test_mode:
            case Timed(seconds):
                count = max(10, seconds * TIMED_WORDS_PER_SECOND)
                return TextSource(self.words(config.difficulty, count))
            case Words(count):
                return TextSource(self.words(config.difficulty, count))
            case Quote():
                return TextSource(self.quote(), is_scrollable=True)
            case Custom():
                text = " ".join((self.custom_text or DEFAULT_CUSTOM_TEXT).split())
                return TextSource(text)
        raise ValueError(f"unknown test mode: {config.test_mode!r}")
