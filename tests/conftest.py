"""Shared fixtures: a controllable clock and ready-made sessions."""

from __future__ import annotations

import random
from dataclasses import dataclass

import pytest

from typist.trainer.core.config import Config, Custom
from typist.trainer.core.corpus import Corpus
from typist.trainer.core.session import Session
from typist.trainer.core.settings import SettingsManager


@dataclass
class FakeClock:
    t: float = 0.0

    def now(self) -> float:
        return self.t

    def advance(self, dt: float) -> None:
        self.t += float(dt)


def make_session(config: Config | None = None, clock: FakeClock | None = None) -> Session:
    """Session with seeded text, in-memory settings, already in the typing view."""
    config = config or Config()
    session = Session(
        config,
        settings=SettingsManager.in_memory(),
        corpus=Corpus(random.Random(7), custom_text=config.custom_text),
        clock=clock or FakeClock(),
    )
    session.handle_key("escape")
    return session


def type_text(session: Session, text: str) -> None:
    for ch in text:
        session.handle_key(ch)


@pytest.fixture
def clock() -> FakeClock:
    return FakeClock()


@pytest.fixture
def custom_session(clock: FakeClock) -> Session:
    """A session typing the fixed text ``"the cat sat"``."""
    return make_session(Config(test_mode=Custom(), custom_text="the cat sat"), clock)
