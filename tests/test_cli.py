"""Tests for argument parsing, run overrides and logging setup."""

from __future__ import annotations

import logging

import pytest

from typist.trainer import cli
from typist.trainer.core.config import Difficulty, Quote, Words


@pytest.fixture
def restore_logging():
    root = logging.getLogger()
    handlers, level = root.handlers[:], root.level
    yield
    for handler in root.handlers:
        if handler not in handlers:
            handler.close()
    root.handlers[:] = handlers
    root.setLevel(level)


# --- parse_args / overrides ---


def test_no_args_means_no_overrides():
    args = cli.parse_args([])
    assert args.log_level == "info"
    assert cli.overrides_from_args(args) == {}


def test_timed_override():
    args = cli.parse_args(["-t", "60", "-d", "hard", "--theme", "Ocean"])
    assert cli.overrides_from_args(args) == {
        "testMode": {"type": "timed", "seconds": 60},
        "difficulty": "hard",
        "theme": "Ocean",
    }


def test_words_and_quote_overrides():
    assert cli.overrides_from_args(cli.parse_args(["--words", "25"])) == {
        "testMode": {"type": "words", "count": 25}
    }
    assert cli.overrides_from_args(cli.parse_args(["-q"])) == {"testMode": {"type": "quote"}}


def test_modes_are_exclusive():
    with pytest.raises(SystemExit):
        cli.parse_args(["-t", "30", "-w", "10"])


@pytest.mark.parametrize("value", ["0", "-5", "ten"])
def test_length_must_be_positive(value):
    with pytest.raises(SystemExit):
        cli.parse_args(["-t", value])


def test_unknown_theme_rejected():
    with pytest.raises(SystemExit):
        cli.parse_args(["--theme", "Neon"])


# --- setup_logging ---


def test_logging_goes_to_file(tmp_path, restore_logging):
    log_file = tmp_path / "logs" / "typist.log"
    cli.setup_logging("debug", str(log_file))
    logging.getLogger("typist.test").debug("hello from the test")
    for handler in logging.getLogger().handlers:
        handler.flush()
    content = log_file.read_text()
    assert "[DEBUG] typist.test: hello from the test" in content


def test_logging_off(tmp_path, restore_logging):
    cli.setup_logging("off", str(tmp_path / "typist.log"))
    logging.getLogger("typist.test").error("dropped")
    assert not (tmp_path / "typist.log").exists()


# --- main ---


def test_main_runs_with_overrides(tmp_path, monkeypatch, restore_logging):
    seen = []

    async def fake_run_app(session):
        seen.append(session)

    monkeypatch.setattr(cli, "run_app", fake_run_app)
    code = cli.main(["--config", str(tmp_path), "-w", "10", "-d", "easy", "--log-level", "off"])
    assert code == 0
    session = seen[0]
    assert session.config.test_mode == Words(10)
    assert session.config.difficulty is Difficulty.EASY
    assert not (tmp_path / "settings.json").exists()


def test_main_keeps_saved_settings(tmp_path, monkeypatch, restore_logging):
    (tmp_path / "settings.json").write_text('{"testMode": {"type": "quote"}}')
    seen = []

    async def fake_run_app(session):
        seen.append(session)

    monkeypatch.setattr(cli, "run_app", fake_run_app)
    cli.main(["--config", str(tmp_path), "--log-level", "off"])
    assert seen[0].config.test_mode == Quote()


def test_main_interrupted(tmp_path, monkeypatch, restore_logging):
    async def interrupted(session):
        raise KeyboardInterrupt

    monkeypatch.setattr(cli, "run_app", interrupted)
    assert cli.main(["--config", str(tmp_path), "--log-file", str(tmp_path / "t.log")]) == 130
    assert "interrupted" in (tmp_path / "t.log").read_text()
