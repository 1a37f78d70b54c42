"""Tests for the interactive loop, driven through a VirtualTerminal."""

from __future__ import annotations

import asyncio

import pytest

from typist.trainer.app import TypingApp, run_app
from typist.trainer.core import menu
from typist.trainer.core.config import Config, Custom, Timed
from typist.tui.stdin_buffer import BRACKETED_PASTE_END, BRACKETED_PASTE_START

from .conftest import FakeClock, make_session
from .virtual_terminal import VirtualTerminal


async def settle() -> None:
    await asyncio.sleep(0.05)


@pytest.fixture
def term() -> VirtualTerminal:
    return VirtualTerminal(rows=24, columns=90)


class TestRunApp:
    @pytest.mark.asyncio
    async def test_renders_and_quits_on_ctrl_c(self, term: VirtualTerminal, clock: FakeClock) -> None:
        session = make_session(Config(test_mode=Custom(), custom_text="the cat sat"), clock)
        task = asyncio.create_task(run_app(session, term, tick_interval=0.01))
        await settle()

        assert term.started
        assert term.title == "Typist"
        assert not term.cursor_visible
        assert any("the cat sat" in row for row in term.screen())

        term.simulate_input("\x03")
        await asyncio.wait_for(task, timeout=1.0)
        assert session.should_quit
        assert not term.started
        assert term.cursor_visible

    @pytest.mark.asyncio
    async def test_keys_reach_session(self, term: VirtualTerminal, clock: FakeClock) -> None:
        session = make_session(Config(test_mode=Custom(), custom_text="the cat sat"), clock)
        task = asyncio.create_task(run_app(session, term, tick_interval=0.01))
        await settle()

        for ch in "the":
            term.simulate_input(ch)
        term.simulate_input("\x7f")
        assert session.typed_text == "th"

        term.simulate_input("\x1b")
        await settle()
        assert isinstance(session.menu_state, menu.MainMenu)
        assert any("MAIN MENU" in row for row in term.screen())

        term.simulate_input("\x03")
        await asyncio.wait_for(task, timeout=1.0)

    @pytest.mark.asyncio
    async def test_timer_expiry_shows_results(self, term: VirtualTerminal, clock: FakeClock) -> None:
        session = make_session(Config(test_mode=Timed(15)), clock)
        task = asyncio.create_task(run_app(session, term, tick_interval=0.01))
        await settle()

        term.simulate_input(session.text_source.full_text[0])
        clock.advance(16)
        await settle()
        assert isinstance(session.menu_state, menu.TestComplete)
        assert any("TEST COMPLETE" in row for row in term.screen())

        term.simulate_input("\x03")
        await asyncio.wait_for(task, timeout=1.0)

    @pytest.mark.asyncio
    async def test_cancel_restores_terminal(self, term: VirtualTerminal, clock: FakeClock) -> None:
        session = make_session(clock=clock)
        task = asyncio.create_task(run_app(session, term, tick_interval=0.01))
        await settle()
        task.cancel()
        with pytest.raises(asyncio.CancelledError):
            await task
        assert not term.started
        assert term.cursor_visible


class TestTypingApp:
    def test_paste_is_ignored(self, custom_session) -> None:
        app = TypingApp(custom_session)
        app.handle_input(f"{BRACKETED_PASTE_START}the cat{BRACKETED_PASTE_END}")
        assert custom_session.typed_text == ""

    def test_unknown_sequence_is_ignored(self, custom_session) -> None:
        app = TypingApp(custom_session)
        app.handle_input("\x1b[99z")
        assert custom_session.typed_text == ""

    def test_quit_sets_event(self, custom_session) -> None:
        app = TypingApp(custom_session)
        app.handle_input("\x03")
        assert app.quit_event.is_set()

    def test_render_fills_terminal(self, custom_session) -> None:
        lines = TypingApp(custom_session).render(82, 22)
        assert len(lines) == 22
