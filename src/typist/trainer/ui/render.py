"""Draw a session into a cell buffer.

``render_frame`` is a pure function of the session and the terminal size.
It reads the session and never changes it, so every view can be tested
without a terminal.
"""

from __future__ import annotations

from typing import TYPE_CHECKING

from typist.trainer.core.config import Quote, Timed, Words
from typist.trainer.core.help import HELP_LINES
from typist.trainer.core.menu import (
    CustomTimedInput,
    CustomWordsInput,
    DifficultyMenu,
    Help,
    MainMenu,
    MenuState,
    SettingsMenu,
    TestComplete,
    TestModeMenu,
    ThemeMenu,
    TimeMenu,
    WordCountMenu,
    menu_items,
)
from typist.trainer.core.text_source import CharClass, classify, display_window
from typist.trainer.ui.layout import (
    CompletionView,
    MainView,
    StatsView,
    app_title,
    chart_data,
    completion_popup,
    completion_two_columns,
    frame_layout,
    header_info,
    main_view,
    menu_popup,
    progress_percent,
    stats_view,
    too_small_message,
    typing_header,
    typing_text_area,
    warning_popup,
)
from typist.tui.buffer import Buffer, Modifier, Style
from typist.tui.layout import Direction, Length, Min, Percentage, Rect, split
from typist.tui.widgets import (
    Alignment,
    Axis,
    Block,
    Borders,
    BorderType,
    Chart,
    Dataset,
    Gauge,
    Line,
    Marker,
    Paragraph,
    Span,
)

if TYPE_CHECKING:
    from typist.trainer.core.session import Session

BOLD = Style(modifiers=Modifier.BOLD)
WHITE = Style(fg="white")
WHITE_BOLD = Style(fg="white", modifiers=Modifier.BOLD)
RED_BOLD = Style(fg="red", modifiers=Modifier.BOLD)
REVERSED = Style(modifiers=Modifier.REVERSED)

RESTART_NOTE = "Press ENTER to restart typing test"


def render_frame(session: Session, width: int, height: int) -> Buffer:
    """Draw the whole screen for *session* at the given size."""
    buf = Buffer.empty(width, height)
    layout = frame_layout(width, height)
    if layout.too_small or layout.main is None or layout.stats is None:
        Paragraph(too_small_message(width, height), alignment=Alignment.CENTER, style=RED_BOLD).render(
            buf.area, buf
        )
        return buf

    match main_view(session):
        case MainView.WARNING:
            draw_warning(session, buf, layout.main)
        case MainView.TEST_COMPLETE:
            draw_test_complete(session, buf, layout.main)
        case MainView.MENU:
            draw_menu(session, buf, layout.main)
        case MainView.TYPING:
            draw_typing_area(session, buf, layout.main)

    draw_stats(session, buf, layout.stats)
    return buf


# ---------------------------------------------------------------------------
# Typing view
# ---------------------------------------------------------------------------


def draw_typing_area(session: Session, buf: Buffer, area: Rect) -> None:
    if area.width < 30 or area.height < 5:
        Paragraph("Terminal too small", alignment=Alignment.CENTER, style=WHITE).render(area, buf)
        return

    header = typing_header(header_info(session), area.width)
    block = Block(
        title=header.first,
        title_style=WHITE_BOLD,
        borders=Borders.ALL,
        border_type=BorderType.ROUNDED,
    )
    block.render(area, buf)
    inner = block.inner(area)

    if header.second is not None and inner.height > 1:
        buf.set_string(inner.x, inner.y, header.second, WHITE_BOLD, inner.width)
        if header.third is not None and inner.height > 2:
            buf.set_string(inner.x, inner.y + 1, header.third, WHITE_BOLD, inner.width)

    text_area = typing_text_area(inner, header)
    if text_area.height > 0:
        draw_typing_text(session, buf, text_area)


def typing_spans(session: Session, width: int) -> list[Span]:
    """Styled characters of the visible target text, overrun and cursor."""
    theme = session.theme
    full_text = session.text_source.full_text
    typed = session.typed_text
    cursor = session.cursor_pos
    start, end = display_window(full_text, cursor, width, session.text_source.is_scrollable)

    styles = {
        CharClass.CORRECT: Style(fg=theme.correct),
        CharClass.INCORRECT: Style(fg=theme.incorrect),
        CharClass.CURSOR: Style(fg=theme.cursor, modifiers=Modifier.REVERSED),
        CharClass.PENDING: Style(fg=theme.pending),
    }

    spans = [
        Span(ch, styles[classify(typed, full_text, start + i, cursor)])
        for i, ch in enumerate(full_text[start:end])
    ]

    # Extra characters typed past the end of the text
    for i, ch in enumerate(typed[len(full_text) :]):
        pos = len(full_text) + i
        style = Style(fg=theme.incorrect)
        if pos == cursor:
            style = style.add_modifier(Modifier.REVERSED)
        spans.append(Span(ch, style))

    if cursor >= len(typed) and cursor >= len(full_text):
        spans.append(Span(" ", Style(fg=theme.cursor, modifiers=Modifier.REVERSED)))
    return spans


def draw_typing_text(session: Session, buf: Buffer, area: Rect) -> None:
    Paragraph([Line(typing_spans(session, area.width))], wrap=True).render(area, buf)


# ---------------------------------------------------------------------------
# Test complete view
# ---------------------------------------------------------------------------


def _stats_line(session: Session) -> str:
    s = session.stats
    return f"WPM: {s.wpm:.1f} | Raw WPM: {s.raw_wpm:.1f} | Acc: {s.accuracy:.1f}%"


def _labelled(label: str, value: str) -> Line:
    return Line([Span(label), Span(value, BOLD)])


def _mode_summary(session: Session) -> str:
    match session.config.test_mode:
        case Timed(seconds):
            return f"Timed - {seconds}s"
        case Words(count):
            return f"Words - {count}"
        case Quote():
            return "Quote"
        case _:
            return "Custom"


def draw_test_complete(session: Session, buf: Buffer, area: Rect) -> None:  # noqa: C901
    view, popup = completion_popup(area)
    text_style = Style(fg=session.theme.text)

    if view is CompletionView.TEXT:
        Paragraph("Test Complete\nPress ENTER to restart", alignment=Alignment.CENTER, style=WHITE).render(
            area, buf
        )
        return

    if view is CompletionView.COMPACT:
        block = Block(title=" Test Complete ", title_style=WHITE, borders=Borders.ALL)
        block.render(area, buf)
        Paragraph(
            [Line([Span(_stats_line(session), BOLD)]), Line.raw("Press ENTER to restart")],
            alignment=Alignment.CENTER,
        ).render(block.inner(area), buf)
        return

    Block(style=Style(bg="black")).render(popup, buf)
    block = Block(
        title=f" {app_title(session.config.repeat_test)} - TEST COMPLETE ",
        title_style=WHITE_BOLD,
        borders=Borders.ALL,
        border_style=WHITE,
    )
    block.render(popup, buf)
    inner = block.inner(popup)
    stats = session.stats
    reason = session.test_end_reason
    config = session.config

    two_columns = completion_two_columns(inner)
    if two_columns:
        columns = split(inner, Direction.HORIZONTAL, [Percentage(50), Percentage(50)])
    else:
        columns = [inner]

    if inner.height < 8:
        results = [Line([Span(_stats_line(session), BOLD)])]
    else:
        results = [
            Line([Span("TEST RESULTS", BOLD)]),
            Line(),
            _labelled("WPM: ", f"{stats.wpm:.1f}"),
            _labelled("Raw WPM: ", f"{stats.raw_wpm:.1f}"),
            _labelled("Accuracy: ", f"{stats.accuracy:.1f}%"),
            _labelled("Time: ", f"{session.duration:.1f}s"),
        ]
    if reason:
        results.append(Line())
        results.append(Line([Span("Note: "), Span(reason, RED_BOLD)]))

    settings = [
        Line([Span("TEST SETTINGS", BOLD)]),
        Line(),
        _labelled("Mode: ", _mode_summary(session)),
        _labelled("Difficulty: ", config.difficulty.label),
        _labelled("Repeat Mode: ", "ON" if config.repeat_test else "OFF"),
        _labelled("End on First Error: ", "ON" if config.end_on_first_error else "OFF"),
        Line(),
    ]

    if two_columns:
        Block(borders=Borders.LEFT, border_style=WHITE).render(columns[1], buf)

    total_height = inner.height
    note = Paragraph(
        [Line([Span(RESTART_NOTE, text_style)], alignment=Alignment.CENTER)],
        alignment=Alignment.CENTER,
        style=WHITE,
    )

    if not two_columns:
        if total_height < 8:
            lines = [Line([Span(_stats_line(session), BOLD)])]
            if reason:
                lines.append(Line([Span(reason, RED_BOLD)]))
            lines.append(Line([Span("Press ENTER to restart", text_style)]))
        else:
            lines = results + [Line(), Line()] + settings

        content_height = len(lines)
        padding = (total_height - content_height) // 2 if total_height > content_height else 0
        content = _padded(columns[0], padding, content_height)
        Paragraph(lines, alignment=Alignment.CENTER, style=WHITE).render(content, buf)

        if total_height >= 8:
            col = columns[0]
            note_y = max(0, col.bottom - 2)
            if note_y > col.y:
                note.render(Rect(col.x, note_y, col.width, 1), buf)
        return

    content_height = max(len(results), len(settings))
    padding = (total_height - content_height) // 2 if total_height > content_height else 0
    left = _padded(columns[0], padding, content_height)
    right = _padded(columns[1], padding, content_height)
    Paragraph(results, alignment=Alignment.CENTER, style=WHITE).render(left, buf)
    Paragraph(settings, alignment=Alignment.CENTER, style=WHITE).render(right, buf)

    col = columns[0]
    if col.height > content_height + padding + 2:
        note.render(Rect(col.x, col.bottom - 2, col.width, 1), buf)


def _padded(column: Rect, padding: int, content_height: int) -> Rect:
    return split(column, Direction.VERTICAL, [Length(padding), Min(content_height), Min(1)])[1]


# ---------------------------------------------------------------------------
# Stats region
# ---------------------------------------------------------------------------


def draw_stats(session: Session, buf: Buffer, area: Rect) -> None:
    match stats_view(area):
        case StatsView.NONE:
            return
        case StatsView.COMPACT:
            s = session.stats
            Paragraph(
                f"WPM: {s.wpm:.0f} Raw WPM: {s.raw_wpm:.0f} Acc: {s.accuracy:.0f}%",
                alignment=Alignment.CENTER,
                style=Style(fg=session.theme.correct),
            ).render(area, buf)
        case StatsView.MINIMAL_GAUGE:
            Gauge(
                percent=_accuracy_percent(session),
                label=f"{session.stats.accuracy:.1f}%",
                block=Block(title="Acc", borders=Borders.ALL),
                gauge_style=Style(fg=session.theme.correct),
            ).render(area, buf)
        case StatsView.GAUGES:
            draw_gauges(session, buf, area)
        case StatsView.GAUGES_AND_CHART:
            left, right = split(area, Direction.HORIZONTAL, [Length(25), Min(30)])
            draw_gauges(session, buf, left)
            draw_chart(session, buf, right)


def _accuracy_percent(session: Session) -> int:
    return min(100, int(max(0.0, min(100.0, session.stats.accuracy))))


def draw_gauges(session: Session, buf: Buffer, area: Rect) -> None:
    if area.width < 10 or area.height < 3:
        return
    theme = session.theme
    accuracy = Gauge(
        percent=_accuracy_percent(session),
        label=f"Accuracy: {session.stats.accuracy:.1f}%",
        block=Block(title="Accuracy", borders=Borders.ALL),
        gauge_style=Style(fg=theme.correct),
    )
    if area.height < 5:
        accuracy.render(area, buf)
        return

    top, bottom = split(area, Direction.VERTICAL, [Length(3), Length(3)])
    accuracy.render(top, buf)

    progress = progress_percent(session.typed_text, session.text_source)
    Gauge(
        percent=progress,
        label=f"Progress: {progress}%",
        block=Block(title="Progress", borders=Borders.ALL),
        gauge_style=Style(fg=theme.pending),
    ).render(bottom, buf)


def draw_chart(session: Session, buf: Buffer, area: Rect) -> None:
    stats = session.stats
    if area.width < 20 or area.height < 4:
        if stats.wpm_samples:
            Paragraph(
                f"WPM: {stats.wpm_samples[-1]:.1f}",
                block=Block(title="Current WPM", borders=Borders.ALL),
                alignment=Alignment.CENTER,
            ).render(area, buf)
        return

    theme = session.theme
    data = chart_data(stats.wpm_samples, stats.raw_wpm_samples)
    axis_style = Style(fg=theme.text)
    Chart(
        datasets=[
            Dataset("WPM", data.wpm, Marker.BRAILLE, Style(fg=theme.accent)),
            Dataset("Raw WPM", data.raw_wpm, Marker.DOT, Style(fg=theme.incorrect)),
        ],
        block=Block(title="WPM Over Time", borders=Borders.ALL),
        x_axis=Axis(title="Time", bounds=(0.0, data.x_max), labels=data.x_labels, style=axis_style),
        y_axis=Axis(title="WPM", bounds=(0.0, data.y_max), labels=data.y_labels, style=axis_style),
    ).render(area, buf)


# ---------------------------------------------------------------------------
# Menus
# ---------------------------------------------------------------------------


def _fallback_name(state: MenuState) -> str:
    match state:
        case MainMenu():
            return "Main Menu"
        case TestModeMenu():
            return "Test Mode"
        case DifficultyMenu():
            return "Difficulty"
        case TimeMenu():
            return "Time Limit"
        case WordCountMenu():
            return "Word Count"
        case ThemeMenu():
            return "Theme"
        case Help():
            return "Help"
        case _:
            return "Menu"


def _panel_name(state: MenuState) -> str:
    match state:
        case MainMenu():
            return "MAIN MENU"
        case TestModeMenu():
            return "TEST MODE"
        case DifficultyMenu():
            return "DIFFICULTY"
        case TimeMenu():
            return "TIME LIMIT"
        case WordCountMenu():
            return "WORD COUNT"
        case ThemeMenu():
            return "THEME"
        case CustomTimedInput():
            return "CUSTOM TIMED TEST"
        case CustomWordsInput():
            return "CUSTOM WORDS TEST"
        case SettingsMenu():
            return "SETTINGS"
        case Help():
            return "HELP"
        case TestComplete():
            return "TEST COMPLETE"
        case _:
            return ""


def _item_line(label: str, selected: bool) -> Line:
    if selected:
        return Line([Span(f"> {label} <", REVERSED)])
    return Line.raw(label)


def _numbered(state: MenuState, idx: int) -> list[Line]:
    return [_item_line(f"{i + 1}. {item}", i == idx) for i, item in enumerate(menu_items(state))]


def _numeric_prompt(prompt: str, buffer: str) -> list[Line]:
    if buffer:
        entry = Line([Span(f"{buffer} ▋", BOLD)])
    else:
        entry = Line([Span("▋", Style(modifiers=Modifier.SLOW_BLINK))])
    return [Line([Span(prompt, BOLD)]), Line(), entry, Line(), Line.raw("Press ENTER to confirm")]


def menu_lines(session: Session) -> list[Line]:
    """Body lines of the menu panel for the current state."""
    state = session.menu_state
    config = session.config
    match state:
        case MainMenu(idx) | TestModeMenu(idx) | DifficultyMenu(idx) | TimeMenu(idx) | WordCountMenu(
            idx
        ) | ThemeMenu(idx):
            return _numbered(state, idx)
        case SettingsMenu(idx):
            items = [f"{i + 1}. {item}" for i, item in enumerate(menu_items(state))]
            return [
                _item_line(items[0], idx == 0),
                Line(),
                Line.raw(f"Current: {'ON' if config.repeat_test else 'OFF'}"),
                Line(),
                _item_line(items[1], idx == 1),
                Line(),
                Line.raw(f"Current: {'ON' if config.end_on_first_error else 'OFF'}"),
                Line(),
                _item_line(items[2], idx == 2),
            ]
        case CustomTimedInput(buffer):
            return _numeric_prompt("ENTER CUSTOM TIME (SECONDS):", buffer)
        case CustomWordsInput(buffer):
            return _numeric_prompt("ENTER CUSTOM WORD COUNT:", buffer)
        case Help():
            return [Line([Span(text, BOLD)]) if heading else Line.raw(text) for text, heading in HELP_LINES]
        case _:
            return [Line.raw("Press ESC to return to typing")]


def draw_menu(session: Session, buf: Buffer, area: Rect) -> None:
    state = session.menu_state
    panel = menu_popup(area)
    if panel is None:
        Paragraph(f"{_fallback_name(state)}\nPress ESC to return", alignment=Alignment.CENTER, style=WHITE).render(
            area, buf
        )
        return

    outline = Block(
        title=f" {app_title(session.config.repeat_test)} - {_panel_name(state)} ",
        title_style=WHITE_BOLD,
        borders=Borders.ALL,
        border_style=WHITE,
    )
    outline.render(panel, buf)
    inner = outline.inner(panel)

    lines = menu_lines(session)
    if isinstance(state, Help):
        lines += [Line(), Line.raw("Press ESC to return")]
        Paragraph(lines, style=WHITE, wrap=True, scroll=session.help_scroll_offset).render(inner, buf)
    else:
        lines += [
            Line(),
            Line.raw("UP/DOWN: Navigate    ENTER: Select"),
            Line.raw("ESC: Return to typing test"),
        ]
        Paragraph(lines, alignment=Alignment.CENTER, style=WHITE).render(inner, buf)


# ---------------------------------------------------------------------------
# Repeat-mode warning
# ---------------------------------------------------------------------------


def draw_warning(session: Session, buf: Buffer, area: Rect) -> None:
    warning = session.warning_state
    if warning is None:
        return
    popup = warning_popup(area)
    if popup is None:
        Paragraph(
            "Warning: Repeat Mode active\nPress ENTER to disable",
            alignment=Alignment.CENTER,
            style=Style(fg="red"),
        ).render(area, buf)
        return

    Block(style=Style(bg="black")).render(popup, buf)
    block = Block(
        title=f" {app_title(session.config.repeat_test)} - REPEAT MODE WARNING ",
        title_style=WHITE_BOLD,
        borders=Borders.ALL,
        border_style=Style(fg="red"),
    )
    block.render(popup, buf)
    inner = block.inner(popup)

    if inner.height >= 8:
        lines = [
            Line([Span("SETTINGS CHANGE RESTRICTED", RED_BOLD)]),
            Line(),
            Line.raw(warning.action),
            Line(),
            Line.raw("Changing settings during Repeat Mode would affect test consistency."),
            Line(),
            Line([Span("ENTER", Style(fg="green", modifiers=Modifier.BOLD)), Span(": Disable Repeat Mode and continue")]),
            Line([Span("ESC", Style(fg="yellow", modifiers=Modifier.BOLD)), Span(": Cancel and return to previous menu")]),
        ]
    else:
        lines = [
            Line([Span("SETTINGS RESTRICTED", RED_BOLD)]),
            Line.raw(warning.action),
            Line.raw("ENTER: Disable Repeat Mode"),
            Line.raw("ESC: Cancel"),
        ]
    Paragraph(lines, alignment=Alignment.CENTER, style=WHITE).render(inner, buf)
