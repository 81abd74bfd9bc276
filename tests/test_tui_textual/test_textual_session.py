"""Pilot-driven smoke tests for the Textual runtime."""

import pytest
from textual.widgets import DataTable, Input

from watchman.tui.session import Mode
from watchman.tui.textual_app import WatchmanTextualApp


async def _settle(pilot, app, mode):
    for _ in range(100):
        await pilot.pause(0.02)
        if app.machine.state.mode is mode:
            return
    raise AssertionError(f"session never reached {mode}")


def _app(runner, copies):
    def fake_copy(text):
        copies.append(text)
        return True, "✓ Copied to clipboard!"

    return WatchmanTextualApp(runner=runner, warnings=[], copy=fake_copy)


@pytest.mark.asyncio
async def test_menu_to_result_and_back(fake_runner):
    copies = []
    app = _app(fake_runner, copies)

    async with app.run_test(size=(120, 40)) as pilot:
        assert app.query_one("#menu", DataTable).row_count == 35
        assert app.machine.state.viewport.height == 40

        await pilot.press("enter")
        await _settle(pilot, app, Mode.COLLECTING_TARGET)
        assert app.query_one("#prompt-input", Input).display is True

        await pilot.press(*"10.0.0.5")
        await pilot.press("enter")
        await _settle(pilot, app, Mode.SHOWING_RESULT)
        assert fake_runner.calls == [(1, "10.0.0.5", "")]

        await pilot.press("c")
        await pilot.pause()
        assert copies == [fake_runner.outcome.text]

        await pilot.press("escape")
        await _settle(pilot, app, Mode.MENU)
        assert app.machine.state.last_result is None


@pytest.mark.asyncio
async def test_escape_backs_out_of_target_prompt(fake_runner):
    app = _app(fake_runner, [])

    async with app.run_test(size=(120, 40)) as pilot:
        await pilot.press("j", "j", "enter")
        await _settle(pilot, app, Mode.COLLECTING_TARGET)
        assert app.machine.state.selected_action.name == "Quick Check"

        await pilot.press("escape")
        await _settle(pilot, app, Mode.MENU)
        assert fake_runner.calls == []


@pytest.mark.asyncio
async def test_escape_cancels_running_scan(gated_runner):
    app = _app(gated_runner, [])

    async with app.run_test(size=(120, 40)) as pilot:
        await pilot.press("k")
        for _ in range(11):
            await pilot.press("down")
        await pilot.press("enter")
        await _settle(pilot, app, Mode.RUNNING)
        assert app.machine.state.selected_action.name == "My Public IP"

        await pilot.press("escape")
        await _settle(pilot, app, Mode.MENU)
        assert app.machine.state.status.text == "Cancelled: My Public IP"
        await pilot.pause(0.1)
        assert app.machine.state.mode is Mode.MENU


@pytest.mark.asyncio
async def test_help_toggle_and_quit(fake_runner):
    app = _app(fake_runner, [])

    async with app.run_test(size=(120, 40)) as pilot:
        await pilot.press("question_mark")
        await pilot.pause()
        assert app.machine.state.help_visible is True
        assert app.query_one("#menu", DataTable).display is False

        await pilot.press("question_mark")
        await pilot.pause()
        assert app.machine.state.help_visible is False

        await pilot.press("q")
        await pilot.pause()
        assert app.machine.state.finished is True
