"""Tests for the interactive console commands."""

from rich.console import Console

import main
from main import handle_command


def _console() -> Console:
    return Console(record=True, width=100, color_system=None)


class TestHandleCommand:
    async def test_quit(self, view):
        assert await handle_command(view, _console(), "q") is False

    async def test_navigation(self, view, backend):
        console = _console()
        await view.initialize()
        assert await handle_command(view, console, "next") is True
        assert await handle_command(view, console, "n") is True
        assert await handle_command(view, console, "prev") is True
        assert await handle_command(view, console, "reload") is True
        assert backend.requested_pages() == [0, 1, 2, 1, 1]

    async def test_show_and_close_by_row(self, view):
        console = _console()
        await view.initialize()
        await handle_command(view, console, "show 2")
        assert view.state.popup_team.name == "T2"
        await handle_command(view, console, "close")
        assert view.state.popup_team is None

    async def test_delete_by_row(self, view, backend):
        await view.load_page(1)
        await handle_command(view, _console(), "del 1")
        assert backend.requests_for("DELETE")[-1].url.path == "/team/7"

    async def test_bad_row(self, view, backend):
        console = _console()
        await view.initialize()
        await handle_command(view, console, "show 99")
        assert "No team at row '99'" in console.export_text()
        assert view.state.popup_team is None

    async def test_add_prompts_for_fields(self, view, backend, monkeypatch):
        answers = iter(["T77", "12"])
        monkeypatch.setattr(main.Prompt, "ask", lambda *args, **kwargs: next(answers))
        await view.load_page(1)
        await handle_command(view, _console(), "add")
        assert backend.teams[-1]["name"] == "T77"
        assert view.state.current_page == 0

    async def test_unknown_command(self, view):
        console = _console()
        assert await handle_command(view, console, "dance") is True
        assert "Unknown command 'dance'" in console.export_text()

    async def test_non_ascii_digit_row(self, view, backend):
        """Digits outside ASCII are rejected like any other bad row."""
        console = _console()
        await view.initialize()
        assert await handle_command(view, console, "show ²") is True
        assert await handle_command(view, console, "del ٣") is True
        assert "No team at row '²'" in console.export_text()
        assert view.state.popup_team is None
        assert backend.requests_for("DELETE") == []
