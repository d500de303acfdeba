import sys
import asyncio
from typing import List, Optional

from team_dashboard.logging.setup import setup_logging
from team_dashboard.config.settings import settings

setup_logging()

from loguru import logger

from team_dashboard.client.team_client import TeamApiClient
from team_dashboard.models.team import Team
from team_dashboard.view.prompt import ConsolePrompt
from team_dashboard.view.render import render_dashboard
from team_dashboard.view.team_list_view import OverlayRegion, TeamListView

from rich.console import Console
from rich.prompt import Prompt

HELP_TEXT = (
    "[bold]n[/bold]ext  [bold]p[/bold]rev  [bold]r[/bold]eload  add  "
    "del <row>  show <row>  close  [bold]q[/bold]uit"
)


def _team_at_row(teams: List[Team], arg: Optional[str]) -> Optional[Team]:
    """Maps a 1-based row number from the rendered table to a team."""
    if arg is None or not (arg.isascii() and arg.isdigit()):
        return None
    row = int(arg)
    if 1 <= row <= len(teams):
        return teams[row - 1]
    return None


async def handle_command(
    view: TeamListView, console: Console, command: str
) -> bool:
    """Runs one console command. Returns False when the session should end."""
    name, _, arg = command.strip().partition(" ")
    name = name.lower()
    arg = arg.strip() or None

    if name in ("q", "quit", "exit"):
        return False
    if name in ("n", "next"):
        await view.next()
    elif name in ("p", "prev", "previous"):
        await view.previous()
    elif name in ("r", "reload"):
        await view.load_page(view.state.current_page)
    elif name == "add":
        team_name = await asyncio.to_thread(Prompt.ask, "Team name", console=console)
        score = await asyncio.to_thread(Prompt.ask, "Team score", console=console)
        view.set_form(name=team_name, score=score)
        await view.submit_form()
    elif name in ("del", "delete", "show"):
        team = _team_at_row(list(view.state.teams), arg)
        if team is None:
            console.print(f"[red]No team at row {arg!r}.[/red]")
        elif name == "show":
            await view.open_detail(team.name)
        elif team.id is None:
            console.print(f"[red]Team {team.name!r} has no id yet.[/red]")
        else:
            await view.delete_team(team.id)
    elif name == "close":
        view.click_overlay(OverlayRegion.CLOSE_BUTTON)
    elif name:
        console.print(f"[red]Unknown command {name!r}.[/red]")
    return True


async def main() -> None:
    """Main entry point for the interactive dashboard."""
    logger.info(f"Starting Team Dashboard against {settings.base_url}")
    console = Console()

    async with TeamApiClient() as client:
        view = TeamListView(client, ConsolePrompt(console))
        await view.initialize()

        while True:
            console.print(render_dashboard(view.state))
            console.print(HELP_TEXT)
            command = await asyncio.to_thread(console.input, "> ")
            if not await handle_command(view, console, command):
                break

    logger.info("Team Dashboard session ended.")


def run() -> None:
    try:
        asyncio.run(main())
    except (KeyboardInterrupt, EOFError):
        logger.info("Execution interrupted by user.")
        sys.exit(0)
    except Exception as e:
        logger.exception(f"Unhandled exception in main execution: {e}")
        sys.exit(1)


if __name__ == "__main__":
    run()
