from rich.align import Align
from rich.console import Group, RenderableType
from rich.panel import Panel
from rich.table import Table
from rich.text import Text

from team_dashboard.models.team import Team
from team_dashboard.models.view_state import ViewState


def render_dashboard(state: ViewState) -> RenderableType:
    """Builds the whole dashboard from a state snapshot."""
    parts = [_render_header(), _render_form(state), _render_body(state), _render_pagination(state)]
    if state.popup_team is not None:
        parts.append(_render_popup(state))
    return Group(*parts)


def _render_header() -> RenderableType:
    title = Text("Team Dashboard", style="bold magenta", justify="center")
    subtitle = Text("Explore team details and add new teams.", style="dim", justify="center")
    return Group(title, subtitle)


def _render_form(state: ViewState) -> RenderableType:
    form = Text()
    form.append("Name: ", style="bold")
    form.append(state.new_team_name or "-")
    form.append("   Score: ", style="bold")
    form.append(state.new_score or "-")
    return Panel(form, title="Add Team", border_style="blue")


def _render_body(state: ViewState) -> RenderableType:
    if state.loading:
        return Text("Loading teams...", style="italic")
    if not state.teams:
        return Text("No teams found. Add one!", style="italic")

    table = Table(expand=True)
    table.add_column("#", justify="right", style="dim", width=3)
    table.add_column("Team", style="bold")
    table.add_column("Score", justify="right")
    for row, team in enumerate(state.teams, start=1):
        table.add_row(str(row), team.name, _score_text(team))
    return table


def _render_pagination(state: ViewState) -> RenderableType:
    bar = Text(justify="center")
    bar.append("« Previous", style="bold blue" if state.has_previous else "dim strike")
    bar.append(f"   Page {state.display_page} of {state.total_pages}   ", style="bold")
    bar.append("Next »", style="bold blue" if state.has_next else "dim strike")
    return bar


def _render_popup(state: ViewState) -> RenderableType:
    team = state.popup_team
    body = Text()
    body.append(f"Team ID: {team.id if team.id is not None else 'N/A'}\n")
    body.append(f"Score: {_score_text(team)}")
    return Align.center(
        Panel(body, title=team.name, subtitle="close", border_style="magenta", width=40)
    )


def _score_text(team: Team) -> str:
    return "-" if team.score is None else str(team.score)
