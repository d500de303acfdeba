from typing import Optional, Tuple

from pydantic import BaseModel, ConfigDict, computed_field

from team_dashboard.models.team import Team


class ViewState(BaseModel):
    """Snapshot of everything the dashboard renders.

    Instances are immutable; every transition produces a new snapshot.
    """

    model_config = ConfigDict(frozen=True)

    teams: Tuple[Team, ...] = ()
    loading: bool = True
    current_page: int = 0
    total_pages: int = 1
    popup_team: Optional[Team] = None

    # Create form inputs
    new_team_name: str = ""
    new_score: str = ""

    @computed_field  # type: ignore[misc]
    @property
    def has_previous(self) -> bool:
        return self.current_page > 0

    @computed_field  # type: ignore[misc]
    @property
    def has_next(self) -> bool:
        # Also false when the backend reports no pages at all
        return self.current_page < self.total_pages - 1

    @computed_field  # type: ignore[misc]
    @property
    def display_page(self) -> int:
        """1-based page number shown to the user."""
        return self.current_page + 1

    @property
    def popup_open(self) -> bool:
        return self.popup_team is not None
