import re
from enum import Enum
from typing import Optional, Union

from loguru import logger

from team_dashboard.client.team_client import TeamApiClient, TeamApiError
from team_dashboard.config.settings import settings
from team_dashboard.models.view_state import ViewState
from team_dashboard.view.prompt import UserPrompt

# Leading integer, as typed in the score field ("42", " -3", "7 points")
SCORE_PATTERN = re.compile(r"^\s*([+-]?[0-9]+)")

INVALID_FORM_MESSAGE = "Please enter valid team name and score."
CREATE_FAILED_MESSAGE = "Could not add team."
DELETE_CONFIRM_MESSAGE = "Are you sure you want to delete this team?"
DELETE_FAILED_MESSAGE = "Could not delete team."
DETAIL_FAILED_MESSAGE = "Could not fetch team details."


class OverlayRegion(str, Enum):
    """Where a click on the open detail popup landed."""

    BACKDROP = "BACKDROP"
    CONTENT = "CONTENT"
    CLOSE_BUTTON = "CLOSE_BUTTON"


def parse_score(score_text: str) -> Optional[int]:
    """Returns the leading integer of ``score_text``, or None if there is none."""
    match = SCORE_PATTERN.match(score_text or "")
    if not match:
        return None
    return int(match.group(1))


class TeamListView:
    """Paginated team list with create, delete and detail popup.

    All state lives in an immutable :class:`ViewState` that is replaced on
    every transition; read it through :attr:`state`.

    Page loads are applied in completion order. With ``discard_stale_loads``
    enabled, only the most recently issued load may touch the state.
    """

    def __init__(
        self,
        client: TeamApiClient,
        prompt: UserPrompt,
        page_size: Optional[int] = None,
        discard_stale_loads: Optional[bool] = None,
    ):
        self.client = client
        self.prompt = prompt
        self.page_size = page_size or settings.page_size
        self.discard_stale_loads = (
            settings.discard_stale_loads
            if discard_stale_loads is None
            else discard_stale_loads
        )
        self._state = ViewState()
        self._load_token = 0
        self._initialized = False

    @property
    def state(self) -> ViewState:
        return self._state

    def _replace_state(self, **changes) -> None:
        self._state = self._state.model_copy(update=changes)

    def _is_stale(self, token: int) -> bool:
        return self.discard_stale_loads and token != self._load_token

    async def initialize(self) -> None:
        """Loads the first page. Runs once per view."""
        if self._initialized:
            logger.debug("View already initialized, skipping initial load.")
            return
        self._initialized = True
        await self.load_page(0)

    async def load_page(self, page_index: int) -> None:
        """Replaces the displayed teams with page ``page_index`` from the backend."""
        self._load_token += 1
        token = self._load_token
        self._replace_state(loading=True)
        try:
            page = await self.client.list_teams(page_index, self.page_size)
            if self._is_stale(token):
                logger.debug(f"Discarding stale response for page {page_index}")
                return
            # The echoed page number wins over the requested one
            self._replace_state(
                teams=tuple(page.content),
                current_page=page.number,
                total_pages=page.total_pages,
            )
            logger.info(
                f"Loaded page {page.number + 1} of {page.total_pages} ({len(page.content)} teams)"
            )
        except TeamApiError as e:
            logger.error(f"Failed to load teams for page {page_index}: {e}")
            if not self._is_stale(token):
                self._replace_state(teams=())
        finally:
            if not self._is_stale(token):
                self._replace_state(loading=False)

    # --- Pagination ---

    async def previous(self) -> None:
        if not self._state.has_previous:
            logger.debug("Previous page requested on the first page, ignoring.")
            return
        await self.load_page(self._state.current_page - 1)

    async def next(self) -> None:
        if not self._state.has_next:
            logger.debug("Next page requested on the last page, ignoring.")
            return
        await self.load_page(self._state.current_page + 1)

    # --- Create form ---

    def set_form(
        self, name: Optional[str] = None, score: Optional[str] = None
    ) -> None:
        """Updates the create form inputs; ``None`` leaves a field as is."""
        changes = {}
        if name is not None:
            changes["new_team_name"] = name
        if score is not None:
            changes["new_score"] = score
        if changes:
            self._replace_state(**changes)

    async def submit_form(self) -> bool:
        return await self.create_team(self._state.new_team_name, self._state.new_score)

    async def create_team(self, name: str, score_text: str) -> bool:
        """Creates a team and returns to the first page.

        Returns True when the backend accepted the team.
        """
        score = parse_score(score_text)
        if not name or score is None:
            logger.debug(f"Rejected create form: name={name!r}, score={score_text!r}")
            self.prompt.notify(INVALID_FORM_MESSAGE)
            return False

        try:
            await self.client.create_team(name, score)
        except TeamApiError as e:
            logger.error(f"Failed to add team {name!r}: {e}")
            self.prompt.notify(CREATE_FAILED_MESSAGE)
            return False

        self._replace_state(new_team_name="", new_score="")
        # Position of the new team is unknown, start over from the first page
        await self.load_page(0)
        return True

    # --- Delete ---

    async def delete_team(self, team_id: Union[int, str]) -> bool:
        """Deletes a team after confirmation and reloads the current page.

        Returns True when the team was deleted.
        """
        if not self.prompt.confirm(DELETE_CONFIRM_MESSAGE):
            logger.debug(f"Deletion of team {team_id} cancelled by user.")
            return False

        page_at_deletion = self._state.current_page
        try:
            await self.client.delete_team(team_id)
        except TeamApiError as e:
            logger.error(f"Failed to delete team {team_id}: {e}")
            self.prompt.notify(DELETE_FAILED_MESSAGE)
            return False

        await self.load_page(page_at_deletion)
        return True

    # --- Detail popup ---

    async def open_detail(self, name: str) -> None:
        try:
            team = await self.client.get_team(name)
        except TeamApiError as e:
            logger.error(f"Failed to fetch team {name!r}: {e}")
            self.prompt.notify(DETAIL_FAILED_MESSAGE)
            return
        self._replace_state(popup_team=team)

    def close_detail(self) -> None:
        self._replace_state(popup_team=None)

    def click_overlay(self, region: OverlayRegion) -> None:
        """Handles a click on the popup; clicks inside its content are ignored."""
        if region is OverlayRegion.CONTENT:
            return
        self.close_detail()
