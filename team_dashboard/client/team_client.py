from typing import Any, Dict, Optional, Type, TypeVar, Union
from urllib.parse import quote

import httpx
from loguru import logger
from pydantic import BaseModel
from tenacity import (
    AsyncRetrying,
    retry_if_exception_type,
    stop_after_attempt,
    wait_exponential,
)

from team_dashboard.config.settings import settings
from team_dashboard.models.page import Page
from team_dashboard.models.team import Team, TeamCreate

TEAM_PATH = "/team"

ModelT = TypeVar("ModelT", bound=BaseModel)


class TeamApiError(Exception):
    """Custom exception for failed calls to the team backend."""

    pass


class TeamApiTransportError(TeamApiError):
    """Exception raised when the backend could not be reached."""

    pass


class TeamApiStatusError(TeamApiError):
    """Exception raised for any non-2xx response."""

    def __init__(self, message: str, status_code: int):
        super().__init__(message)
        self.status_code = status_code


class TeamApiClient:
    """Async client for the team REST backend."""

    def __init__(
        self,
        client: Optional[httpx.AsyncClient] = None,
        max_attempts: Optional[int] = None,
        retry_backoff: Optional[float] = None,
    ):
        if client is None:
            client_kwargs: Dict[str, Any] = {
                "base_url": settings.base_url,
                "follow_redirects": True,
            }
            if settings.request_timeout is not None:
                client_kwargs["timeout"] = httpx.Timeout(settings.request_timeout)
            client = httpx.AsyncClient(**client_kwargs)
        self.client = client
        self.max_attempts = max_attempts or settings.max_attempts
        self.retry_backoff = (
            settings.retry_backoff if retry_backoff is None else retry_backoff
        )

    async def __aenter__(self) -> "TeamApiClient":
        return self

    async def __aexit__(self, *exc_info) -> None:
        await self.close()

    async def list_teams(self, page_num: int, page_size: int) -> Page[Team]:
        """Fetch one page of teams."""
        response = await self._make_request(
            "GET", TEAM_PATH, params={"pageNum": page_num, "pageSize": page_size}
        )
        return self._decode(response, Page[Team])

    async def get_team(self, name: str) -> Team:
        """Fetch a single team by its name."""
        response = await self._make_request("GET", _item_path(name))
        return self._decode(response, Team)

    async def create_team(self, name: str, score: int) -> None:
        body = TeamCreate(name=name, score=score)
        await self._make_request("POST", TEAM_PATH, json_data=body.model_dump())
        logger.success(f"Created team {name!r} with score {score}")

    async def delete_team(self, team_id: Union[int, str]) -> None:
        await self._make_request("DELETE", _item_path(team_id))
        logger.success(f"Deleted team {team_id}")

    async def _make_request(
        self,
        method: str,
        path: str,
        params: Optional[Dict[str, Any]] = None,
        json_data: Optional[Dict[str, Any]] = None,
    ) -> httpx.Response:
        """Makes an HTTP request, retrying transport errors if configured."""
        log_context = {
            "method": method,
            "path": path,
            "params": params,
            "has_json": json_data is not None,
        }
        logger.debug("Making request", **log_context)
        try:
            async for attempt in AsyncRetrying(
                stop=stop_after_attempt(self.max_attempts),
                wait=wait_exponential(multiplier=self.retry_backoff, max=10),
                retry=retry_if_exception_type(httpx.RequestError),
                reraise=True,
            ):
                with attempt:
                    if attempt.retry_state.attempt_number > 1:
                        logger.warning(
                            f"Retrying {method} {path} (attempt {attempt.retry_state.attempt_number}/{self.max_attempts})"
                        )
                    response = await self.client.request(
                        method, path, params=params, json=json_data
                    )
        except httpx.RequestError as e:
            logger.error(f"Request error for {method} {path}: {e!r}")
            raise TeamApiTransportError(f"Could not reach backend: {e}") from e

        if not response.is_success:
            logger.error(
                f"HTTP error during {method} {path}: {response.status_code}"
            )
            raise TeamApiStatusError(
                f"HTTP error: {response.status_code}", response.status_code
            )

        logger.debug(f"Request successful: {response.status_code} for {path}")
        return response

    def _decode(self, response: httpx.Response, model: Type[ModelT]) -> ModelT:
        try:
            return model.model_validate(response.json())
        except ValueError as e:
            # Covers both malformed JSON and pydantic validation errors
            logger.error(f"Error parsing response from {response.request.url}: {e}")
            logger.debug(f"Raw response content: {response.text}")
            raise TeamApiError("Unexpected response body from backend") from e

    async def close(self):
        """Closes the underlying HTTP client."""
        await self.client.aclose()
        logger.info("Closed HTTP client for team backend")


def _item_path(key: Union[int, str]) -> str:
    return f"{TEAM_PATH}/{quote(str(key), safe='')}"
