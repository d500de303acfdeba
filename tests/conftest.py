# tests/conftest.py
import json
import math
from typing import Callable, Dict, List, Optional
from urllib.parse import unquote

import httpx
import pytest

from team_dashboard.client.team_client import TeamApiClient
from team_dashboard.view.team_list_view import TeamListView

BASE_URL = "http://backend.test"


class FakeBackend:
    """In-memory team store speaking the backend's REST contract."""

    def __init__(self, team_count: int = 0):
        self.teams: List[Dict] = []
        self.requests: List[httpx.Request] = []
        # Return a response (or raise) to override the normal handling
        self.override: Optional[Callable[[httpx.Request], httpx.Response]] = None
        self._next_id = 1
        for i in range(1, team_count + 1):
            self.add(f"T{i}", i * 10)

    def add(self, name: str, score: int) -> Dict:
        team = {"id": self._next_id, "name": name, "score": score}
        self._next_id += 1
        self.teams.append(team)
        return team

    def requests_for(self, method: str) -> List[httpx.Request]:
        return [r for r in self.requests if r.method == method]

    def requested_pages(self) -> List[int]:
        return [int(r.url.params["pageNum"]) for r in self.requests_for("GET") if "pageNum" in r.url.params]

    def handler(self, request: httpx.Request) -> httpx.Response:
        self.requests.append(request)
        if self.override is not None:
            return self.override(request)

        raw_path = request.url.raw_path.decode("ascii").split("?")[0]
        parts = [unquote(p) for p in raw_path.split("/") if p]
        if parts[:1] != ["team"]:
            return httpx.Response(404)

        if request.method == "GET" and len(parts) == 1:
            page_num = int(request.url.params["pageNum"])
            page_size = int(request.url.params["pageSize"])
            start = page_num * page_size
            return httpx.Response(
                200,
                json={
                    "content": self.teams[start : start + page_size],
                    "number": page_num,
                    "size": page_size,
                    "totalPages": math.ceil(len(self.teams) / page_size),
                    "totalElements": len(self.teams),
                },
            )
        if request.method == "GET" and len(parts) == 2:
            for team in self.teams:
                if team["name"] == parts[1]:
                    return httpx.Response(200, json=team)
            return httpx.Response(404)
        if request.method == "POST" and len(parts) == 1:
            body = json.loads(request.content)
            return httpx.Response(201, json=self.add(body["name"], body["score"]))
        if request.method == "DELETE" and len(parts) == 2:
            before = len(self.teams)
            self.teams = [t for t in self.teams if str(t["id"]) != parts[1]]
            return httpx.Response(204 if len(self.teams) < before else 404)
        return httpx.Response(405)


class FakePrompt:
    """Scripted UserPrompt recording every call."""

    def __init__(self, confirm_answer: bool = True):
        self.confirm_answer = confirm_answer
        self.confirmations: List[str] = []
        self.notifications: List[str] = []

    def confirm(self, message: str) -> bool:
        self.confirmations.append(message)
        return self.confirm_answer

    def notify(self, message: str) -> None:
        self.notifications.append(message)


@pytest.fixture
def backend() -> FakeBackend:
    return FakeBackend(team_count=15)


@pytest.fixture
def prompt() -> FakePrompt:
    return FakePrompt()


@pytest.fixture
async def api_client(backend):
    http_client = httpx.AsyncClient(
        base_url=BASE_URL, transport=httpx.MockTransport(backend.handler)
    )
    client = TeamApiClient(client=http_client, max_attempts=1, retry_backoff=0)
    yield client
    await client.close()


@pytest.fixture
def view(api_client, prompt) -> TeamListView:
    return TeamListView(api_client, prompt, page_size=6, discard_stale_loads=False)
