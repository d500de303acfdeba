# team_dashboard/models/team.py
from typing import Optional, Union
from pydantic import BaseModel


class Team(BaseModel):
    """A team as returned by the backend."""

    id: Optional[Union[int, str]] = None  # Assigned by the backend
    name: str
    score: Optional[int] = None  # Older rows may lack a score


class TeamCreate(BaseModel):
    """Request body for creating a team."""

    name: str
    score: int
