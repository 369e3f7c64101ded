from pydantic import BaseModel, ConfigDict, Field, field_validator
from typing import List, Optional
import datetime as dt
from utils.constants import DEFAULT_TEAM_COLOR, DEFAULT_RESOURCE_ROLE
from utils.time_utils import normalise_datetime


class Resource(BaseModel):
    model_config = ConfigDict(extra="allow")

    id: str
    description: str  # full name (name + surname)
    role: str = DEFAULT_RESOURCE_ROLE
    resourceSeq: Optional[int] = None
    skills: List[str] = Field(default_factory=list)


class Team(BaseModel):
    id: str
    name: str
    description: Optional[str] = None
    color: str = DEFAULT_TEAM_COLOR
    createdAt: dt.datetime

    @field_validator("createdAt", mode="before")
    @classmethod
    def parse_created_at(cls, value):
        return normalise_datetime(value)


class Assignment(BaseModel):
    """
    Binds one resource to one team for the half-open period `[start, end)`.

    `start < end` is enforced by the store when assignments are created or
    updated, not by the model, so seed data is accepted as delivered.
    """

    id: str
    resourceId: str
    teamId: str
    start: dt.datetime
    end: dt.datetime
    isTeamLeader: bool = False
    role: Optional[str] = None

    @field_validator("start", "end", mode="before")
    @classmethod
    def parse_bounds(cls, value):
        return normalise_datetime(value)


class TimeRange(BaseModel):
    """View window of the scheduler."""

    start: dt.datetime
    end: dt.datetime

    @field_validator("start", "end", mode="before")
    @classmethod
    def parse_bounds(cls, value):
        return normalise_datetime(value)


class TeamMember(BaseModel):
    resourceId: str
    resourceName: str
    resourceSurname: str
    startDate: dt.datetime
    endDate: dt.datetime
    isTeamLeader: bool


class TeamComposition(BaseModel):
    teamId: str
    teamName: str
    description: Optional[str] = None
    color: str
    members: List[TeamMember] = Field(default_factory=list)


class TeamLeaderValidation(BaseModel):
    valid: bool
    conflictingAssignment: Optional[Assignment] = None
    message: Optional[str] = None


class ChangeSummary(BaseModel):
    createdAssignments: List[Assignment] = Field(default_factory=list)
    updatedAssignments: List[Assignment] = Field(default_factory=list)
    deletedAssignments: List[Assignment] = Field(default_factory=list)
    createdTeams: List[Team] = Field(default_factory=list)
    updatedTeams: List[Team] = Field(default_factory=list)
    deletedTeams: List[Team] = Field(default_factory=list)


class SchedulerData(BaseModel):
    resources: List[Resource] = Field(default_factory=list)
    teams: List[Team] = Field(default_factory=list)
    assignments: List[Assignment] = Field(default_factory=list)
