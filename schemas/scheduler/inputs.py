from pydantic import AliasChoices, BaseModel, ConfigDict, Field, field_validator
from typing import Optional
import datetime as dt
from utils.constants import DEFAULT_TEAM_COLOR
from utils.time_utils import normalise_datetime


class CreateAssignmentInput(BaseModel):
    resourceId: str = Field(..., min_length=1)
    teamId: str = Field(..., min_length=1)
    start: dt.datetime
    end: dt.datetime
    role: Optional[str] = None
    isTeamLeader: bool = False

    @field_validator("start", "end", mode="before")
    @classmethod
    def parse_bounds(cls, value):
        return normalise_datetime(value)


class UpdateAssignmentInput(BaseModel):
    """
    Partial update of an assignment. Only the listed fields may be changed;
    unknown keys are rejected instead of being merged silently. Snake-case
    aliases are accepted so Python callers can pass `team_id=...`.
    """

    model_config = ConfigDict(extra="forbid")

    start: Optional[dt.datetime] = None
    end: Optional[dt.datetime] = None
    teamId: Optional[str] = Field(
        default=None, validation_alias=AliasChoices("teamId", "team_id")
    )
    isTeamLeader: Optional[bool] = Field(
        default=None, validation_alias=AliasChoices("isTeamLeader", "is_team_leader")
    )
    role: Optional[str] = None

    @field_validator("start", "end", "teamId", "isTeamLeader", mode="before")
    @classmethod
    def not_null(cls, value, info):
        # only `role` can be cleared
        if value is None:
            raise ValueError(f"{info.field_name} cannot be null")
        return value

    @field_validator("start", "end", mode="before")
    @classmethod
    def parse_bounds(cls, value):
        if value is None:
            return value
        return normalise_datetime(value)


class CreateTeamInput(BaseModel):
    name: str
    description: Optional[str] = None
    color: str = DEFAULT_TEAM_COLOR


class ValidateLeaderInput(BaseModel):
    teamId: str
    start: dt.datetime
    end: dt.datetime
    excludeAssignmentId: Optional[str] = None

    @field_validator("start", "end", mode="before")
    @classmethod
    def parse_bounds(cls, value):
        return normalise_datetime(value)
