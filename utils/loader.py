import pandas as pd
from typing import Union, IO, List, Optional
from pathlib import Path
from pydantic import ValidationError as PydanticValidationError
from config.paths import DATA_DIR
from exceptions.custom_errors import FileContentError, FileReadingError
from schemas.scheduler.entities import Assignment, Resource, SchedulerData, Team
from utils.constants import (
    ASSIGNMENT_ID_PREFIX,
    DEFAULT_RESOURCE_ROLE,
    DEFAULT_TEAM_COLOR,
    MOCK_ASSIGNMENTS,
    MOCK_RESOURCES,
    MOCK_TEAMS,
)
from utils.time_utils import utc_now

Source = Union[str, Path, bytes, IO, None]

TRUE_VALUES = {"true", "yes", "y", "1", "x", "leader"}


def load_mock_data() -> SchedulerData:
    """Built-in fallback crew data, used when no external source is configured or reachable."""
    return SchedulerData(
        resources=[Resource(**r) for r in MOCK_RESOURCES],
        teams=[Team(**t) for t in MOCK_TEAMS],
        assignments=[Assignment(**a) for a in MOCK_ASSIGNMENTS],
    )


def find_col(df: pd.DataFrame, *keywords: str, required: bool = True) -> Optional[str]:
    """
    Find the column whose (lower-cased, stripped) name matches one of the keywords.

    Exact matches win over substring matches, so a sheet with both "Id" and
    "Resource Id" resolves `find_col(df, "id")` to "Id".
    """
    col_map = {str(col).lower().strip(): col for col in df.columns}
    # Try exact match first
    for k in keywords:
        if k in col_map:
            return col_map[k]
    # Then try substring match
    for lower, original in col_map.items():
        if any(k in lower for k in keywords):
            return original
    if required:
        raise FileContentError(f"No column found containing {keywords} in {list(df.columns)}")
    return None


def _cell(row: pd.Series, col: Optional[str]):
    """Row value or None for a missing column / empty cell."""
    if col is None:
        return None
    value = row[col]
    if pd.isna(value):
        return None
    return value


def _as_bool(value) -> bool:
    if value is None:
        return False
    if isinstance(value, bool):
        return value
    return str(value).strip().lower() in TRUE_VALUES


def read_table(path_or_buffer: Source, sheet_name: Optional[str] = None) -> pd.DataFrame:
    """Read a CSV file or an Excel sheet into a DataFrame with stripped headers."""
    try:
        if isinstance(path_or_buffer, (str, Path)) and Path(path_or_buffer).suffix.lower() == ".csv":
            df = pd.read_csv(path_or_buffer)
        elif sheet_name is None and not isinstance(path_or_buffer, (str, Path, bytes)):
            # file-like objects without a sheet name are treated as CSV
            df = pd.read_csv(path_or_buffer)
        else:
            df = pd.read_excel(path_or_buffer, sheet_name=sheet_name or 0)
    except Exception as e:
        raise FileReadingError(f"Error loading {sheet_name or 'table'}: {e}")

    df.columns = [str(c).strip() for c in df.columns]
    return df.dropna(how="all")


def resources_from_df(df: pd.DataFrame) -> List[Resource]:
    """Columns: id, name/description, optional role and resource seq."""
    id_col = find_col(df, "id", "resource")
    name_col = find_col(df, "description", "name")
    role_col = find_col(df, "role", required=False)
    seq_col = find_col(df, "resourceseq", "resource seq", "seq", required=False)

    resources = []
    for _, row in df.iterrows():
        seq = _cell(row, seq_col)
        resources.append(
            Resource(
                id=str(row[id_col]).strip(),
                description=str(_cell(row, name_col) or "").strip(),
                role=str(_cell(row, role_col) or DEFAULT_RESOURCE_ROLE),
                resourceSeq=int(seq) if seq is not None else None,
            )
        )
    return resources


def teams_from_df(df: pd.DataFrame) -> List[Team]:
    """Columns: id, name, optional description, color and created date."""
    id_col = find_col(df, "id", "team")
    name_col = find_col(df, "name")
    desc_col = find_col(df, "description", required=False)
    color_col = find_col(df, "color", "colour", required=False)
    created_col = find_col(df, "createdat", "created", required=False)

    teams = []
    for _, row in df.iterrows():
        teams.append(
            Team(
                id=str(row[id_col]).strip(),
                name=str(row[name_col]).strip(),
                description=_cell(row, desc_col),
                color=_cell(row, color_col) or DEFAULT_TEAM_COLOR,
                createdAt=_cell(row, created_col) or utc_now(),
            )
        )
    if len({t.id for t in teams}) != len(teams):
        raise FileContentError("Duplicate team ids found.")
    return teams


def assignments_from_df(df: pd.DataFrame) -> List[Assignment]:
    """Columns: resource, team, start, end, optional id, leader flag and role."""
    id_col = find_col(df, "id", required=False)
    resource_col = find_col(df, "resourceid", "resource id", "resource", "technician")
    team_col = find_col(df, "teamid", "team id", "team", "crew")
    start_col = find_col(df, "start", "period start", "valid from")
    end_col = find_col(df, "end", "period end", "valid to")
    leader_col = find_col(df, "isteamleader", "leader", required=False)
    role_col = find_col(df, "role", required=False)

    # an "id" substring can match "resource id"; only accept a dedicated column
    if id_col in (resource_col, team_col):
        id_col = None

    assignments = []
    for i, row in df.iterrows():
        assignments.append(
            Assignment(
                id=str(_cell(row, id_col) or f"{ASSIGNMENT_ID_PREFIX}-{i + 1:03d}").strip(),
                resourceId=str(row[resource_col]).strip(),
                teamId=str(row[team_col]).strip(),
                start=row[start_col],
                end=row[end_col],
                isTeamLeader=_as_bool(_cell(row, leader_col)),
                role=_cell(row, role_col),
            )
        )
    if len({a.id for a in assignments}) != len(assignments):
        raise FileContentError("Duplicate assignment ids found.")
    return assignments


def load_from_tables(
    teams: Source,
    assignments: Source,
    resources: Source = None,
) -> SchedulerData:
    """
    Load seed data from separate CSV files (or file-like objects).

    Parameters:
        teams: Table of teams.
        assignments: Table of assignments.
        resources: Optional table of resources; built-in mock resources are used if omitted.

    Returns:
        SchedulerData: Resources, teams and assignments ready to seed the store.
    """
    try:
        return SchedulerData(
            resources=(
                resources_from_df(read_table(resources))
                if resources is not None
                else [Resource(**r) for r in MOCK_RESOURCES]
            ),
            teams=teams_from_df(read_table(teams)),
            assignments=assignments_from_df(read_table(assignments)),
        )
    except PydanticValidationError as e:
        raise FileContentError(f"Invalid seed data: {e}")


def load_workbook(path_or_buffer: Source = None) -> SchedulerData:
    """
    Load seed data from an Excel workbook with "Resources", "Teams" and
    "Assignments" sheets. Defaults to 'data/seed_data.xlsx'.
    """
    if path_or_buffer is None:
        path_or_buffer = DATA_DIR / "seed_data.xlsx"

    try:
        return SchedulerData(
            resources=resources_from_df(read_table(path_or_buffer, "Resources")),
            teams=teams_from_df(read_table(path_or_buffer, "Teams")),
            assignments=assignments_from_df(read_table(path_or_buffer, "Assignments")),
        )
    except PydanticValidationError as e:
        raise FileContentError(f"Invalid seed data: {e}")
