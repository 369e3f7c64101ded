from typing import Iterable, Optional, Tuple


def get_resource_name(resources: Iterable, resource_id: str) -> Optional[str]:
    """Get the display name of a resource by id, or None if unknown."""
    for r in resources:
        if r.id == resource_id:
            return r.description
    return None


def split_resource_name(description: Optional[str]) -> Tuple[str, str]:
    """Split a full name into (first name, surname); unknown names become ('Unknown', '')."""
    parts = (description or "").split()
    if not parts:
        return "Unknown", ""
    return parts[0], " ".join(parts[1:])


def get_team_name(teams: Iterable, team_id: str) -> str:
    """Get the name of a team by id, falling back to the id itself."""
    for t in teams:
        if t.id == team_id:
            return t.name
    return team_id
