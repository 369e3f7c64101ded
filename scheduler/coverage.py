from dataclasses import dataclass
from typing import Any, Dict, Iterable, List
from core.intervals import clip, merge_intervals, overlaps


@dataclass(frozen=True)
class LeaderGap:
    """A period `[start, end)` in which a team has members but no team leader."""

    start: Any
    end: Any


def find_leader_gaps(team_id: str, assignments: Iterable, view) -> List[LeaderGap]:
    """
    Find the periods within the view window where a team has members but no leader.

    The gaps are anchored to the team's real coverage (earliest member start to
    latest member end, over all of the team's assignments), clipped to the view
    window. A team with no member overlapping the view yields no gaps.

    Args:
        team_id (str): The team to analyse.
        assignments (Iterable[Assignment]): Assignments of any teams; only
            those of `team_id` are considered.
        view: Object with `start` and `end` bounds (e.g. `TimeRange`).

    Returns:
        List[LeaderGap]: Non-empty gaps in chronological order.
    """
    members = [a for a in assignments if a.teamId == team_id]

    # no team members in view, no warning
    if not any(overlaps(a.start, a.end, view.start, view.end) for a in members):
        return []

    coverage_start = min(a.start for a in members)
    coverage_end = max(a.end for a in members)
    span = clip(coverage_start, coverage_end, view.start, view.end)
    if span is None:
        return []
    check_start, check_end = span

    leader_periods = merge_intervals(
        (a.start, a.end) for a in members if a.isTeamLeader
    )
    if not leader_periods:
        return [LeaderGap(check_start, check_end)]

    candidates = [(check_start, leader_periods[0][0])]
    for (_, current_end), (next_start, _) in zip(leader_periods, leader_periods[1:]):
        if current_end < next_start:
            candidates.append((current_end, next_start))
    candidates.append((leader_periods[-1][1], check_end))

    gaps = []
    for start, end in candidates:
        clipped = clip(start, end, check_start, check_end)
        if clipped is not None:
            gaps.append(LeaderGap(*clipped))
    return gaps


def find_all_leader_gaps(teams: Iterable, assignments: Iterable, view) -> Dict[str, List[LeaderGap]]:
    """Map each team id to its leader gaps; teams without gaps are left out."""
    assignments = list(assignments)
    result = {}
    for team in teams:
        gaps = find_leader_gaps(team.id, assignments, view)
        if gaps:
            result[team.id] = gaps
    return result


def format_gap_period(gap: LeaderGap) -> str:
    """Format a gap for display, e.g. 'Jan 5 - Feb 3'."""
    return f"{gap.start:%b} {gap.start.day} - {gap.end:%b} {gap.end.day}"
