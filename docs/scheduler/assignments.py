create_assignment_description = """
Add a technician to a team for a period.

### Request Body

- `resourceId`: Id of the technician
- `teamId`: Id of the team
- `start`: Start of the period (ISO-8601, UTC if no offset is given)
- `end`: End of the period, exclusive. Must be after `start`
- `role`: Free-text role within the team (Optional)
- `isTeamLeader`: Whether the technician leads the team during the period (default `false`)

### Errors

- `400`: `start` is not before `end`
- `409`: Another team leader of the same team overlaps the period, or the
  technician is already assigned to a different team during the period.
  The response `detail` lists the conflicting assignments.
"""

update_assignment_description = """
Change the period, team, leader flag or role of an assignment.

Only `start`, `end`, `teamId`, `isTeamLeader` and `role` may be sent; any
other field is rejected. The merged assignment is validated exactly like a
new one, ignoring the assignment itself.

### Errors

- `400`: Unknown field, or the merged `start` is not before `end`
- `404`: Assignment not found
- `409`: Leader or cross-team conflict
"""

delete_assignment_description = """
Remove a technician from a team. Deleting an unknown assignment is a no-op.
"""

validate_leader_description = """
Check whether a team leader could be placed on a team for a period without
changing anything. Returns `valid`, and when invalid the
`conflictingAssignment` and a human readable `message`.
"""
