change_summary_description = """
Diff of the working copy against the last synchronized state.

- `createdAssignments` / `createdTeams`: created locally, unknown to the ERP
- `updatedAssignments` / `updatedTeams`: known to the ERP and changed locally
- `deletedAssignments` / `deletedTeams`: known to the ERP and removed locally,
  with their last synchronized values

A synchronization client replays these to the ERP, then calls
`POST /changes/clear`.
"""

reset_description = """
Discard all local edits. The next `GET /scheduler` reloads the data from the
configured source.
"""
