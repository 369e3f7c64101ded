"""
core
----

Core scheduling components:

- intervals:
  Pure interval algebra (overlap, merge, clip) on half-open periods.

- ConstraintManager:
  Register and apply validation rules in a controlled sequence.

- ChangeTrackingState:
  Encapsulate the working copy, the synchronized baseline and the change
  tracking sets of a scheduling session.
"""
