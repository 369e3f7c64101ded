"""
scheduler.rules
---------------

Exposes all assignment validation rules by importing from:

- `interval`: Well-formed periods (`start < end`).
- `leader`: At most one team leader per team at any point in time.
- `cross_team`: A resource cannot be booked by two teams at once.

Allows unified access to all rule definitions via wildcard imports.
"""
from .interval import *
from .leader import *
from .cross_team import *
