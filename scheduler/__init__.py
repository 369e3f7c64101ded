"""
scheduler
---------

Main scheduling module. Initializes key components:

- `store`: Change-tracked working copy of teams and assignments.
- `coverage`: Team leader coverage gap analysis.
- `extractor`: Change summary extraction for synchronization.
- `rules`: Validation rules run before every assignment mutation.

Provides high-level access to core scheduling functionality.
"""
from . import coverage, extractor, store
