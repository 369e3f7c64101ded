from core.state import ChangeTrackingState
from exceptions.custom_errors import ValidationError

"""
This module contains the rule that keeps assignment periods well formed.
"""


def valid_period(state: ChangeTrackingState, candidate):
    """Reject zero-length and inverted periods; `start < end` must hold strictly."""
    if not candidate.start < candidate.end:
        raise ValidationError(
            f"Start date must be before end date (got {candidate.start.isoformat()} "
            f"to {candidate.end.isoformat()})."
        )
