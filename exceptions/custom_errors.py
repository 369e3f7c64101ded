class SchedulerError(Exception):
    """Base class for errors raised by the crew scheduler core."""

    pass


class ValidationError(SchedulerError):
    """Raised when an interval is malformed or a required field is empty."""

    pass


class ConflictError(SchedulerError):
    """Raised when a team would have two overlapping team leader assignments."""

    def __init__(self, message: str, conflicting_assignment=None):
        super().__init__(message)
        self.conflicting_assignment = conflicting_assignment


class CrossTeamConflictError(SchedulerError):
    """Raised when a resource would be assigned to overlapping periods in different teams."""

    def __init__(self, message: str, conflicting_assignments=None, team_ids=None, team_names=None):
        super().__init__(message)
        self.conflicting_assignments = list(conflicting_assignments or [])
        self.team_ids = list(team_ids or [])
        self.team_names = list(team_names or [])


class NotFoundError(SchedulerError):
    """Raised when updating an assignment that does not exist in the working state."""

    pass


class DataSourceError(SchedulerError):
    """Raised when seed data cannot be fetched from the external system."""

    pass


class FileReadingError(DataSourceError):
    """Raised when there is an error reading a seed data file."""

    pass


class FileContentError(DataSourceError):
    """Raised when the content of a seed data file is not as expected."""

    pass


# Mapping of custom exceptions to HTTP status codes
CUSTOM_ERRORS = {
    ValidationError: 400,
    ConflictError: 409,
    CrossTeamConflictError: 409,
    NotFoundError: 404,
    DataSourceError: 502,
    FileReadingError: 500,
    FileContentError: 400,
}
