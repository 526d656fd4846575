"""
Domain exceptions raised by the engagement ledger and its collaborators.

Routers translate these into HTTP errors; services never catch them.
"""

from models.records import ProgressStatus


class CivicVoiceError(Exception):
    """Base class for expected, user-facing failures."""


class ProjectNotFoundError(CivicVoiceError):
    """Raised when an operation references a project id that does not exist."""

    def __init__(self, project_id: int):
        self.project_id = project_id
        super().__init__(f"Project {project_id} not found")


class DuplicateUpvoteError(CivicVoiceError):
    """Raised when the same IP address upvotes a project twice."""

    def __init__(self, project_id: int, ip_address: str):
        self.project_id = project_id
        self.ip_address = ip_address
        super().__init__(f"Address has already upvoted project {project_id}")


class StatusRegressionError(CivicVoiceError):
    """Raised when a manual advance would not move a project forward."""

    def __init__(self, current: ProgressStatus, requested: ProgressStatus):
        self.current = current
        self.requested = requested
        super().__init__(
            f"Cannot advance from {current.value} to {requested.value}; "
            "use an explicit override to move a project backwards"
        )


class DuplicateUserError(CivicVoiceError):
    """Raised when a username or email address is already registered."""

    def __init__(self, field: str):
        self.field = field
        super().__init__(f"A user with this {field} already exists")


class AutomaticStatusError(CivicVoiceError):
    """Raised when a manual advance targets a stage reached only through engagement."""

    def __init__(self, requested: ProgressStatus):
        self.requested = requested
        super().__init__(
            f"{requested.value} is set automatically from upvotes and emails; "
            "manual advances start at official_acknowledgment"
        )
