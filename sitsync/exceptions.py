"""Exceptions raised by sitsync.

Messages coming back from the compliance service are kept verbatim so the
operator sees exactly what the service reported.
"""


class SitSyncError(Exception):
    """Base exception for sitsync."""

    pass


class ConfigurationError(SitSyncError):
    """Raised when configuration or command-line options are invalid."""

    pass


class MissingInputError(SitSyncError):
    """Raised when a required local file or directory does not exist."""

    def __init__(self, kind: str, path: object) -> None:
        self.kind = kind
        self.path = path
        super().__init__(f"{kind} not found: {path}")


class InvalidInputError(SitSyncError):
    """Raised when a required local file exists but cannot be decoded."""

    def __init__(self, kind: str, path: object, reason: str) -> None:
        self.kind = kind
        self.path = path
        self.reason = reason
        super().__init__(f"{kind} is not readable: {path}: {reason}")


class ServiceError(SitSyncError):
    """Base exception for compliance service failures."""

    pass


class ServiceUnavailableError(ServiceError):
    """Raised when a lookup call cannot reach the service or is not authorized."""

    pass


class UnsupportedOperationError(ServiceError):
    """Raised when the service does not implement an optional operation."""

    def __init__(self, operation: str) -> None:
        self.operation = operation
        super().__init__(f"{operation} is not supported by the service")


class RemoteOperationError(ServiceError):
    """Raised when a mutating service call fails."""

    def __init__(self, operation: str, message: str, status_code: int | None = None) -> None:
        self.operation = operation
        self.message = message
        self.status_code = status_code
        super().__init__(message)


class RulePackageNotFoundError(RemoteOperationError):
    """Raised by rule-package update when the target package does not exist."""

    pass


class PublishError(SitSyncError):
    """Raised when the rule pack could not be imported or updated."""

    pass


class PhaseError(SitSyncError):
    """Wraps a fatal error with the run phase it happened in."""

    def __init__(self, phase: str, cause: Exception) -> None:
        self.phase = phase
        self.cause = cause
        super().__init__(f"{phase} failed: {cause}")
