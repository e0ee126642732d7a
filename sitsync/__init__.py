"""sitsync: keyword dictionary sync and rule-pack publishing for SIT catalogs."""

from sitsync.exceptions import (
    ConfigurationError,
    InvalidInputError,
    MissingInputError,
    PhaseError,
    PublishError,
    RemoteOperationError,
    RulePackageNotFoundError,
    ServiceError,
    ServiceUnavailableError,
    SitSyncError,
    UnsupportedOperationError,
)

__version__ = "0.3.0"

__all__ = [
    "ConfigurationError",
    "InvalidInputError",
    "MissingInputError",
    "PhaseError",
    "PublishError",
    "RemoteOperationError",
    "RulePackageNotFoundError",
    "ServiceError",
    "ServiceUnavailableError",
    "SitSyncError",
    "UnsupportedOperationError",
    "__version__",
]
