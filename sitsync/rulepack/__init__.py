"""Rule-pack placeholder injection, versioning and publishing."""

from sitsync.rulepack.document import RulePackFile
from sitsync.rulepack.patcher import (
    PatchResult,
    RulePackPatcher,
    VersionTuple,
    bump_build,
    read_version,
)
from sitsync.rulepack.placeholders import DEFAULT_PLACEHOLDERS, PlaceholderTable
from sitsync.rulepack.publisher import PublishForwarder, PublishMode, PublishOutcome

__all__ = [
    "DEFAULT_PLACEHOLDERS",
    "PatchResult",
    "PlaceholderTable",
    "PublishForwarder",
    "PublishMode",
    "PublishOutcome",
    "RulePackFile",
    "RulePackPatcher",
    "VersionTuple",
    "bump_build",
    "read_version",
]
