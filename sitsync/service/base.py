"""Capability set consumed from the compliance service."""

from __future__ import annotations

from dataclasses import dataclass
from typing import Protocol, runtime_checkable


@dataclass(frozen=True)
class RemoteDictionary:
    """Keyword dictionary as reported by the service."""

    identity: str
    name: str
    description: str = ""
    content: bytes | None = None


@runtime_checkable
class ComplianceService(Protocol):
    """Dictionary and rule-package operations of the compliance service.

    ``update_dictionary`` is optional on the remote side: implementations raise
    :class:`~sitsync.exceptions.UnsupportedOperationError` when it is missing.
    ``update_rule_package`` raises
    :class:`~sitsync.exceptions.RulePackageNotFoundError` when no package exists.
    """

    def list_dictionaries(self) -> list[RemoteDictionary]: ...

    def create_dictionary(self, name: str, description: str, content: bytes) -> str: ...

    def update_dictionary(self, identity: str, content: bytes) -> None: ...

    def delete_dictionary(self, identity: str) -> None: ...

    def import_rule_package(self, data: bytes) -> None: ...

    def update_rule_package(self, data: bytes) -> None: ...
