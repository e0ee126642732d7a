"""In-memory compliance service with no network access.

Stands in for the remote service during development and tests. State is lost
on process exit. Individual operations can be made to fail so that the error
paths of the synchronizer and publisher can be exercised.
"""

from __future__ import annotations

import logging
import uuid
from dataclasses import dataclass, field

from sitsync.exceptions import (
    RemoteOperationError,
    RulePackageNotFoundError,
    ServiceUnavailableError,
    UnsupportedOperationError,
)
from sitsync.service.base import RemoteDictionary

logger = logging.getLogger(__name__)


@dataclass
class _StoredDictionary:
    identity: str
    name: str
    description: str
    content: bytes


@dataclass
class InMemoryComplianceService:
    """Process-local implementation of :class:`ComplianceService`."""

    supports_update: bool = True
    unavailable: bool = False
    failures: dict[str, str] = field(default_factory=dict)
    rule_package: bytes | None = None
    calls: list[str] = field(default_factory=list)
    _dictionaries: dict[str, _StoredDictionary] = field(default_factory=dict)

    def fail(self, operation: str, message: str) -> None:
        """Make every later call of ``operation`` raise with ``message``."""
        self.failures[operation] = message

    def seed_dictionary(self, name: str, content: bytes, description: str = "") -> str:
        identity = str(uuid.uuid4())
        self._dictionaries[identity] = _StoredDictionary(identity, name, description, content)
        return identity

    def list_dictionaries(self) -> list[RemoteDictionary]:
        self.calls.append("listDictionaries")
        if self.unavailable:
            raise ServiceUnavailableError("compliance service is unavailable")
        return [
            RemoteDictionary(item.identity, item.name, item.description, item.content)
            for item in self._dictionaries.values()
        ]

    def create_dictionary(self, name: str, description: str, content: bytes) -> str:
        self._check("createDictionary")
        identity = str(uuid.uuid4())
        self._dictionaries[identity] = _StoredDictionary(identity, name, description, content)
        logger.debug("Created in-memory dictionary %s (%s)", name, identity)
        return identity

    def update_dictionary(self, identity: str, content: bytes) -> None:
        self._check("updateDictionary")
        if not self.supports_update:
            raise UnsupportedOperationError("updateDictionary")
        stored = self._dictionaries.get(identity)
        if stored is None:
            raise RemoteOperationError("updateDictionary", f"dictionary {identity} not found", 404)
        stored.content = content

    def delete_dictionary(self, identity: str) -> None:
        self._check("deleteDictionary")
        if self._dictionaries.pop(identity, None) is None:
            raise RemoteOperationError("deleteDictionary", f"dictionary {identity} not found", 404)

    def import_rule_package(self, data: bytes) -> None:
        self._check("importRulePackage")
        self.rule_package = data

    def update_rule_package(self, data: bytes) -> None:
        self._check("updateRulePackage")
        if self.rule_package is None:
            raise RulePackageNotFoundError("updateRulePackage", "rule package couldn't be found", 404)
        self.rule_package = data

    def _check(self, operation: str) -> None:
        self.calls.append(operation)
        message = self.failures.get(operation)
        if message is not None:
            raise RemoteOperationError(operation, message, 500)
