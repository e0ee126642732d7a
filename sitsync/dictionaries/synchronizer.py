"""Keep remote keyword dictionaries in step with local keyword lists."""

from __future__ import annotations

import logging
from collections.abc import Iterable
from dataclasses import dataclass, replace

from sitsync.dictionaries.keywords import KeywordList
from sitsync.exceptions import ServiceUnavailableError, UnsupportedOperationError
from sitsync.service.base import ComplianceService, RemoteDictionary

logger = logging.getLogger(__name__)

CREATED = "created"
UPDATED = "updated"
RECREATED = "recreated"
UNCHANGED = "unchanged"
FOUND = "found"
NOT_FOUND = "not-found"
SKIPPED = "skipped"
WOULD_CREATE = "would-create"
WOULD_UPDATE = "would-update"


@dataclass(frozen=True)
class SyncOutcome:
    """Result of syncing or resolving one dictionary."""

    name: str
    action: str
    identity: str | None = None
    previous_identity: str | None = None
    warning: str | None = None

    @property
    def ready(self) -> bool:
        """True when the identity can be injected into the rule pack."""
        return self.identity is not None

    @property
    def identity_changed(self) -> bool:
        return self.previous_identity is not None and self.previous_identity != self.identity


class DictionarySynchronizer:
    """Create or update one remote dictionary per keyword list.

    Lookups always hit the service; identities are re-read after every
    mutation instead of reusing what was seen before it. With ``dry_run`` only
    lookups run.
    """

    def __init__(
        self,
        service: ComplianceService,
        *,
        encoding: str = "utf-16-le",
        newline: str = "\r\n",
        dry_run: bool = False,
    ) -> None:
        self.service = service
        self.encoding = encoding
        self.newline = newline
        self.dry_run = dry_run
        self._duplicates: dict[str, str] = {}

    def lookup(self, name: str) -> RemoteDictionary | None:
        """Find a dictionary by exact name. Raises ServiceUnavailableError."""
        matches = [item for item in self.service.list_dictionaries() if item.name == name]
        if len(matches) > 1:
            message = f"{len(matches)} dictionaries named {name!r} exist; using {matches[0].identity}"
            logger.warning(message)
            self._duplicates[name] = message
        return matches[0] if matches else None

    def resolve(self, name: str) -> SyncOutcome:
        """Look up the identity of ``name`` without changing anything."""
        return self._with_duplicates(self._resolve(name))

    def ensure(self, keyword_list: KeywordList) -> SyncOutcome:
        """Make the remote dictionary ``keyword_list.name`` hold the list's terms."""
        return self._with_duplicates(self._ensure(keyword_list))

    def _resolve(self, name: str) -> SyncOutcome:
        try:
            existing = self.lookup(name)
        except ServiceUnavailableError as exc:
            return self._skipped(name, exc)
        if existing is None:
            return SyncOutcome(name=name, action=NOT_FOUND)
        return SyncOutcome(name=name, action=FOUND, identity=existing.identity)

    def _ensure(self, keyword_list: KeywordList) -> SyncOutcome:
        name = keyword_list.name
        try:
            existing = self.lookup(name)
        except ServiceUnavailableError as exc:
            return self._skipped(name, exc)
        content = keyword_list.encode(self.encoding, self.newline)

        if existing is None:
            if self.dry_run:
                return SyncOutcome(name=name, action=WOULD_CREATE)
            created = self.service.create_dictionary(name, keyword_list.description, content)
            logger.info("Created dictionary %s (%d terms)", name, len(keyword_list.terms))
            return self._requery(name, CREATED, fallback_identity=created)

        if existing.content is not None and existing.content == content:
            return SyncOutcome(name=name, action=UNCHANGED, identity=existing.identity)
        if self.dry_run:
            return SyncOutcome(name=name, action=WOULD_UPDATE, identity=existing.identity)

        try:
            self.service.update_dictionary(existing.identity, content)
        except UnsupportedOperationError:
            logger.info("In-place update unsupported; recreating dictionary %s", name)
            self.service.delete_dictionary(existing.identity)
            created = self.service.create_dictionary(name, keyword_list.description, content)
            return self._requery(name, RECREATED, fallback_identity=created, previous=existing.identity)
        logger.info("Updated dictionary %s (%d terms)", name, len(keyword_list.terms))
        return self._requery(name, UPDATED, fallback_identity=existing.identity, previous=existing.identity)

    def ensure_all(self, keyword_lists: Iterable[KeywordList]) -> dict[str, SyncOutcome]:
        return {item.name: self.ensure(item) for item in keyword_lists}

    def resolve_all(self, names: Iterable[str]) -> dict[str, SyncOutcome]:
        return {name: self.resolve(name) for name in names}

    def _requery(
        self,
        name: str,
        action: str,
        *,
        fallback_identity: str,
        previous: str | None = None,
    ) -> SyncOutcome:
        warning = None
        try:
            current = self.lookup(name)
        except ServiceUnavailableError as exc:
            current = None
            warning = f"could not re-read dictionary {name} after {action}: {exc}"
        if current is None and warning is None:
            warning = f"dictionary {name} not listed after {action}; using identity {fallback_identity}"
        if warning:
            logger.warning(warning)
        identity = current.identity if current is not None else fallback_identity
        return SyncOutcome(
            name=name,
            action=action,
            identity=identity,
            previous_identity=previous,
            warning=warning,
        )

    def _with_duplicates(self, outcome: SyncOutcome) -> SyncOutcome:
        duplicate = self._duplicates.pop(outcome.name, None)
        if duplicate is None:
            return outcome
        warning = f"{duplicate}; {outcome.warning}" if outcome.warning else duplicate
        return replace(outcome, warning=warning)

    @staticmethod
    def _skipped(name: str, exc: Exception) -> SyncOutcome:
        message = f"dictionary {name} skipped: {exc}"
        logger.warning(message)
        return SyncOutcome(name=name, action=SKIPPED, warning=message)
