"""Forward the rule pack to the service as an import or an update."""

from __future__ import annotations

import logging
from dataclasses import dataclass
from enum import Enum

from sitsync.exceptions import PublishError, RemoteOperationError, RulePackageNotFoundError
from sitsync.service.base import ComplianceService

logger = logging.getLogger(__name__)


class PublishMode(str, Enum):
    IMPORT = "import"
    UPDATE = "update"


@dataclass(frozen=True)
class PublishOutcome:
    requested: PublishMode
    performed: PublishMode | None
    fell_back: bool = False
    dry_run: bool = False

    def describe(self) -> str:
        if self.dry_run:
            return f"would {self.requested.value} rule package"
        if self.fell_back:
            return "rule package not found for update; imported instead"
        return "rule package imported" if self.performed is PublishMode.IMPORT else "rule package updated"


class PublishForwarder:
    """Call import or update; an update that finds nothing may fall back to import once."""

    def __init__(self, service: ComplianceService, *, auto_fallback: bool = True, dry_run: bool = False) -> None:
        self.service = service
        self.auto_fallback = auto_fallback
        self.dry_run = dry_run

    def publish(self, data: bytes, mode: PublishMode) -> PublishOutcome:
        if self.dry_run:
            return PublishOutcome(requested=mode, performed=None, dry_run=True)
        if mode is PublishMode.IMPORT:
            self._import(data)
            return PublishOutcome(requested=mode, performed=PublishMode.IMPORT)

        try:
            self.service.update_rule_package(data)
        except RulePackageNotFoundError as exc:
            if not self.auto_fallback:
                raise PublishError(f"update failed: {exc.message}") from exc
            logger.warning("Rule package not found for update, importing instead: %s", exc.message)
            try:
                self.service.import_rule_package(data)
            except RemoteOperationError as import_exc:
                raise PublishError(
                    f"import failed (fallback after update not found): {import_exc.message}"
                ) from import_exc
            return PublishOutcome(requested=mode, performed=PublishMode.IMPORT, fell_back=True)
        except RemoteOperationError as exc:
            raise PublishError(f"update failed: {exc.message}") from exc
        logger.info("Updated rule package (%d bytes)", len(data))
        return PublishOutcome(requested=mode, performed=PublishMode.UPDATE)

    def _import(self, data: bytes) -> None:
        try:
            self.service.import_rule_package(data)
        except RemoteOperationError as exc:
            raise PublishError(f"import failed: {exc.message}") from exc
        logger.info("Imported rule package (%d bytes)", len(data))
