"""One sitsync run: dictionaries, then rule-pack patching, then publishing."""

from __future__ import annotations

import logging
from dataclasses import dataclass, field
from pathlib import Path

from sitsync.config.models import NEWLINES, SitSyncConfig
from sitsync.dictionaries import DictionarySynchronizer, KeywordList, SyncOutcome, load_keyword_lists
from sitsync.exceptions import ConfigurationError, PhaseError, PublishError, ServiceError
from sitsync.rulepack import (
    PatchResult,
    PlaceholderTable,
    PublishForwarder,
    PublishMode,
    PublishOutcome,
    RulePackFile,
    RulePackPatcher,
)
from sitsync.service.base import ComplianceService

logger = logging.getLogger(__name__)

PHASE_DICTIONARIES = "dictionaries"
PHASE_PATCH = "patch"
PHASE_PUBLISH = "publish"


@dataclass(frozen=True)
class RunOptions:
    """Phases selected for a run."""

    ensure_dictionaries: bool = False
    inject: bool = False
    bump_version: bool = False
    import_pack: bool = False
    update_pack: bool = False
    preview: bool = False
    auto_fallback: bool | None = None

    def validate(self) -> None:
        if self.import_pack and self.update_pack:
            raise ConfigurationError("--import and --update are mutually exclusive")
        if not self.any_phase:
            raise ConfigurationError("no phase selected")

    @property
    def any_phase(self) -> bool:
        return any(
            (self.ensure_dictionaries, self.inject, self.bump_version, self.import_pack, self.update_pack)
        )

    @property
    def publish_mode(self) -> PublishMode | None:
        if self.import_pack:
            return PublishMode.IMPORT
        if self.update_pack:
            return PublishMode.UPDATE
        return None

    @property
    def needs_service(self) -> bool:
        return self.ensure_dictionaries or self.inject or self.publish_mode is not None

    @property
    def needs_rule_pack(self) -> bool:
        return self.inject or self.bump_version or self.publish_mode is not None


@dataclass
class RunReport:
    """Everything a run did, or would do in preview mode."""

    preview: bool = False
    dictionaries: dict[str, SyncOutcome] = field(default_factory=dict)
    identities: dict[str, str] = field(default_factory=dict)
    patch: PatchResult | None = None
    written: bool = False
    unresolved: list[str] = field(default_factory=list)
    publish: PublishOutcome | None = None
    publish_skipped: bool = False
    warnings: list[str] = field(default_factory=list)

    def warn(self, message: str) -> None:
        logger.warning(message)
        self.warnings.append(message)


class SyncRunner:
    """Run the selected phases against one repository checkout."""

    def __init__(self, config: SitSyncConfig, root: Path, service: ComplianceService | None = None) -> None:
        self.config = config
        self.root = root
        self.service = service
        self.placeholders = PlaceholderTable(config.rule_pack.placeholders)
        self.patcher = RulePackPatcher(self.placeholders, attribute=config.rule_pack.reference_attribute)
        self.rule_pack = RulePackFile(
            path=self.resolve(config.paths.rule_pack),
            encoding=config.rule_pack.encoding,
            newline=NEWLINES[config.rule_pack.newline],
        )

    def resolve(self, relative: str) -> Path:
        path = Path(relative)
        return path if path.is_absolute() else self.root / path

    @property
    def keywords_dir(self) -> Path:
        return self.resolve(self.config.paths.keywords_dir)

    def load_keyword_lists(self) -> list[KeywordList]:
        return load_keyword_lists(
            self.keywords_dir,
            self.config.paths.keyword_suffix,
            descriptions=self.config.dictionaries.describe,
        )

    def run(self, options: RunOptions) -> RunReport:
        options.validate()
        service = self.service
        if options.needs_service and service is None:
            raise ConfigurationError("service.base_url is required for the selected phases")

        # local inputs are checked before any remote call
        keyword_lists: list[KeywordList] = []
        if options.ensure_dictionaries:
            keyword_lists = self.load_keyword_lists()
        text = ""
        if options.needs_rule_pack:
            text = self.rule_pack.read()

        report = RunReport(preview=options.preview)
        if service is not None and (options.ensure_dictionaries or options.inject):
            self._run_dictionaries(service, options, keyword_lists, report)
        if options.inject or options.bump_version:
            text = self._run_patch(options, text, report)
        mode = options.publish_mode
        if service is not None and mode is not None:
            self._run_publish(service, mode, options, text, report)
        return report

    def _run_dictionaries(
        self,
        service: ComplianceService,
        options: RunOptions,
        keyword_lists: list[KeywordList],
        report: RunReport,
    ) -> None:
        synchronizer = DictionarySynchronizer(
            service,
            encoding=self.config.dictionaries.encoding,
            newline=NEWLINES[self.config.dictionaries.newline],
            dry_run=options.preview,
        )
        try:
            if options.ensure_dictionaries:
                report.dictionaries.update(synchronizer.ensure_all(keyword_lists))
            if options.inject:
                pending = [name for name in self.placeholders.dictionary_names() if name not in report.dictionaries]
                report.dictionaries.update(synchronizer.resolve_all(pending))
        except ServiceError as exc:
            raise PhaseError(PHASE_DICTIONARIES, exc) from exc

        for outcome in report.dictionaries.values():
            if outcome.warning:
                report.warnings.append(outcome.warning)
            if outcome.identity_changed:
                logger.info(
                    "Identity of %s changed from %s to %s", outcome.name, outcome.previous_identity, outcome.identity
                )
        report.identities = {
            name: outcome.identity for name, outcome in report.dictionaries.items() if outcome.identity
        }

    def _run_patch(self, options: RunOptions, text: str, report: RunReport) -> str:
        identities = self.placeholders.identity_map(report.identities) if options.inject else {}
        result = self.patcher.patch(text, identities, bump_version=options.bump_version)
        report.patch = result
        if options.inject:
            for token in result.missing:
                report.warn(f"placeholder {token} left in place: no identity for dictionary {self.placeholders[token]}")
        try:
            report.written = self.rule_pack.save_if_changed(result.original, result.text, dry_run=options.preview)
        except OSError as exc:
            raise PhaseError(PHASE_PATCH, exc) from exc
        return result.text

    def _run_publish(
        self,
        service: ComplianceService,
        mode: PublishMode,
        options: RunOptions,
        text: str,
        report: RunReport,
    ) -> None:
        report.unresolved = self.patcher.unresolved(text)
        if report.unresolved:
            report.publish_skipped = True
            report.warn(
                f"{mode.value} skipped: {len(report.unresolved)} placeholder(s) unresolved: "
                + ", ".join(report.unresolved)
            )
            return
        auto_fallback = self.config.publish.auto_fallback if options.auto_fallback is None else options.auto_fallback
        forwarder = PublishForwarder(service, auto_fallback=auto_fallback, dry_run=options.preview)
        try:
            report.publish = forwarder.publish(self.rule_pack.encode(text), mode)
        except PublishError as exc:
            raise PhaseError(PHASE_PUBLISH, exc) from exc
