"""Placeholder substitution and version bumping for rule-pack text."""

from __future__ import annotations

import logging
import re
from collections.abc import Mapping
from dataclasses import dataclass, field

logger = logging.getLogger(__name__)

VERSION_ELEMENT = re.compile(r"<Version\b[^<>]*?/>")
VERSION_ATTRIBUTE = re.compile(r'\b(major|minor|build|revision)\s*=\s*"([^"]*)"')
BUILD_ATTRIBUTE = re.compile(r'(\bbuild\s*=\s*")([0-9]+)(")')
VERSION_PARTS = ("major", "minor", "build", "revision")


@dataclass(frozen=True)
class VersionTuple:
    major: int
    minor: int
    build: int
    revision: int

    def bumped(self) -> VersionTuple:
        return VersionTuple(self.major, self.minor, self.build + 1, self.revision)

    def __str__(self) -> str:
        return f"{self.major}.{self.minor}.{self.build}.{self.revision}"


@dataclass
class PatchResult:
    """Outcome of one patch pass over the rule-pack text."""

    original: str
    text: str
    replaced: dict[str, int] = field(default_factory=dict)
    missing: list[str] = field(default_factory=list)
    absent: list[str] = field(default_factory=list)
    version_before: VersionTuple | None = None
    version_after: VersionTuple | None = None
    version_requested: bool = False

    @property
    def changed(self) -> bool:
        return self.text != self.original

    @property
    def complete(self) -> bool:
        """True when no placeholder present in the text was skipped for lack of an identity."""
        return not self.missing

    def summary_lines(self) -> list[str]:
        lines: list[str] = []
        for token, count in self.replaced.items():
            lines.append(f"replaced {token} ({count} occurrence{'s' if count != 1 else ''})")
        for token in self.missing:
            lines.append(f"skipped {token}: no identity resolved")
        if self.version_requested:
            if self.version_before is None:
                lines.append("version element not found; version unchanged")
            else:
                lines.append(f"version {self.version_before} -> {self.version_after}")
        if not self.changed:
            lines.append("no changes")
        return lines


def _is_number(value: str) -> bool:
    return value.isascii() and value.isdigit()


def read_version(text: str) -> VersionTuple | None:
    """Parse the single ``<Version .../>`` element, or None when absent or malformed."""
    elements = VERSION_ELEMENT.findall(text)
    if len(elements) != 1:
        return None
    values = dict(VERSION_ATTRIBUTE.findall(elements[0]))
    if set(values) != set(VERSION_PARTS) or not all(_is_number(values[part]) for part in VERSION_PARTS):
        return None
    return VersionTuple(*(int(values[part]) for part in VERSION_PARTS))


def bump_build(text: str) -> tuple[str, VersionTuple | None, VersionTuple | None]:
    """Increment the ``build`` attribute of the version element by one."""
    before = read_version(text)
    match = VERSION_ELEMENT.search(text)
    if before is None or match is None:
        return text, None, None
    element = match.group(0)
    updated = BUILD_ATTRIBUTE.sub(lambda m: f"{m.group(1)}{before.build + 1}{m.group(3)}", element, count=1)
    return text[: match.start()] + updated + text[match.end() :], before, before.bumped()


class RulePackPatcher:
    """Rewrite placeholder identity references in rule-pack text."""

    def __init__(self, placeholders: Mapping[str, str], attribute: str = "idRef") -> None:
        self.placeholders = placeholders
        self.attribute = attribute

    def reference(self, value: str) -> str:
        return f'{self.attribute}="{value}"'

    def reference_pattern(self, value: str) -> re.Pattern[str]:
        # attributes are whitespace-separated, so xidRef="..." never matches idRef
        return re.compile(r"(?<=\s)" + re.escape(self.reference(value)))

    def unresolved(self, text: str) -> list[str]:
        """Known placeholder tokens still referenced in ``text``."""
        return [token for token in self.placeholders if self.reference_pattern(token).search(text)]

    def patch(
        self,
        text: str,
        identities: Mapping[str, str],
        *,
        bump_version: bool = False,
    ) -> PatchResult:
        """Substitute ``token -> identity`` references and optionally bump the build."""
        result = PatchResult(original=text, text=text, version_requested=bump_version)
        patched = text
        for token in self.placeholders:
            pattern = self.reference_pattern(token)
            count = len(pattern.findall(patched))
            if count == 0:
                result.absent.append(token)
                continue
            identity = identities.get(token)
            if not identity:
                result.missing.append(token)
                continue
            replacement = self.reference(identity)
            patched = pattern.sub(lambda _match: replacement, patched)
            result.replaced[token] = count
            logger.debug("Replaced %d reference(s) to %s", count, token)
        if bump_version:
            patched, result.version_before, result.version_after = bump_build(patched)
            if result.version_before is None:
                logger.debug("No single well-formed Version element; build not incremented")
        result.text = patched
        return result
