"""Keyword lists read from the repository."""

from __future__ import annotations

from dataclasses import dataclass
from pathlib import Path

from sitsync.exceptions import InvalidInputError, MissingInputError


@dataclass(frozen=True)
class KeywordList:
    """One named list of terms, backed by a text file."""

    name: str
    description: str
    terms: tuple[str, ...]
    source: Path | None = None

    def encode(self, encoding: str = "utf-16-le", newline: str = "\r\n") -> bytes:
        """Bytes uploaded to the service: one term per line, no trailing newline."""
        return newline.join(self.terms).encode(encoding)


def parse_terms(text: str) -> tuple[str, ...]:
    """Split file text into terms, dropping blank lines and surrounding whitespace."""
    if text.startswith("\ufeff"):
        text = text[1:]
    return tuple(line.strip() for line in text.splitlines() if line.strip())


def read_keyword_list(path: Path, description: str = "") -> KeywordList:
    try:
        text = path.read_text(encoding="utf-8")
    except UnicodeDecodeError as exc:
        raise InvalidInputError("keyword file", path, f"not valid UTF-8 ({exc.reason} at byte {exc.start})") from exc
    return KeywordList(
        name=path.stem,
        description=description,
        terms=parse_terms(text),
        source=path,
    )


def discover_keyword_files(directory: Path, suffix: str = ".txt") -> list[Path]:
    """Return keyword files in ``directory`` sorted by name."""
    if not directory.is_dir():
        raise MissingInputError("keywords directory", directory)
    return sorted(
        (p for p in directory.iterdir() if p.is_file() and p.suffix.lower() == suffix.lower()),
        key=lambda p: p.name,
    )


def load_keyword_lists(directory: Path, suffix: str = ".txt", descriptions=None) -> list[KeywordList]:
    """Load every keyword list in ``directory``.

    ``descriptions`` is a callable mapping a list name to its description.
    """
    describe = descriptions or (lambda name: "")
    return [read_keyword_list(path, describe(path.stem)) for path in discover_keyword_files(directory, suffix)]
