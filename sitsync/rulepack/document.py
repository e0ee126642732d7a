"""Reading and writing the rule-pack file under a fixed encoding contract."""

from __future__ import annotations

import logging
from dataclasses import dataclass
from pathlib import Path

from sitsync.exceptions import InvalidInputError, MissingInputError

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class RulePackFile:
    """The on-disk rule pack.

    Text is handled with ``\\n`` line endings in memory and written back with
    ``newline`` in ``encoding``; published bytes are produced the same way.
    """

    path: Path
    encoding: str = "utf-8"
    newline: str = "\n"

    def require(self) -> None:
        if not self.path.is_file():
            raise MissingInputError("rule pack", self.path)

    def read(self) -> str:
        self.require()
        try:
            text = self.path.read_bytes().decode(self.encoding)
        except UnicodeDecodeError as exc:
            raise InvalidInputError(
                "rule pack", self.path, f"not valid {self.encoding} ({exc.reason} at byte {exc.start})"
            ) from exc
        except LookupError as exc:
            raise InvalidInputError("rule pack", self.path, f"unknown encoding {self.encoding!r}") from exc
        if text.startswith("\ufeff"):
            text = text[1:]
        return text.replace("\r\n", "\n").replace("\r", "\n")

    def encode(self, text: str) -> bytes:
        """Bytes for ``text`` as they are stored on disk."""
        if self.newline != "\n":
            text = text.replace("\n", self.newline)
        return text.encode(self.encoding)

    def write(self, text: str) -> None:
        self.path.write_bytes(self.encode(text))
        logger.info("Wrote %s", self.path)

    def save_if_changed(self, original: str, text: str, *, dry_run: bool = False) -> bool:
        """Write ``text`` when it differs from ``original``. Returns True if written."""
        if text == original or dry_run:
            return False
        self.write(text)
        return True
