"""Unit tests for keyword list loading."""

from __future__ import annotations

from pathlib import Path

import pytest

from sitsync.dictionaries import KeywordList, discover_keyword_files, load_keyword_lists, parse_terms
from sitsync.exceptions import InvalidInputError, MissingInputError


def test_parse_terms_strips_bom_blank_lines_and_whitespace() -> None:
    assert parse_terms("\ufeffasthma \r\n\r\n  hypertension\n\n") == ("asthma", "hypertension")


def test_encode_joins_with_crlf_in_utf16le() -> None:
    item = KeywordList(name="x", description="", terms=("a", "b"))
    assert item.encode() == "a\r\nb".encode("utf-16-le")
    assert item.encode("utf-8", "\n") == b"a\nb"


def test_load_keyword_lists_uses_file_stems_and_descriptions(tmp_path: Path) -> None:
    (tmp_path / "b_list.txt").write_text("two\n", encoding="utf-8")
    (tmp_path / "a_list.txt").write_text("one\n", encoding="utf-8")
    (tmp_path / "notes.md").write_text("ignored\n", encoding="utf-8")
    lists = load_keyword_lists(tmp_path, descriptions=lambda name: name.upper())
    assert [(item.name, item.description, item.terms) for item in lists] == [
        ("a_list", "A_LIST", ("one",)),
        ("b_list", "B_LIST", ("two",)),
    ]


def test_missing_directory_raises(tmp_path: Path) -> None:
    with pytest.raises(MissingInputError, match="keywords directory not found"):
        discover_keyword_files(tmp_path / "nope")


def test_undecodable_keyword_file_raises_invalid_input(tmp_path: Path) -> None:
    (tmp_path / "bad.txt").write_bytes(b"\xff\xfe\xfa bad\n")
    with pytest.raises(InvalidInputError, match="bad.txt"):
        load_keyword_lists(tmp_path)
