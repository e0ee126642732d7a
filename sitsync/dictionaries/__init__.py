"""Keyword lists and remote dictionary synchronization."""

from sitsync.dictionaries.keywords import (
    KeywordList,
    discover_keyword_files,
    load_keyword_lists,
    parse_terms,
    read_keyword_list,
)
from sitsync.dictionaries.synchronizer import DictionarySynchronizer, SyncOutcome

__all__ = [
    "DictionarySynchronizer",
    "KeywordList",
    "SyncOutcome",
    "discover_keyword_files",
    "load_keyword_lists",
    "parse_terms",
    "read_keyword_list",
]
