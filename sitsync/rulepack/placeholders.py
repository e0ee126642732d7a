"""Placeholder identity tokens and the dictionaries they stand for."""

from __future__ import annotations

from collections.abc import Iterator, Mapping

# Tokens committed in the rule pack in place of dictionary identities that are
# only known once the dictionaries exist remotely.
DEFAULT_PLACEHOLDERS: dict[str, str] = {
    "ffffffff-0000-4000-8000-000000000001": "clinical_terms",
    "ffffffff-0000-4000-8000-000000000002": "drug_names",
    "ffffffff-0000-4000-8000-000000000003": "project_codenames",
}


class PlaceholderTable(Mapping[str, str]):
    """Read-only ``token -> dictionary name`` table."""

    def __init__(self, entries: Mapping[str, str] | None = None) -> None:
        self._entries = dict(DEFAULT_PLACEHOLDERS if entries is None else entries)

    def __getitem__(self, token: str) -> str:
        return self._entries[token]

    def __iter__(self) -> Iterator[str]:
        return iter(self._entries)

    def __len__(self) -> int:
        return len(self._entries)

    def dictionary_names(self) -> list[str]:
        """Distinct dictionary names, in table order."""
        return list(dict.fromkeys(self._entries.values()))

    def identity_map(self, identities: Mapping[str, str | None]) -> dict[str, str]:
        """Map tokens to identities given ``dictionary name -> identity``.

        Tokens whose dictionary has no identity are left out.
        """
        resolved: dict[str, str] = {}
        for token, name in self._entries.items():
            identity = identities.get(name)
            if identity:
                resolved[token] = identity
        return resolved
