"""
app/mappers/header_mapper.py

Header normalization and column-key resolution for equipment CSV text.
"""

from __future__ import annotations

import re
from dataclasses import dataclass
from typing import Mapping, Sequence

COLUMN_KEYS: tuple[str, ...] = ("name", "type", "flow", "pressure", "temperature")

DEFAULT_COLUMN_ALIASES: dict[str, tuple[str, ...]] = {
    "name": ("equipment_name", "name", "equipment"),
    "type": ("equipment_type", "type", "category"),
    "flow": ("flowrate", "flow_rate", "flow"),
    "pressure": ("pressure",),
    "temperature": ("temperature", "temp"),
}

_WHITESPACE_RUN = re.compile(r"\s+")


def normalize_header(header: str) -> str:
    """
    Case-fold a header and collapse whitespace runs to underscores.
    """

    return _WHITESPACE_RUN.sub("_", header.strip().casefold())


@dataclass(frozen=True)
class HeaderResolution:
    """
    Column key to field index lookup resolved once per parse call.
    """

    key_to_index: dict[str, int]
    normalized_headers: tuple[str, ...]

    def index_of(self, key: str) -> int | None:
        return self.key_to_index.get(key)

    @property
    def is_empty(self) -> bool:
        return not self.key_to_index


class HeaderMapper:
    """
    Resolves normalized header names to the known equipment column keys.

    Unrecognized headers keep their position but are not mapped. When two
    headers resolve to the same key the first one wins.
    """

    def __init__(self, *, aliases: Mapping[str, Sequence[str]] | None = None) -> None:
        table = aliases or DEFAULT_COLUMN_ALIASES
        unknown = sorted(set(table) - set(COLUMN_KEYS))
        if unknown:
            raise ValueError(f"Unknown column keys in alias table: {unknown}")

        self._alias_to_key: dict[str, str] = {}
        for key, values in table.items():
            for alias in values:
                self._alias_to_key.setdefault(normalize_header(alias), key)

    def resolve(self, headers: Sequence[str]) -> HeaderResolution:
        normalized = tuple(normalize_header(header) for header in headers)
        key_to_index: dict[str, int] = {}
        for index, header in enumerate(normalized):
            key = self._alias_to_key.get(header)
            if key is not None and key not in key_to_index:
                key_to_index[key] = index
        return HeaderResolution(key_to_index=key_to_index, normalized_headers=normalized)
