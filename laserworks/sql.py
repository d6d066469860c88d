"""Helpers for turning sparse client payloads into parameterized SQL."""
from __future__ import annotations

import re
from dataclasses import dataclass
from typing import Any, Dict, Mapping, Tuple

from .errors import BadRequestError

_PLACEHOLDER = re.compile(r"\$(\d+)")


@dataclass(frozen=True)
class PartialUpdate:
    set_clause: str
    values: Tuple[Any, ...]
    columns: Tuple[str, ...]

    @property
    def next_index(self) -> int:
        """Position of the first parameter a caller may append after the values."""
        return len(self.values) + 1


def sql_for_partial_update(data: Mapping[str, Any], field_map: Mapping[str, str]) -> PartialUpdate:
    """Build the SET clause of an UPDATE from the fields present in ``data``.

    Keys are translated to column names through ``field_map``; a key missing
    from the map is used verbatim as the column name. Placeholders are
    numbered ``$1..$n`` in the iteration order of ``data`` and ``values``
    follows the same order, so callers can bind extra parameters (usually the
    row key) starting at ``$n+1``.

        >>> sql_for_partial_update({"firstName": "Aliya", "age": 32}, {"firstName": "first_name"})
        PartialUpdate(set_clause='first_name = $1, age = $2', values=('Aliya', 32), columns=('first_name', 'age'))
    """
    if not data:
        raise BadRequestError("No data")

    columns = tuple(field_map.get(key, key) for key in data)
    set_clause = ", ".join(f"{column} = ${idx}" for idx, column in enumerate(columns, start=1))
    return PartialUpdate(set_clause=set_clause, values=tuple(data.values()), columns=columns)


def to_columns(data: Mapping[str, Any], field_map: Mapping[str, str]) -> Dict[str, Any]:
    """Rename logical field names to column names using the same fallback rule."""
    return {field_map.get(key, key): value for key, value in data.items()}


def positional_to_named(sql: str, prefix: str = "p") -> str:
    """Rewrite ``$n`` placeholders into SQLAlchemy named binds (``:p<n>``)."""
    return _PLACEHOLDER.sub(lambda match: f":{prefix}{match.group(1)}", sql)


def positional_params(values: Tuple[Any, ...], prefix: str = "p") -> Dict[str, Any]:
    return {f"{prefix}{idx}": value for idx, value in enumerate(values, start=1)}
