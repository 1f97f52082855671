"""Record projection: keep only the fields a caller asked for."""

from __future__ import annotations

from collections.abc import Iterable, Mapping
from typing import Any

Record = dict[str, Any]
FieldSpec = Iterable[str]


def normalize_fields(fields: FieldSpec | None) -> tuple[str, ...] | None:
    """Freeze a field spec into a tuple; a single name counts as one field."""
    if fields is None:
        return None
    if isinstance(fields, str):
        return (fields,)
    return tuple(fields)


def project(record: Mapping[str, Any], fields: FieldSpec | None = None) -> Record:
    """Reduce a record to ``fields``.

    Without a field spec the record passes through unchanged. With one, the
    result has exactly those keys; fields missing from the source are
    present with value None so every projected record has the same shape.
    """
    names = normalize_fields(fields)
    if names is None:
        return record  # type: ignore[return-value]
    return {name: record.get(name) for name in names}


def project_page(records: Iterable[Mapping[str, Any]], fields: FieldSpec | None = None) -> list[Record]:
    """Project every record of one page."""
    names = normalize_fields(fields)
    return [project(record, names) for record in records]
