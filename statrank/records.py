from __future__ import annotations

import logging
from dataclasses import dataclass, field
from enum import Enum
from pathlib import Path
from typing import Any, Iterable, Iterator

from statrank.config import NESTED_STATS_KEY
from statrank.errors import MalformedPayload, SourceUnavailable
from statrank.values import as_object, loads_strict

logger = logging.getLogger(__name__)


class SchemaKind(Enum):
    NESTED = "nested"  # {"stats": {category: {field: value}}}
    FLAT = "flat"  # {field: value}


@dataclass(frozen=True)
class StatRecord:
    identifier: str
    path: Path
    schema: SchemaKind
    stats: list[tuple[str, Any]] = field(default_factory=list)


def identifier_from_path(path: Path) -> str | None:
    identifier = path.name.split(".", 1)[0]
    return identifier or None


def classify_schema(payload: Any) -> SchemaKind:
    obj = as_object(payload)
    if obj is not None and as_object(obj.get(NESTED_STATS_KEY)) is not None:
        return SchemaKind.NESTED
    return SchemaKind.FLAT


def _matches(name: str, query: str) -> bool:
    return query.lower() in name.lower()


def _extract_nested(stats: dict[str, Any], query: str, exact: bool) -> list[tuple[str, Any]]:
    pairs: list[tuple[str, Any]] = []
    for category, fields in stats.items():
        fields = as_object(fields)
        if fields is None:
            continue
        if exact:
            value = fields.get(query)
            if value is None:
                continue
            pairs.append((query, value))
            # Only the first category holding the key counts.
            break
        for name, value in fields.items():
            if value is not None and _matches(name, query):
                pairs.append((f"{category}.{name}", value))
    return pairs


def _extract_flat(payload: Any, query: str, exact: bool) -> list[tuple[str, Any]]:
    obj = as_object(payload)
    if obj is None:
        return []
    if exact:
        value = obj.get(query)
        return [] if value is None else [(query, value)]
    return [(name, value) for name, value in obj.items() if value is not None and _matches(name, query)]


def extract_stats(
    payload: Any,
    query: str,
    exact: bool = False,
    schema: SchemaKind | None = None,
) -> list[tuple[str, Any]]:
    """Return the (stat key, value) pairs of one payload selected by ``query``."""
    if schema is None:
        schema = classify_schema(payload)
    if schema is SchemaKind.NESTED:
        return _extract_nested(payload[NESTED_STATS_KEY], query, exact)
    return _extract_flat(payload, query, exact)


def load_payload(path: Path) -> Any:
    try:
        raw = path.read_bytes()
    except OSError as exc:
        raise SourceUnavailable(f"Cannot read {path}: {exc}") from exc
    try:
        return loads_strict(raw.decode("utf-8"))
    except (UnicodeDecodeError, ValueError) as exc:
        raise MalformedPayload(f"Invalid JSON in {path}: {exc}") from exc


def read_stat_file(path: Path, query: str, exact: bool = False) -> StatRecord | None:
    identifier = identifier_from_path(path)
    if identifier is None:
        logger.debug("Skipping %s: no identifier in file name", path)
        return None
    payload = load_payload(path)
    schema = classify_schema(payload)
    stats = extract_stats(payload, query, exact, schema)
    return StatRecord(identifier=identifier, path=path, schema=schema, stats=stats)


def iter_stat_records(paths: Iterable[Path], query: str, exact: bool = False) -> Iterator[StatRecord]:
    for path in paths:
        try:
            record = read_stat_file(path, query, exact)
        except SourceUnavailable as exc:
            logger.warning("Load stat file failed for %s", exc)
            continue
        if record is None:
            continue
        logger.debug("%s: %d matching stats (%s)", record.identifier, len(record.stats), record.schema.value)
        yield record
