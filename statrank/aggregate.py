from __future__ import annotations

import logging
from dataclasses import dataclass, field
from typing import Any, Iterable

from statrank.records import StatRecord
from statrank.values import is_number

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class Observation:
    identifier: str
    value: Any


@dataclass
class Bucket:
    key: str
    numeric: bool
    observations: list[Observation] = field(default_factory=list)
    _seen: set[str] = field(default_factory=set, repr=False, compare=False)

    def __len__(self) -> int:
        return len(self.observations)

    def has_identifier(self, identifier: str) -> bool:
        return identifier in self._seen

    def append(self, identifier: str, value: Any) -> None:
        self._seen.add(identifier)
        self.observations.append(Observation(identifier, value))


class StatAggregator:
    """Collects observations into one bucket per stat key.

    A bucket's ``numeric`` flag comes from the first value recorded into it
    and never changes; later values of another type are still kept.
    """

    def __init__(self) -> None:
        self._buckets: dict[str, Bucket] = {}

    def record(self, stat_key: str, identifier: str, value: Any) -> None:
        bucket = self._buckets.get(stat_key)
        if bucket is None:
            bucket = Bucket(key=stat_key, numeric=is_number(value))
            self._buckets[stat_key] = bucket
        elif bucket.has_identifier(identifier):
            logger.warning("Duplicate %s for %s ignored", stat_key, identifier)
            return
        bucket.append(identifier, value)

    def add_record(self, record: StatRecord) -> None:
        for stat_key, value in record.stats:
            self.record(stat_key, record.identifier, value)

    @property
    def buckets(self) -> dict[str, Bucket]:
        return self._buckets

    @property
    def is_empty(self) -> bool:
        return not self._buckets


def aggregate(records: Iterable[StatRecord]) -> StatAggregator:
    aggregator = StatAggregator()
    for record in records:
        aggregator.add_record(record)
    return aggregator
