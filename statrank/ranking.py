from __future__ import annotations

import logging
import math
from dataclasses import dataclass
from typing import Any, Iterable, Mapping

from statrank.aggregate import Bucket, Observation
from statrank.errors import IncomparableValueError
from statrank.identity import IdentityTable
from statrank.values import is_number, render_value

EMPTY_NOTICE = "Got empty ranked."

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class RankedSection:
    key: str
    lines: list[str]


def _sort_value(obs: Observation, stat_key: str) -> float:
    try:
        value = float(obs.value)
    except OverflowError as exc:
        raise IncomparableValueError(f"Value for {obs.identifier} in {stat_key} is out of range") from exc
    if math.isnan(value):
        raise IncomparableValueError(f"Cannot compare NaN for {obs.identifier} in {stat_key}")
    return value


def sort_observations(bucket: Bucket, inverse: bool = False) -> list[Observation]:
    """Numeric buckets sort by value (descending when ``inverse``); others keep insertion order."""
    if not bucket.numeric:
        return list(bucket.observations)
    stray = next((obs for obs in bucket.observations if not is_number(obs.value)), None)
    if stray is not None:
        logger.warning(
            "Not sorting %s: %s has non-numeric value %s",
            bucket.key,
            stray.identifier,
            render_value(stray.value),
        )
        return list(bucket.observations)
    keyed = [(_sort_value(obs, bucket.key), obs) for obs in bucket.observations]
    keyed.sort(key=lambda item: item[0], reverse=inverse)
    return [obs for _, obs in keyed]


def display_name(identifier: str, identities: IdentityTable, show_identifier: bool = False) -> str:
    name = identities.lookup(identifier)
    if name is None:
        return identifier
    if show_identifier:
        return f"{name}({identifier})"
    return name


def format_rank_line(rank: int, label: str, value: Any) -> str:
    return f"({rank}) {label}: {render_value(value)}"


def rank_sections(
    buckets: Mapping[str, Bucket],
    identities: IdentityTable,
    limit: int,
    inverse: bool = False,
    show_identifier: bool = False,
) -> list[RankedSection]:
    # Every bucket is sorted before anything is rendered so a failed
    # comparison never leaves half a report behind.
    ordered = [(key, sort_observations(bucket, inverse)) for key, bucket in buckets.items()]
    sections: list[RankedSection] = []
    for key, observations in ordered:
        lines = [
            format_rank_line(rank, display_name(obs.identifier, identities, show_identifier), obs.value)
            for rank, obs in enumerate(observations[: max(0, limit)], 1)
        ]
        sections.append(RankedSection(key=key, lines=lines))
    return sections


def render_report(sections: Iterable[RankedSection]) -> list[str]:
    output: list[str] = []
    for section in sections:
        output.append(f"In stats {section.key}:")
        output.extend(section.lines)
        output.append("")
    if not output:
        output.append(EMPTY_NOTICE)
    return output
