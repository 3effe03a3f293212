from pathlib import Path

from statrank.aggregate import Observation, StatAggregator, aggregate
from statrank.records import SchemaKind, StatRecord


def make_record(identifier: str, stats) -> StatRecord:
    return StatRecord(identifier=identifier, path=Path(f"{identifier}.json"), schema=SchemaKind.FLAT, stats=stats)


def test_empty_aggregator():
    aggregator = StatAggregator()
    assert aggregator.is_empty
    assert aggregator.buckets == {}


def test_buckets_created_lazily_with_numeric_flag():
    aggregator = StatAggregator()
    aggregator.record("stat.deaths", "a", 3)
    aggregator.record("stat.name", "a", "Steve")

    assert not aggregator.is_empty
    assert aggregator.buckets["stat.deaths"].numeric is True
    assert aggregator.buckets["stat.name"].numeric is False


def test_numeric_flag_fixed_by_first_value():
    aggregator = StatAggregator()
    aggregator.record("k", "a", "text")
    aggregator.record("k", "b", 5)
    assert aggregator.buckets["k"].numeric is False

    aggregator.record("n", "a", 1.5)
    aggregator.record("n", "b", "oops")
    bucket = aggregator.buckets["n"]
    assert bucket.numeric is True
    assert bucket.observations == [Observation("a", 1.5), Observation("b", "oops")]


def test_booleans_are_not_numeric():
    aggregator = StatAggregator()
    aggregator.record("flag", "a", True)
    assert aggregator.buckets["flag"].numeric is False


def test_insertion_order_preserved_and_keys_kept_apart():
    aggregator = aggregate(
        [
            make_record("a", [("x", 1), ("y", 2)]),
            make_record("b", [("x", 3)]),
        ]
    )
    assert list(aggregator.buckets) == ["x", "y"]
    assert [o.identifier for o in aggregator.buckets["x"].observations] == ["a", "b"]
    assert len(aggregator.buckets["y"]) == 1


def test_duplicate_identifier_in_bucket_is_ignored():
    aggregator = StatAggregator()
    aggregator.record("x", "a", 1)
    aggregator.record("x", "a", 2)
    assert aggregator.buckets["x"].observations == [Observation("a", 1)]
