import json
import logging
from pathlib import Path

import pytest

from statrank.errors import MalformedPayload, MissingField
from statrank.identity import (
    IdentityTable,
    build_identity_table,
    load_name_cache,
    load_whitelist,
    read_whitelist,
)


def write_json(path: Path, payload) -> Path:
    path.write_text(json.dumps(payload))
    return path


def test_whitelist_only_fills_missing_ids(tmp_path: Path):
    table = IdentityTable({"a": "Known"})
    path = write_json(tmp_path / "whitelist.json", [{"uuid": "a", "name": "Other"}, {"uuid": "b", "name": "Bee"}])
    load_whitelist(table, path)
    assert table.as_dict() == {"a": "Known", "b": "Bee"}


def test_name_cache_overwrites(tmp_path: Path):
    table = IdentityTable({"a": "Old"})
    load_name_cache(table, write_json(tmp_path / "usernamecache.json", {"a": "New", "c": "Cee"}))
    assert table.lookup("a") == "New"
    assert table.lookup("c") == "Cee"


def test_missing_uuid_discards_whole_source(tmp_path: Path):
    path = write_json(tmp_path / "whitelist.json", [{"uuid": "a", "name": "A"}, {"name": "NoId"}])
    with pytest.raises(MissingField):
        read_whitelist(path)

    table = IdentityTable()
    with pytest.raises(MissingField):
        load_whitelist(table, path)
    assert len(table) == 0


def test_wrong_structure_is_malformed(tmp_path: Path):
    with pytest.raises(MalformedPayload):
        read_whitelist(write_json(tmp_path / "whitelist.json", {"uuid": "a"}))


def test_layering_precedence(tmp_path: Path):
    write_json(tmp_path / "whitelist.json", [{"uuid": "a", "name": "WL-A"}, {"uuid": "w", "name": "WL-W"}])
    write_json(tmp_path / "usernamecache.json", {"a": "Cache-A", "c": "Cache-C"})
    write_json(tmp_path / "usercache.json", [{"uuid": "c", "name": "Reg-C", "expiresOn": "2030-01-01"}])

    table = build_identity_table(tmp_path)
    assert table.as_dict() == {"a": "Cache-A", "w": "WL-W", "c": "Reg-C"}


def test_bad_source_leaves_others_usable(tmp_path: Path, caplog):
    write_json(tmp_path / "whitelist.json", [{"uuid": "a", "name": "A"}, {"name": "NoId"}])
    write_json(tmp_path / "usercache.json", [{"uuid": "b", "name": "Bee"}])

    with caplog.at_level(logging.WARNING):
        table = build_identity_table(tmp_path)

    assert table.as_dict() == {"b": "Bee"}
    assert "whitelist" in caplog.text
    assert "user name cache" in caplog.text


def test_all_sources_missing(tmp_path: Path):
    assert len(build_identity_table(tmp_path)) == 0
