"""
Player name lookup built from the server's name files.

Three sources are layered in a fixed order:

- ``whitelist.json``: array of ``{"uuid", "name"}``; only fills unknown ids.
- ``usernamecache.json``: object mapping uuid to name; overwrites.
- ``usercache.json``: array of ``{"uuid", "name"}``; overwrites, applied last.

Every source is optional. A source that is missing, malformed, or has an
entry without ``uuid``/``name`` is skipped as a whole, leaving the entries
from earlier sources untouched.
"""

from __future__ import annotations

import logging
from pathlib import Path
from typing import Any, Callable, Iterable

from statrank.config import NAME_CACHE_FILE, USER_REGISTRY_FILE, WHITELIST_FILE
from statrank.errors import MalformedPayload, MissingField, SourceUnavailable
from statrank.records import load_payload
from statrank.values import as_array, as_object, as_str

logger = logging.getLogger(__name__)


class IdentityTable:
    def __init__(self, names: dict[str, str] | None = None) -> None:
        self._names: dict[str, str] = dict(names or {})

    def lookup(self, identifier: str) -> str | None:
        return self._names.get(identifier)

    def fill(self, entries: Iterable[tuple[str, str]]) -> None:
        for uuid, name in entries:
            self._names.setdefault(uuid, name)

    def overwrite(self, entries: Iterable[tuple[str, str]]) -> None:
        for uuid, name in entries:
            self._names[uuid] = name

    def as_dict(self) -> dict[str, str]:
        return dict(self._names)

    def __len__(self) -> int:
        return len(self._names)


def _profile_entries(payload: Any, source: str) -> list[tuple[str, str]]:
    members = as_array(payload)
    if members is None:
        raise MalformedPayload(f"Expected a JSON array in {source}")
    entries: list[tuple[str, str]] = []
    for member in members:
        member = as_object(member) or {}
        uuid = as_str(member.get("uuid"))
        if uuid is None:
            raise MissingField("uuid", source)
        name = as_str(member.get("name"))
        if name is None:
            raise MissingField("name", source)
        entries.append((uuid, name))
    return entries


def read_whitelist(path: Path) -> list[tuple[str, str]]:
    return _profile_entries(load_payload(path), path.name)


def read_user_registry(path: Path) -> list[tuple[str, str]]:
    return _profile_entries(load_payload(path), path.name)


def read_name_cache(path: Path) -> list[tuple[str, str]]:
    mapping = as_object(load_payload(path))
    if mapping is None:
        raise MalformedPayload(f"Expected a JSON object in {path.name}")
    entries: list[tuple[str, str]] = []
    for uuid, name in mapping.items():
        name = as_str(name)
        if name is None:
            raise MissingField("name", path.name)
        entries.append((uuid, name))
    return entries


def load_whitelist(table: IdentityTable, path: Path) -> None:
    table.fill(read_whitelist(path))


def load_name_cache(table: IdentityTable, path: Path) -> None:
    table.overwrite(read_name_cache(path))


def load_user_registry(table: IdentityTable, path: Path) -> None:
    table.overwrite(read_user_registry(path))


IDENTITY_SOURCES: list[tuple[str, str, Callable[[IdentityTable, Path], None]]] = [
    ("whitelist", WHITELIST_FILE, load_whitelist),
    ("user name cache", NAME_CACHE_FILE, load_name_cache),
    ("user name", USER_REGISTRY_FILE, load_user_registry),
]


def build_identity_table(server_dir: Path) -> IdentityTable:
    table = IdentityTable()
    for label, filename, loader in IDENTITY_SOURCES:
        try:
            loader(table, server_dir / filename)
        except SourceUnavailable as exc:
            logger.warning("Load %s failed for %s", label, exc)
    logger.debug("Resolved %d player names", len(table))
    return table
