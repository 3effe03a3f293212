from __future__ import annotations

import logging
from pathlib import Path

from statrank.config import DEFAULT_LEVEL, LEVEL_NAME_KEY, SERVER_PROPERTIES, STATS_DIRNAME
from statrank.errors import ConfigurationFatal

logger = logging.getLogger(__name__)


def parse_level_name(text: str) -> str:
    for line in text.splitlines():
        key, sep, value = line.partition("=")
        if key.strip() != LEVEL_NAME_KEY:
            continue
        value = value.strip()
        if not sep or not value:
            return DEFAULT_LEVEL
        return value
    raise ConfigurationFatal(f"Cannot find {LEVEL_NAME_KEY} in {SERVER_PROPERTIES}")


def read_level_name(server_dir: Path) -> str:
    path = server_dir / SERVER_PROPERTIES
    try:
        text = path.read_text(encoding="utf-8", errors="replace")
    except OSError as exc:
        raise ConfigurationFatal(f"Cannot read {path}: {exc}") from exc
    return parse_level_name(text)


def stats_dir(server_dir: Path, level_name: str) -> Path:
    return server_dir / level_name / STATS_DIRNAME


def list_stat_files(directory: Path) -> list[Path]:
    """Regular files of the stats directory, in file-name order."""
    try:
        entries = list(directory.iterdir())
    except OSError as exc:
        raise ConfigurationFatal(f"Read stats dir {directory} failed: {exc}") from exc
    files = []
    for entry in entries:
        if entry.is_dir():
            continue
        files.append(entry)
    logger.debug("Found %d stat files in %s", len(files), directory)
    return sorted(files, key=lambda p: p.name)
