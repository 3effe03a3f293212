from __future__ import annotations

import argparse
from dataclasses import dataclass
from pathlib import Path

SERVER_PROPERTIES = "server.properties"
WHITELIST_FILE = "whitelist.json"
NAME_CACHE_FILE = "usernamecache.json"
USER_REGISTRY_FILE = "usercache.json"
STATS_DIRNAME = "stats"
LEVEL_NAME_KEY = "level-name"
DEFAULT_LEVEL = "world"
NESTED_STATS_KEY = "stats"
DEFAULT_LIMIT = 9961


@dataclass(frozen=True)
class RankOptions:
    path: Path
    key: str
    exact: bool = False
    inverse: bool = False
    show_uuid: bool = False
    limit: int = DEFAULT_LIMIT

    @classmethod
    def from_args(cls, args: argparse.Namespace) -> "RankOptions":
        return cls(
            path=Path(args.path),
            key=args.key,
            exact=args.exact,
            inverse=args.inverse,
            show_uuid=args.show_uuid,
            limit=int(args.limit),
        )
