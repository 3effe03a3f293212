from __future__ import annotations

import json
from typing import Any


def _reject_constant(name: str) -> Any:
    raise ValueError(f"Non-standard JSON constant: {name}")


def loads_strict(text: str) -> Any:
    """Decode JSON, refusing the NaN/Infinity literals Python accepts by default."""
    return json.loads(text, parse_constant=_reject_constant)


def is_number(value: Any) -> bool:
    # bool is an int subclass but JSON true/false are not numbers.
    return isinstance(value, (int, float)) and not isinstance(value, bool)


def as_object(value: Any) -> dict[str, Any] | None:
    return value if isinstance(value, dict) else None


def as_array(value: Any) -> list[Any] | None:
    return value if isinstance(value, list) else None


def as_str(value: Any) -> str | None:
    return value if isinstance(value, str) else None


def render_value(value: Any) -> str:
    """Strings print verbatim; everything else prints as compact JSON."""
    if isinstance(value, str):
        return value
    return json.dumps(value, separators=(",", ":"), ensure_ascii=False)
