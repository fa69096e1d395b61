"""JSON parsing with explicit success and failure results."""

import json
from dataclasses import dataclass
from typing import Any


@dataclass(frozen=True)
class JsonValue:
    """Successfully parsed JSON document."""

    value: Any


@dataclass(frozen=True)
class JsonFailure:
    """JSON text that could not be parsed."""

    message: str
    empty: bool = False


def _reject_constant(name: str) -> Any:
    raise ValueError(f"invalid JSON constant: {name}")


def parse_json(text: str) -> JsonValue | JsonFailure:
    """Parse text as strict JSON without raising.

    NaN, Infinity and -Infinity are rejected.
    """
    if not text.strip():
        return JsonFailure("empty body", empty=True)
    try:
        return JsonValue(json.loads(text, parse_constant=_reject_constant))
    except ValueError as e:
        return JsonFailure(str(e))
