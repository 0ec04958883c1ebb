"""Shared serialization utilities for sinks."""

from dataclasses import asdict, is_dataclass
from datetime import date, datetime
from typing import Any


def to_dict(obj: Any) -> dict:
    """Convert object to dictionary."""
    if is_dataclass(obj):
        return dataclass_to_dict(obj)
    elif isinstance(obj, dict):
        return serialize_value(obj)
    else:
        return {"value": str(obj)}


def dataclass_to_dict(obj: Any) -> dict:
    """Convert dataclass to dict with proper serialization."""
    result = {}
    for key, value in asdict(obj).items():
        result[key] = serialize_value(value)
    return result


def serialize_value(value: Any) -> Any:
    """Serialize a value for JSON output.

    Byte-string keys (fixed-size account ids) become ``0x``-prefixed hex.
    Integers are left as-is; JSON carries arbitrary precision.
    """
    if isinstance(value, (bytes, bytearray)):
        return "0x" + bytes(value).hex()
    elif isinstance(value, datetime):
        return value.isoformat()
    elif isinstance(value, date):
        return value.isoformat()
    elif isinstance(value, dict):
        return {str(serialize_value(k)): serialize_value(v) for k, v in value.items()}
    elif isinstance(value, (list, tuple)):
        return [serialize_value(v) for v in value]
    return value
