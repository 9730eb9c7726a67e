# flightrec/io/schema_loader.py
from __future__ import annotations

import json
import logging
from pathlib import Path
from typing import Any

from flightrec.core import (
    IoError,
    ParseError,
    Schema,
    SchemaError,
    SignalSpec,
    ValueType,
    normalize_time_unit,
)


log = logging.getLogger(__name__)


# ----------------------------------------------------------------------
# Typed accessors
#
# A JSON object is a dict of loosely typed values. Each accessor returns
# the value only when it has the expected JSON type, otherwise `default`.
# ----------------------------------------------------------------------
def _is_number(value: Any) -> bool:
    return isinstance(value, (int, float)) and not isinstance(value, bool)


def _get_str(obj: dict, key: str, default: str = "") -> str:
    value = obj.get(key)
    return value if isinstance(value, str) else default


def _get_int(obj: dict, key: str, default: int) -> int:
    """Integer value; floats count only when they hold a whole number."""
    value = obj.get(key)
    if not _is_number(value):
        return default
    if isinstance(value, float):
        if not value.is_integer():
            return default
        return int(value)
    return value


def _get_float(obj: dict, key: str, default: float) -> float:
    value = obj.get(key)
    return float(value) if _is_number(value) else default


# ----------------------------------------------------------------------
# Parsing
# ----------------------------------------------------------------------
def _parse_document(data: str | bytes) -> dict:
    try:
        if isinstance(data, bytes):
            data = data.decode("utf-8")
        root = json.loads(data)
    except (UnicodeDecodeError, json.JSONDecodeError) as e:
        raise ParseError(f"schema is not valid JSON: {e}") from e
    if not isinstance(root, dict):
        raise ParseError("schema document must be a JSON object")
    return root


def _parse_signal(
    obj: dict,
    record_size: int,
    axis_label: str,
    axis_seconds: float,
) -> SignalSpec:
    name = _get_str(obj, "name")
    if not name:
        raise SchemaError("signal.name missing")

    raw_type = _get_str(obj, "value_type")
    value_type = ValueType.parse(raw_type)
    if value_type is None:
        raise SchemaError(f"signal '{name}': unsupported value_type '{raw_type}'")

    byte_offset = _get_int(obj, "byte_offset", -1)
    if byte_offset < 0:
        raise SchemaError(f"signal '{name}': byte_offset missing or invalid")

    if byte_offset + value_type.width > record_size:
        raise SchemaError(f"signal '{name}' exceeds record_size ({record_size} bytes)")

    time_scale = _get_float(obj, "time_scale", 1.0)
    if not time_scale > 0.0:
        time_scale = 1.0

    signal_seconds = axis_seconds
    raw_unit = _get_str(obj, "time_unit")
    if raw_unit.strip():
        normalized = normalize_time_unit(raw_unit)
        if normalized is None:
            log.warning("signal '%s': unknown time_unit '%s', using axis unit", name, raw_unit)
        else:
            signal_seconds = normalized[1]

    return SignalSpec(
        name=name,
        byte_offset=byte_offset,
        value_type=value_type,
        scale=_get_float(obj, "scale", 1.0),
        bias=_get_float(obj, "bias", 0.0),
        time_scale=time_scale * signal_seconds / axis_seconds,
        time_unit=axis_label,
        unit=_get_str(obj, "unit"),
        description=_get_str(obj, "description"),
        group_path=_get_str(obj, "group"),
    )


def _parse_groups(value: Any) -> dict[str, str]:
    groups: dict[str, str] = {}
    if not isinstance(value, list):
        return groups
    for entry in value:
        if not isinstance(entry, dict):
            continue
        path = _get_str(entry, "path").strip()
        if not path:
            log.warning("Skipping group entry without path: %r", entry)
            continue
        groups[path] = _get_str(entry, "description")
    return groups


def load_schema(data: str | bytes) -> Schema:
    """
    Parse a JSON schema document into a Schema.

    Checks run in document order and stop at the first failure:
    record_size, endianness, time_unit (lenient), signals, groups.

    Raises
    ------
    ParseError
        The text is not a JSON object.
    SchemaError
        A field violates its constraint.
    """
    root = _parse_document(data)

    record_size = _get_int(root, "record_size", 0)
    if record_size <= 0:
        raise SchemaError("record_size missing or invalid")

    endianness = _get_str(root, "endianness", "little").lower()
    if endianness not in ("little", "big"):
        raise SchemaError(f"unsupported endianness: {endianness}")

    axis_label, axis_seconds = "s", 1.0
    raw_axis = _get_str(root, "time_unit")
    normalized = normalize_time_unit(raw_axis)
    if normalized is None:
        log.warning("Unknown time_unit '%s', falling back to seconds", raw_axis)
    else:
        axis_label, axis_seconds = normalized

    raw_signals = root.get("signals")
    if not isinstance(raw_signals, list):
        raise SchemaError("signals must be an array")
    if not raw_signals:
        raise SchemaError("signals is empty")

    signals: list[SignalSpec] = []
    for entry in raw_signals:
        if not isinstance(entry, dict):
            raise SchemaError("signals entries must be objects")
        signals.append(_parse_signal(entry, record_size, axis_label, axis_seconds))

    schema = Schema(
        record_size=record_size,
        signals=signals,
        byte_order=endianness,
        time_axis_unit=axis_label,
        group_descriptions=_parse_groups(root.get("groups")),
    )
    log.info(
        "Loaded schema: %d signals, record_size=%d, endianness=%s",
        len(schema), schema.record_size, schema.byte_order,
    )
    return schema


def read_bytes(path: str | Path) -> bytes:
    """Whole-file read; OSError is re-raised as IoError."""
    try:
        return Path(path).read_bytes()
    except OSError as e:
        raise IoError(f"cannot open file: {path}") from e


def load_schema_file(path: str | Path) -> Schema:
    return load_schema(read_bytes(path))
