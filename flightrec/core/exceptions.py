# flightrec/core/exceptions.py
from __future__ import annotations


class CoreError(Exception):
    """Base error for all flightrec exceptions."""


# ---- Schema errors ----
class ParseError(CoreError, ValueError):
    """Raised when a schema document is not a well-formed JSON object."""


class SchemaError(CoreError):
    """Raised when a schema document violates a field constraint."""


# ---- Decode errors ----
class UnsupportedFormatError(CoreError):
    """Raised when a schema is valid but cannot be decoded (big-endian)."""


class DataError(CoreError):
    """Raised when data bytes or series inputs are unusable."""


class IoError(CoreError, OSError):
    """Raised when a schema or data file cannot be opened, read or written."""


# ---- Lookup errors (also behave like KeyError for dict-like APIs) ----
class SignalNotFound(CoreError, KeyError):
    """Raised when a requested signal name is not present in a schema."""
