# flightrec/core/__init__.py
"""
Core domain objects for flightrec.

This module defines the format-independent data model and algorithms:
- SignalSpec / Schema: how one fixed-size record is laid out
- Series: decoded (record index, value) samples of one signal
- SeriesStatistics: display ranges computed once per load
- decimate: min/max preserving reduction for a visible window
- GroupNode: signal hierarchy built from group paths

The core layer is independent from I/O and file formats.
"""

from .signal_spec import SignalSpec, ValueType
from .schema import Schema, TIME_UNITS, normalize_time_unit
from .series import Series
from .statistics import SeriesStatistics, compute_statistics, group_range
from .decimation import DEFAULT_MAX_POINTS, decimate, decimate_xy
from .groups import GroupNode, build_group_tree
from .recording import Recording
from .exceptions import (
    CoreError,
    ParseError,
    SchemaError,
    UnsupportedFormatError,
    DataError,
    IoError,
    SignalNotFound,
)


__all__ = [
    # schema model
    "SignalSpec",
    "ValueType",
    "Schema",
    "TIME_UNITS",
    "normalize_time_unit",

    # decoded data
    "Series",
    "Recording",

    # statistics / decimation
    "SeriesStatistics",
    "compute_statistics",
    "group_range",
    "DEFAULT_MAX_POINTS",
    "decimate",
    "decimate_xy",

    # groups
    "GroupNode",
    "build_group_tree",

    # exceptions
    "CoreError",
    "ParseError",
    "SchemaError",
    "UnsupportedFormatError",
    "DataError",
    "IoError",
    "SignalNotFound",
]
