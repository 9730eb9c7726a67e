# flightrec/core/schema.py
from __future__ import annotations

from dataclasses import dataclass, field
from typing import Iterable, Iterator, Mapping, Sequence

from .exceptions import SchemaError, SignalNotFound
from .signal_spec import SignalSpec


BYTE_ORDERS = ("little", "big")

# token -> (normalized label, seconds per unit)
TIME_UNITS: dict[str, tuple[str, float]] = {}
for _label, _seconds, _aliases in (
    ("s", 1.0, ("", "s", "sec", "secs", "second", "seconds")),
    ("ms", 1e-3, ("ms", "msec", "msecs", "millisecond", "milliseconds")),
    ("us", 1e-6, ("us", "usec", "usecs", "microsecond", "microseconds")),
    ("ns", 1e-9, ("ns", "nsec", "nsecs", "nanosecond", "nanoseconds")),
):
    for _alias in _aliases:
        TIME_UNITS[_alias] = (_label, _seconds)


def normalize_time_unit(raw: str) -> tuple[str, float] | None:
    """Map a time unit token to (label, seconds). Empty means seconds.

    Returns None when the token is not recognized.
    """
    return TIME_UNITS.get(raw.strip().lower())


@dataclass(frozen=True, slots=True)
class Schema:
    """
    Parsed record format.

    Design goals:
    - ordered: signals keep declaration order (display / column order)
    - easy access: schema["alt"] returns the first signal with that name
    - safe: every signal must fit inside one record
    """
    record_size: int
    signals: Sequence[SignalSpec] = field(repr=False)
    byte_order: str = "little"
    time_axis_unit: str = "s"
    group_descriptions: Mapping[str, str] = field(default_factory=dict, repr=False)

    def __post_init__(self) -> None:
        if isinstance(self.record_size, bool) or not isinstance(self.record_size, int):
            raise SchemaError("record_size missing or invalid")
        if self.record_size <= 0:
            raise SchemaError("record_size missing or invalid")
        if self.byte_order not in BYTE_ORDERS:
            raise SchemaError(f"unsupported endianness: {self.byte_order}")

        signals = tuple(self.signals)
        if not signals:
            raise SchemaError("signals must not be empty")
        for sig in signals:
            if not isinstance(sig, SignalSpec):
                raise SchemaError("Schema.signals values must be SignalSpec instances.")
            if not sig.fits(self.record_size):
                raise SchemaError(f"signal '{sig.name}' exceeds record_size")

        object.__setattr__(self, "signals", signals)
        object.__setattr__(self, "group_descriptions", dict(self.group_descriptions))

    # ---- dict-like API ----
    def __len__(self) -> int:
        return len(self.signals)

    def __iter__(self) -> Iterator[SignalSpec]:
        return iter(self.signals)

    def __contains__(self, name: object) -> bool:
        return any(sig.name == name for sig in self.signals)

    def __getitem__(self, name: str) -> SignalSpec:
        return self.signals[self.index_of(name)]

    def get(self, name: str, default: SignalSpec | None = None) -> SignalSpec | None:
        try:
            return self[name]
        except SignalNotFound:
            return default

    @property
    def names(self) -> list[str]:
        return [sig.name for sig in self.signals]

    def index_of(self, name: str) -> int:
        for i, sig in enumerate(self.signals):
            if sig.name == name:
                return i
        raise SignalNotFound(name)

    def record_count(self, n_bytes: int) -> int:
        """Number of whole records in a buffer of `n_bytes`."""
        return n_bytes // self.record_size

    # ---- transformations ----
    def select(self, names: Iterable[str]) -> "Schema":
        """
        Return a Schema restricted to `names` (order preserved by `names`).

        Raises SignalNotFound for unknown names.
        """
        return Schema(
            record_size=self.record_size,
            signals=[self[n] for n in names],
            byte_order=self.byte_order,
            time_axis_unit=self.time_axis_unit,
            group_descriptions=dict(self.group_descriptions),
        )
