# flightrec/io/record_decoder.py
from __future__ import annotations

import logging
from pathlib import Path

import numpy as np

from flightrec.core import DataError, Schema, Series, SignalSpec, UnsupportedFormatError
from flightrec.io.schema_loader import read_bytes


log = logging.getLogger(__name__)


class RecordDecoder:
    """Decode a buffer of fixed-size records into one Series per signal.

    Sample `x` is the zero-based record index; `y` is ``raw * scale + bias``
    read as little-endian regardless of the host byte order.
    """

    def __init__(self, schema: Schema):
        self._schema = schema

    @property
    def schema(self) -> Schema:
        return self._schema

    def _check_schema(self) -> None:
        schema = self._schema
        if len(schema) == 0:
            raise DataError("schema has no signals")
        if schema.record_size <= 0:
            raise DataError("record_size is invalid")
        if schema.byte_order != "little":
            raise UnsupportedFormatError(
                f"endianness '{schema.byte_order}' is not supported, only little-endian"
            )

    def _records(self, data: bytes | bytearray | memoryview) -> np.ndarray:
        """View of `data` as a (record_count, record_size) uint8 matrix."""
        record_size = self._schema.record_size
        n_bytes = memoryview(data).nbytes
        if n_bytes < record_size:
            raise DataError(
                f"data holds {n_bytes} bytes, less than one record ({record_size} bytes)"
            )

        count = n_bytes // record_size
        trailing = n_bytes - count * record_size
        if trailing:
            log.warning("Ignoring %d trailing bytes after %d records", trailing, count)

        raw = np.frombuffer(data, dtype=np.uint8, count=count * record_size)
        return raw.reshape(count, record_size)

    def _decode_signal(self, records: np.ndarray, sig: SignalSpec, x: np.ndarray) -> Series:
        if not sig.fits(self._schema.record_size):
            raise DataError(f"signal '{sig.name}' exceeds record length")

        # Copy the column bytes so they can be reinterpreted as one value per row
        column = np.ascontiguousarray(records[:, sig.byte_offset:sig.end])
        raw = column.view(sig.value_type.dtype("little")).reshape(-1)
        y = raw.astype(np.float64) * sig.scale + sig.bias
        return Series(name=sig.name, x=x, y=y, unit=sig.unit, time_scale=sig.time_scale)

    def decode(self, data: bytes | bytearray | memoryview) -> list[Series]:
        """
        Decode every whole record in `data`.

        Raises
        ------
        UnsupportedFormatError
            The schema declares big-endian records.
        DataError
            `data` is shorter than one record, or a signal does not fit.
        """
        self._check_schema()
        records = self._records(data)
        x = np.arange(records.shape[0], dtype=np.float64)

        series = [self._decode_signal(records, sig, x) for sig in self._schema.signals]
        log.info("Decoded %d records x %d signals", records.shape[0], len(series))
        return series

    def decode_file(self, path: str | Path) -> list[Series]:
        return self.decode(read_bytes(path))


def decode(schema: Schema, data: bytes | bytearray | memoryview) -> list[Series]:
    return RecordDecoder(schema).decode(data)
