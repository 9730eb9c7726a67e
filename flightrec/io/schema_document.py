# flightrec/io/schema_document.py
from __future__ import annotations

import logging
from pathlib import Path

from flightrec.core import IoError, Schema
from flightrec.io.schema_loader import load_schema, read_bytes


log = logging.getLogger(__name__)


class SchemaDocument:
    """
    Editable schema file: the parsed Schema plus its exact source text.

    Loads replace the held state only when parsing succeeds. `save()` writes
    the source text back unchanged.
    """

    def __init__(self) -> None:
        self._schema: Schema | None = None
        self._text: str = ""
        self._path: Path | None = None

    @property
    def has_schema(self) -> bool:
        return self._schema is not None

    @property
    def schema(self) -> Schema | None:
        return self._schema

    @property
    def text(self) -> str:
        return self._text

    @property
    def path(self) -> Path | None:
        return self._path

    def load_file(self, path: str | Path) -> Schema:
        data = read_bytes(path)
        schema = load_schema(data)

        self._schema = schema
        self._text = data.decode("utf-8")
        self._path = Path(path)
        return schema

    def load_text(self, text: str) -> Schema:
        """Parse `text`; the current path (if any) is kept for `save()`."""
        schema = load_schema(text)

        self._schema = schema
        self._text = text
        return schema

    def save(self) -> None:
        if self._path is None:
            raise IoError("schema document has no path")
        try:
            self._path.write_bytes(self._text.encode("utf-8"))
        except OSError as e:
            raise IoError(f"cannot write: {self._path}") from e
        log.info("Saved schema text to %s", self._path)

    def save_as(self, path: str | Path) -> None:
        if not str(path):
            raise IoError("schema document path is empty")
        self._path = Path(path)
        self.save()

    def clear(self) -> None:
        self._schema = None
        self._text = ""
        self._path = None
