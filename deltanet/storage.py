"""File-backed model store: numeric tables, label lists and text resources."""

from __future__ import annotations

import logging
from dataclasses import dataclass
from pathlib import Path
from typing import List

import numpy as np
import pandas as pd

from .core.errors import StoreError
from .core.types import Array

logger = logging.getLogger(__name__)

DEFAULT_ROOT = Path("models")


@dataclass(frozen=True)
class TableFormat:
    """Explicit number formatting for delimited tables.

    The reader and writer use these settings instead of any process locale.
    """

    delimiter: str = ","
    decimal: str = "."


class ModelStore:
    """Resolve and read/write the resources of one model.

    Every resource is addressed as ``<root>/<name>/<resource>``.
    """

    def __init__(
        self,
        root: str | Path = DEFAULT_ROOT,
        name: str = "",
        table_format: TableFormat | None = None,
    ) -> None:
        if not name:
            raise ValueError("Model name must be provided")
        self.root = Path(root)
        self.name = str(name)
        self.table_format = table_format or TableFormat()

    def __repr__(self) -> str:
        return f"ModelStore(root={str(self.root)!r}, name={self.name!r})"

    @property
    def directory(self) -> Path:
        return self.root / self.name

    def path(self, resource: str) -> Path:
        return self.directory / resource

    def exists(self, resource: str) -> bool:
        return self.path(resource).is_file()

    def _require(self, resource: str) -> Path:
        path = self.path(resource)
        if not path.is_file():
            raise StoreError(f"Resource {resource!r} of model {self.name!r} not found at {path}")
        return path

    def read_text(self, resource: str) -> str:
        return self._require(resource).read_text(encoding="utf-8")

    def read_lines(self, resource: str) -> List[str]:
        """Return every line of a plain-text resource, stripped.

        Blank lines keep their position; only the final newline is dropped.
        """

        return [line.strip() for line in self.read_text(resource).splitlines()]

    def read_table(self, resource: str) -> Array:
        """Read a delimited numeric table as a 2-D ``float64`` array."""

        path = self._require(resource)
        fmt = self.table_format
        frame = pd.read_csv(
            path,
            header=None,
            sep=fmt.delimiter,
            decimal=fmt.decimal,
            float_precision="round_trip",
        )
        table = frame.to_numpy(dtype=np.float64)
        if table.ndim == 1:
            table = table.reshape(1, -1)
        return table

    def write_table(self, resource: str, rows) -> Path:
        """Write ``rows`` so that :meth:`read_table` returns identical floats."""

        table = np.atleast_2d(np.asarray(rows, dtype=np.float64))
        path = self.path(resource)
        path.parent.mkdir(parents=True, exist_ok=True)
        fmt = self.table_format
        frame = pd.DataFrame(table)
        frame.to_csv(path, header=False, index=False, sep=fmt.delimiter, decimal=fmt.decimal)
        logger.debug("Wrote %s rows to %s", table.shape[0], path)
        return path

    def write_text(self, resource: str, text: str) -> Path:
        path = self.path(resource)
        path.parent.mkdir(parents=True, exist_ok=True)
        path.write_text(text, encoding="utf-8")
        return path

    def delete(self, resource: str) -> bool:
        """Remove ``resource``; return whether a file was deleted."""

        path = self.path(resource)
        if path.is_file():
            path.unlink()
            logger.info("Deleted %s", path)
            return True
        return False


__all__ = ["DEFAULT_ROOT", "ModelStore", "TableFormat"]
