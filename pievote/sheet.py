"""Spreadsheet-shaped storage for the reference store.

The store keeps comparisons the way the spreadsheet does: a header row
naming the columns, then one row of cell values per record. Blank cells
read back as "" and numeric vote cells as ints, the way a sheet hands
values back to its script.
"""

import json
import logging
from pathlib import Path
from typing import Any

from pievote.models import WIRE_FIELDS

logger = logging.getLogger(__name__)

HEADER = list(WIRE_FIELDS)
COUNT_COLUMNS = {"votesA", "votesB"}


def record_to_row(record: dict[str, Any], header: list[str] = HEADER) -> list[Any]:
    row = []
    for column in header:
        value = record.get(column)
        row.append("" if value is None else value)
    return row


def _cell_value(column: str, value: Any) -> Any:
    if column in COUNT_COLUMNS and isinstance(value, str) and value.strip().isdigit():
        return int(value)
    return value


def row_to_record(row: list[Any], header: list[str] = HEADER) -> dict[str, Any]:
    padded = list(row) + [""] * (len(header) - len(row))
    return {column: _cell_value(column, value) for column, value in zip(header, padded)}


class SheetTable:
    """A header plus data rows, optionally persisted to a JSON file.

    The file holds ``{"header": [...], "rows": [[...], ...]}``.
    """

    def __init__(self, rows: list[list[Any]] | None = None,
                 header: list[str] | None = None, path: Path | None = None):
        self.header = list(header or HEADER)
        self.rows = [list(r) for r in rows or []]
        self.path = path

    @classmethod
    def open(cls, path: str | Path) -> "SheetTable":
        """Load a table from ``path``, or start an empty one if it doesn't exist."""
        path = Path(path)
        if not path.exists():
            return cls(path=path)
        data = json.loads(path.read_text(encoding="utf-8"))
        return cls(rows=data.get("rows", []), header=data.get("header"), path=path)

    def records(self) -> list[dict[str, Any]]:
        """All data rows as records, skipping rows with every cell blank."""
        return [
            row_to_record(row, self.header)
            for row in self.rows
            if any(cell not in ("", None) for cell in row)
        ]

    def replace(self, records: list[dict[str, Any]]) -> None:
        """Overwrite every data row with ``records``, keeping the header."""
        self.rows = [record_to_row(r, self.header) for r in records]
        logger.debug("Sheet now holds %d rows", len(self.rows))
        if self.path is not None:
            self.save()

    def save(self) -> None:
        payload = {"header": self.header, "rows": self.rows}
        self.path.parent.mkdir(parents=True, exist_ok=True)
        self.path.write_text(json.dumps(payload, indent=2), encoding="utf-8")
