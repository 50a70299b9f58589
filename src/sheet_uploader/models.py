"""Data models shared by the pipeline, the transport and the CLI."""

from __future__ import annotations

from collections.abc import Sequence
from dataclasses import dataclass, field
from numbers import Integral
from typing import Any

from sheet_uploader.errors import InvalidDataError


def _to_non_negative_int(value: Any, field_name: str) -> int:
    if isinstance(value, bool) or not isinstance(value, Integral):
        raise TypeError(f"{field_name} must be an integer")
    result = int(value)
    if result < 0:
        raise ValueError(f"{field_name} must be >= 0")
    return result


def _to_rows(values: Sequence[Sequence[Any]] | None, field_name: str) -> list[list[Any]]:
    if values is None:
        return []
    if isinstance(values, str):
        raise TypeError(f"{field_name} must be a sequence of rows")
    rows: list[list[Any]] = []
    for row in values:
        if isinstance(row, str):
            raise TypeError(f"{field_name} items must be sequences of cells")
        rows.append(list(row))
    return rows


@dataclass
class UploadPayload:
    """Body of the upload request.

    Contract invariant: every row has exactly ``len(column_names)`` cells.
    ``size`` is derived from the header and rows, so it cannot drift.
    """

    id: str
    column_names: list[Any] = field(default_factory=list)
    rows: list[list[Any]] = field(default_factory=list)

    def __post_init__(self) -> None:
        if not isinstance(self.id, str):
            raise TypeError("id must be a string")
        if isinstance(self.column_names, str):
            raise TypeError("column_names must be a sequence of cells")
        self.column_names = list(self.column_names or [])
        self.rows = _to_rows(self.rows, "rows")
        cols = len(self.column_names)
        for index, row in enumerate(self.rows, start=1):
            if len(row) != cols:
                raise InvalidDataError(
                    f"Data row {index} has {len(row)} cells but the header has {cols} columns"
                )

    @property
    def cols(self) -> int:
        return len(self.column_names)

    @property
    def row_count(self) -> int:
        return len(self.rows)

    def to_dict(self) -> dict[str, Any]:
        return {
            "id": self.id,
            "columnNames": list(self.column_names),
            "size": {"cols": self.cols, "rows": self.row_count},
            "rows": [list(row) for row in self.rows],
        }


@dataclass
class UploadManifest:
    """Audit-trail record for a single invocation."""

    tool: str = "sheet-uploader"
    version: str = ""
    input_path: str = ""
    sheet_name: str = ""
    source_id: str = ""
    url: str = ""
    created_at_utc: str = ""
    cols: int = 0
    rows: int = 0
    status: str = "success"
    error_kind: str | None = None
    error_message: str = ""
    response_text: str | None = None

    def __post_init__(self) -> None:
        self.cols = _to_non_negative_int(self.cols, "cols")
        self.rows = _to_non_negative_int(self.rows, "rows")
        if self.status not in {"success", "failed"}:
            raise ValueError("status must be 'success' or 'failed'")

    def to_dict(self) -> dict[str, Any]:
        return {
            "tool": self.tool,
            "version": self.version,
            "input_path": self.input_path,
            "sheet_name": self.sheet_name,
            "source_id": self.source_id,
            "url": self.url,
            "created_at_utc": self.created_at_utc,
            "cols": self.cols,
            "rows": self.rows,
            "status": self.status,
            "error_kind": self.error_kind,
            "error_message": self.error_message,
            "response_text": self.response_text,
        }
