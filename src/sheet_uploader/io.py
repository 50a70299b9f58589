"""I/O helpers — load workbooks, serialize payloads, write JSON artifacts."""

from __future__ import annotations

import json
import zipfile
from dataclasses import dataclass, field
from datetime import date, datetime, time
from pathlib import Path
from typing import Any

import pandas as pd
from openpyxl.utils.exceptions import InvalidFileException

WORKBOOK_SUFFIXES = (".xlsx", ".xlsm", ".xltx", ".xltm")

# ── Loading ──────────────────────────────────────────────────────


@dataclass
class Sheet:
    """One named sheet of a loaded workbook."""

    name: str
    frame: pd.DataFrame

    def get_values(self) -> list[list[Any]]:
        """Return the populated range from A1 as rows of cells.

        Blank cells come back as ``""``, which is what validation looks for.
        """
        if self.frame.empty:
            return []
        values = self.frame.astype(object).where(self.frame.notna(), "")
        return values.values.tolist()


@dataclass
class SpreadsheetSource:
    """A workbook read from disk: its sheets plus a document identifier."""

    path: Path
    sheets: dict[str, Sheet] = field(default_factory=dict)
    identifier: str | None = None

    def get_sheet_by_name(self, name: str) -> Sheet | None:
        return self.sheets.get(name)

    def get_id(self) -> str:
        """Document identifier property if the workbook has one, else the file stem."""
        if self.identifier:
            return self.identifier
        return self.path.stem


def load_source(path: Path) -> SpreadsheetSource:
    """Read every sheet of the workbook at *path*.

    Raises
    ------
    FileNotFoundError
        If *path* does not exist.
    ValueError
        If the extension is not supported or the file is not a readable workbook.
    """
    path = Path(path)
    if not path.exists():
        raise FileNotFoundError(f"Input file not found: {path}")

    suffix = path.suffix.lower()
    if suffix not in WORKBOOK_SUFFIXES:
        raise ValueError(f"Unsupported file type: {suffix!r}. Use .xlsx or .xlsm")

    try:
        with pd.ExcelFile(path, engine="openpyxl") as xls:
            sheets = {
                str(name): Sheet(
                    name=str(name),
                    # text like "NA" or "null" is data, only empty cells are blank
                    frame=xls.parse(
                        name,
                        header=None,
                        dtype=object,
                        keep_default_na=False,
                        na_filter=False,
                    ),
                )
                for name in xls.sheet_names
            }
            identifier = xls.book.properties.identifier
    except (zipfile.BadZipFile, InvalidFileException) as exc:
        raise ValueError(f"Could not read workbook {path}") from exc

    return SpreadsheetSource(path=path, sheets=sheets, identifier=identifier or None)


# ── Writing ──────────────────────────────────────────────────────


def _json_default(obj: Any) -> Any:
    if isinstance(obj, Path):
        return str(obj)
    if isinstance(obj, (datetime, date, time)):
        return obj.isoformat()
    item = getattr(obj, "item", None)
    if callable(item):
        converted = item()
        if isinstance(converted, (str, int, float, bool)) or converted is None:
            return converted
    raise TypeError(f"Object of type {type(obj).__name__} is not JSON serializable")


def dumps_payload(data: Any) -> str:
    """Serialize *data* to compact JSON for the wire."""
    return json.dumps(data, ensure_ascii=False, default=_json_default)


def write_json(path: Path, data: Any) -> Path:
    """Write *data* as pretty-printed JSON to *path* (atomic + deterministic)."""
    path = Path(path)
    path.parent.mkdir(parents=True, exist_ok=True)

    payload = json.dumps(
        data,
        indent=2,
        sort_keys=True,
        ensure_ascii=False,
        default=_json_default,
    ) + "\n"
    tmp_path = path.with_suffix(path.suffix + ".tmp")
    tmp_path.write_text(payload, encoding="utf-8")
    tmp_path.replace(path)
    return path
