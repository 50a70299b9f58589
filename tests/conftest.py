from __future__ import annotations

from collections.abc import Callable, Sequence
from pathlib import Path
from typing import Any

import pytest
from openpyxl import Workbook

WorkbookFactory = Callable[..., Path]


@pytest.fixture
def make_workbook(tmp_path: Path) -> WorkbookFactory:
    """Write an .xlsx with the given ``{sheet_name: rows}``; ``None`` cells stay blank."""

    def _make(
        sheets: dict[str, Sequence[Sequence[Any]]],
        *,
        name: str = "book.xlsx",
        identifier: str | None = None,
    ) -> Path:
        wb = Workbook()
        default = wb.active
        for sheet_name, rows in sheets.items():
            ws = wb.create_sheet(title=sheet_name)
            for row in rows:
                ws.append(list(row))
        if sheets:
            wb.remove(default)
        if identifier is not None:
            wb.properties.identifier = identifier
        path = tmp_path / name
        wb.save(path)
        return path

    return _make
