"""Header and data validation — pure functions, no side effects.

Empty cells are represented by an empty string, exactly as a sheet's
populated range reports them.
"""

from __future__ import annotations

from collections.abc import Sequence
from typing import Any

from sheet_uploader import SOURCE_SHEET_NAME
from sheet_uploader.errors import InvalidDataError, InvalidHeaderError, MissingSourceError
from sheet_uploader.io import Sheet, SpreadsheetSource

BLANK = ""

HEADER_ERROR = "Headers either has a blank cell or is weird"
DATA_ERROR = "Blank cell detected in the data! Please do not include blank cells"


def resolve_source(source: SpreadsheetSource, name: str = SOURCE_SHEET_NAME) -> Sheet:
    """Return the sheet called *name* or raise :class:`MissingSourceError`."""
    sheet = source.get_sheet_by_name(name)
    if sheet is None:
        raise MissingSourceError(
            f"Missing {name} spreadsheet. "
            f"Please make sure you have a spreadsheet called '{name}'"
        )
    return sheet


def split_table(
    values: Sequence[Sequence[Any]],
) -> tuple[list[Any], list[list[Any]]]:
    """Split a table into ``(header, data_rows)``."""
    if not values:
        raise InvalidHeaderError(f"{HEADER_ERROR} (the sheet has no header row)")
    header, *data = values
    return list(header), [list(row) for row in data]


def validate_header(header: Sequence[Any]) -> list[Any]:
    """Return *header* unchanged, or fail if any cell is blank.

    Blank cells fail the whole header rather than being dropped.
    """
    kept = [value for value in header if value != BLANK]
    if len(kept) != len(header):
        raise InvalidHeaderError(HEADER_ERROR)
    return kept


def validate_data(data: Sequence[Sequence[Any]]) -> list[list[Any]]:
    """Return *data* unchanged; the first blank cell anywhere aborts."""
    for row in data:
        for cell in row:
            if cell == BLANK:
                raise InvalidDataError(DATA_ERROR)
    return [list(row) for row in data]
