"""The upload pipeline.

read source -> validate header -> validate data -> build payload -> POST.

Each step finishes before the next starts. Collaborators (the workbook
loader, the transport, the confirmation prompt and the progress printer) are
passed in so the pipeline runs without a terminal or a network.
"""

from __future__ import annotations

from collections.abc import Callable, Sequence
from dataclasses import dataclass
from typing import Any

from rich.markup import escape

from sheet_uploader import SOURCE_SHEET_NAME
from sheet_uploader.io import SpreadsheetSource
from sheet_uploader.models import UploadPayload
from sheet_uploader.transport import post_payload
from sheet_uploader.validation import (
    resolve_source,
    split_table,
    validate_data,
    validate_header,
)

Poster = Callable[[UploadPayload], str]
Printer = Callable[..., None]


def _noop(*_args: object, **_kwargs: object) -> None:
    return None


@dataclass
class UploadResult:
    payload: UploadPayload
    response_text: str | None = None


def build_payload(
    source_id: str, header: Sequence[Any], rows: Sequence[Sequence[Any]]
) -> UploadPayload:
    return UploadPayload(id=source_id, column_names=list(header), rows=[list(r) for r in rows])


def prepare_payload(
    source: SpreadsheetSource,
    *,
    sheet_name: str = SOURCE_SHEET_NAME,
    echo: Printer = _noop,
) -> UploadPayload:
    """Validate the named sheet of *source* and build its payload."""
    sheet = resolve_source(source, sheet_name)
    raw_header, raw_data = split_table(sheet.get_values())

    echo("[blue]>[/blue] Validating …")
    header = validate_header(raw_header)
    data = validate_data(raw_data)

    payload = build_payload(source.get_id(), header, data)
    echo(f"  Payload: id={escape(payload.id)} cols={payload.cols} rows={payload.row_count}")
    return payload


def upload(
    source: SpreadsheetSource,
    *,
    post: Poster = post_payload,
    sheet_name: str = SOURCE_SHEET_NAME,
    echo: Printer = _noop,
) -> UploadResult:
    """Run the full pipeline against *source*; errors propagate to the caller."""
    payload = prepare_payload(source, sheet_name=sheet_name, echo=echo)

    echo("[blue]>[/blue] Uploading …")
    response_text = post(payload)
    echo(f"  Response: {escape(response_text)}")
    return UploadResult(payload=payload, response_text=response_text)


def confirm_and_upload(
    confirm: Callable[[], bool],
    load: Callable[[], SpreadsheetSource],
    *,
    post: Poster = post_payload,
    sheet_name: str = SOURCE_SHEET_NAME,
    echo: Printer = _noop,
) -> UploadResult | None:
    """Ask first; only an explicit yes reads the workbook and uploads.

    Any other answer returns ``None`` without touching the source or the network.
    """
    if confirm() is not True:
        return None
    return upload(load(), post=post, sheet_name=sheet_name, echo=echo)
