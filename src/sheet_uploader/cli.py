"""CLI entry point for sheet-uploader."""

from __future__ import annotations

from collections.abc import Callable
from datetime import datetime, timezone
from pathlib import Path
from typing import Any

import typer
from rich.console import Console
from rich.markup import escape
from rich.panel import Panel
from rich.table import Table as RichTable

from sheet_uploader import SOURCE_SHEET_NAME, UPLOAD_URL, __version__
from sheet_uploader import transport
from sheet_uploader.errors import TransportError, UploadError
from sheet_uploader.io import SpreadsheetSource, load_source, write_json
from sheet_uploader.models import UploadManifest, UploadPayload
from sheet_uploader.uploader import confirm_and_upload, prepare_payload

app = typer.Typer(
    name="supload",
    help="sheet-uploader — Validate a workbook's Content sheet and upload it as JSON.",
    add_completion=False,
    no_args_is_help=True,
)
console = Console()

CONFIRM_PROMPT = "Confirm that you want to upload/update the data to the cloud."


def _noop(*_args: object, **_kwargs: object) -> None:
    return None


def _printer(quiet: bool) -> Callable[..., None]:
    return _noop if quiet else console.print


def _err(msg: str) -> None:
    console.print(f"[red]x[/red] {escape(msg)}")


def _exit_code_for(exc: UploadError) -> int:
    return 3 if isinstance(exc, TransportError) else 2


# ── Helpers ──────────────────────────────────────────────────────


def _version_callback(value: bool) -> None:
    if value:
        console.print(f"sheet-uploader v{__version__}")
        raise typer.Exit()


def _utcnow_iso() -> str:
    return datetime.now(timezone.utc).isoformat()


def _write_artifacts(
    out_dir: Path | None,
    input_file: Path,
    created_at: str,
    *,
    source: SpreadsheetSource | None = None,
    payload: UploadPayload | None = None,
    response_text: str | None = None,
    error: Exception | None = None,
    url: str = "",
) -> Path | None:
    """Write ``payload.json`` (when built) and ``upload_manifest.json`` into *out_dir*."""
    if out_dir is None:
        return None
    if payload is not None:
        write_json(out_dir / "payload.json", payload.to_dict())

    error_kind: str | None = None
    if isinstance(error, UploadError):
        error_kind = error.kind
    elif error is not None:
        error_kind = type(error).__name__

    manifest = UploadManifest(
        version=__version__,
        input_path=str(input_file.resolve()),
        sheet_name=SOURCE_SHEET_NAME,
        source_id=source.get_id() if source is not None else "",
        url=url,
        created_at_utc=created_at,
        cols=payload.cols if payload is not None else 0,
        rows=payload.row_count if payload is not None else 0,
        status="failed" if error is not None else "success",
        error_kind=error_kind,
        error_message=str(error) if error is not None else "",
        response_text=response_text,
    )
    return write_json(out_dir / "upload_manifest.json", manifest.to_dict())


def _fail(
    exc: Exception,
    code: int,
    out_dir: Path | None,
    input_file: Path,
    created_at: str,
    **artifacts: Any,
) -> typer.Exit:
    _err(str(exc))
    try:
        manifest_path = _write_artifacts(out_dir, input_file, created_at, error=exc, **artifacts)
    except OSError as write_exc:
        _err(f"Could not write artifacts to {out_dir}: {write_exc}")
        return typer.Exit(code=code)
    if manifest_path is not None:
        console.print(f"  Manifest -> {manifest_path}")
    return typer.Exit(code=code)


_INPUT_OPTION = typer.Option(
    ..., "--input", "-i",
    help="Path to the XLSX workbook holding the Content sheet.",
    exists=True, readable=True,
)
_OUT_DIR_OPTION = typer.Option(
    None, "--out-dir", "-o",
    help="Optional directory for payload.json + upload_manifest.json.",
)
_QUIET_OPTION = typer.Option(
    False, "--quiet", "-q",
    help="Suppress informational output; errors are still shown.",
)


# ── Callbacks ────────────────────────────────────────────────────


@app.callback()
def main(
    version: bool | None = typer.Option(
        None, "--version", "-V",
        help="Show version and exit.",
        callback=_version_callback,
        is_eager=True,
    ),
) -> None:
    """sheet-uploader CLI."""


# ── upload command ───────────────────────────────────────────────


@app.command()
def upload(
    input_file: Path = _INPUT_OPTION,
    yes: bool = typer.Option(
        False, "--yes", "-y",
        help="Skip the confirmation prompt.",
    ),
    out_dir: Path | None = _OUT_DIR_OPTION,
    quiet: bool = _QUIET_OPTION,
) -> None:
    """Validate the Content sheet and upload it to the cloud."""
    echo = _printer(quiet)
    created_at = _utcnow_iso()
    loaded: dict[str, Any] = {}

    def _confirm() -> bool:
        return yes or typer.confirm(CONFIRM_PROMPT, default=False)

    def _load() -> SpreadsheetSource:
        echo(Panel(
            f"[bold]sheet-uploader[/bold] v{__version__}\n"
            f"Input:    {input_file}\nEndpoint: {UPLOAD_URL}",
            title="Upload", border_style="blue",
        ))
        echo("[blue]>[/blue] Loading workbook …")
        source = load_source(input_file)
        loaded["source"] = source
        return source

    def _post(payload: UploadPayload) -> str:
        loaded["payload"] = payload
        return transport.post_payload(payload)

    try:
        result = confirm_and_upload(
            _confirm,
            _load,
            post=_post,
            echo=echo,
        )
    except (typer.Exit, typer.Abort):
        raise
    except UploadError as exc:
        raise _fail(
            exc,
            _exit_code_for(exc),
            out_dir,
            input_file,
            created_at,
            source=loaded.get("source"),
            payload=loaded.get("payload"),
            url=UPLOAD_URL,
        ) from exc
    except (FileNotFoundError, ValueError, OSError) as exc:
        raise _fail(exc, 2, out_dir, input_file, created_at, url=UPLOAD_URL) from exc
    except Exception as exc:
        raise _fail(
            RuntimeError(f"Unexpected internal error: {exc}"),
            1,
            out_dir,
            input_file,
            created_at,
            source=loaded.get("source"),
            payload=loaded.get("payload"),
            url=UPLOAD_URL,
        ) from exc

    if result is None:
        return

    manifest_path = _write_artifacts(
        out_dir,
        input_file,
        created_at,
        source=loaded.get("source"),
        payload=result.payload,
        response_text=result.response_text,
        url=UPLOAD_URL,
    )
    if manifest_path is not None:
        echo(f"  Manifest -> {manifest_path}")

    echo(Panel(
        "[green]Data is now updated on the cloud![/green]",
        title="Deployment Success!", border_style="green",
    ))


# ── validate command ─────────────────────────────────────────────


@app.command()
def validate(
    input_file: Path = _INPUT_OPTION,
    out_dir: Path | None = _OUT_DIR_OPTION,
    quiet: bool = _QUIET_OPTION,
) -> None:
    """Check the Content sheet and build the payload without uploading.

    Exit 0 = OK, exit 2 = missing sheet, blank header/data cell or unreadable file.
    """
    echo = _printer(quiet)
    created_at = _utcnow_iso()

    echo(Panel(
        f"[bold]sheet-uploader[/bold] v{__version__}  [dim]validate mode[/dim]\n"
        f"Input: {input_file}",
        title="Validate", border_style="cyan",
    ))

    # ── Load ─────────────────────────────────────────────────────
    try:
        source = load_source(input_file)
    except (FileNotFoundError, ValueError, OSError) as exc:
        raise _fail(exc, 2, out_dir, input_file, created_at) from exc

    # ── Validate (dry) ───────────────────────────────────────────
    try:
        payload = prepare_payload(source, echo=echo)
    except UploadError as exc:
        raise _fail(exc, _exit_code_for(exc), out_dir, input_file, created_at, source=source) from exc

    manifest_path = _write_artifacts(
        out_dir, input_file, created_at, source=source, payload=payload
    )

    # ── Summary table ────────────────────────────────────────────
    if not quiet:
        tbl = RichTable(title="Validation Summary", show_lines=True)
        tbl.add_column("Check", style="bold")
        tbl.add_column("Result")

        tbl.add_row("Sheet", SOURCE_SHEET_NAME)
        tbl.add_row("Document id", payload.id)
        tbl.add_row("Columns", str(payload.cols))
        tbl.add_row("Rows", str(payload.row_count))
        tbl.add_row("Status", "[green]PASS[/green]")
        console.print(tbl)
    if out_dir is not None:
        echo(f"  Payload  -> {out_dir / 'payload.json'}")
        echo(f"  Manifest -> {manifest_path}")
