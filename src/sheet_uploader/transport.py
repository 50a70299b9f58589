"""HTTP transport — one POST per upload, no retries."""

from __future__ import annotations

import requests

from sheet_uploader import UPLOAD_URL
from sheet_uploader.errors import TransportError
from sheet_uploader.io import dumps_payload
from sheet_uploader.models import UploadPayload

JSON_HEADERS = {"Content-Type": "application/json"}


def post_payload(payload: UploadPayload, url: str = UPLOAD_URL) -> str:
    """POST *payload* as JSON to *url* and return the raw response text.

    Blocks until the server answers. Network failures and non-2xx statuses
    raise :class:`TransportError`.
    """
    body = dumps_payload(payload.to_dict()).encode("utf-8")
    try:
        response = requests.post(url, data=body, headers=JSON_HEADERS)
        response.raise_for_status()
    except requests.HTTPError as exc:
        status = exc.response.status_code if exc.response is not None else "?"
        raise TransportError(f"Upload to {url} failed with HTTP {status}") from exc
    except requests.RequestException as exc:
        raise TransportError(f"Upload to {url} failed: {exc}") from exc
    return response.text
