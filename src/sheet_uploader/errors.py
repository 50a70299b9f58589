"""Error taxonomy.

Every failure the pipeline reports is an :class:`UploadError`; ``kind`` is the
discriminant the CLI and the manifest use.
"""

from __future__ import annotations


class UploadError(Exception):
    kind: str = "upload"

    def __init__(self, message: str) -> None:
        super().__init__(message)
        self.message = message


class MissingSourceError(UploadError, LookupError):
    kind = "missing_source"


class InvalidHeaderError(UploadError, ValueError):
    kind = "invalid_header"


class InvalidDataError(UploadError, ValueError):
    kind = "invalid_data"


class TransportError(UploadError, ConnectionError):
    kind = "transport"
