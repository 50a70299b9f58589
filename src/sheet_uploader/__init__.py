"""sheet-uploader — Validate a workbook's Content sheet and upload it as JSON."""

__version__ = "0.1.0"

SOURCE_SHEET_NAME: str = "Content"
UPLOAD_URL: str = "https://q77r6a.deta.dev/upload"
