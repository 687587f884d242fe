import mimetypes
from collections.abc import Mapping

from awswrap.core.constants import S3_DEFAULT_CONTENT_TYPE

MAGIC_BYTES: Mapping[bytes, str] = {
    b"\xff\xd8\xff": "image/jpeg",
    b"\x89PNG\r\n\x1a\n": "image/png",
    b"GIF87a": "image/gif",
    b"GIF89a": "image/gif",
    b"%PDF-": "application/pdf",
    b"PK\x03\x04": "application/zip",
    b"\x1f\x8b": "application/gzip",
}


def detect_content_type(key: str, body: bytes) -> str:
    """Guess a Content-Type from the file signature, then the key's extension."""
    for signature, mime in MAGIC_BYTES.items():
        if body.startswith(signature):
            return mime

    guessed, _ = mimetypes.guess_type(key)
    return guessed or S3_DEFAULT_CONTENT_TYPE
