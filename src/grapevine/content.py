"""
Entry content and feed image encoding.

Entries are uploaded as ``content_base64`` plus a MIME type. ``encode_content``
accepts the common Python representations of content and produces both.
"""

import base64
import json
import mimetypes
from pathlib import Path
from typing import Any, Tuple, Union

from .exceptions import ContentError

Content = Union[str, bytes, bytearray, dict, list, Path]

OCTET_STREAM = "application/octet-stream"

# (prefix, mime) pairs checked in order against the first bytes
_MAGIC_NUMBERS = (
    (b"\x89PNG\r\n\x1a\n", "image/png"),
    (b"\xff\xd8\xff", "image/jpeg"),
    (b"GIF87a", "image/gif"),
    (b"GIF89a", "image/gif"),
    (b"%PDF-", "application/pdf"),
    (b"ID3", "audio/mpeg"),
    (b"OggS", "audio/ogg"),
    (b"PK\x03\x04", "application/zip"),
)


def _sniff_bytes(data: bytes) -> str:
    if data[:4] == b"RIFF" and data[8:12] == b"WEBP":
        return "image/webp"
    for prefix, mime in _MAGIC_NUMBERS:
        if data.startswith(prefix):
            return mime
    return OCTET_STREAM


def _detect_text(text: str) -> str:
    stripped = text.strip()
    if stripped.startswith("<"):
        return "image/svg+xml" if "<svg" in stripped else "text/html"
    if stripped.startswith("#"):
        return "text/markdown"
    return "text/plain"


def detect_mime_type(content: Any) -> str:
    """
    Guess a MIME type for entry content.

    - ``str``: markup, markdown or plain text by leading character
    - ``dict``/``list``: ``application/json``
    - ``bytes``: magic-number sniffing, else ``application/octet-stream``
    - ``Path``: ``mimetypes`` by file name, falling back to sniffing the file
    """
    if isinstance(content, Path):
        guessed, _ = mimetypes.guess_type(content.name)
        return guessed or _sniff_bytes(_read_path(content)[:16])
    if isinstance(content, (dict, list)):
        return "application/json"
    if isinstance(content, str):
        return _detect_text(content)
    if isinstance(content, (bytes, bytearray)):
        return _sniff_bytes(bytes(content))
    return OCTET_STREAM


def _read_path(path: Path) -> bytes:
    try:
        return path.read_bytes()
    except OSError as exc:
        raise ContentError("content", str(path), "readable file", f"Could not read file: {exc.strerror}") from exc


def _to_bytes(content: Any) -> bytes:
    if isinstance(content, Path):
        return _read_path(content)
    if isinstance(content, (dict, list)):
        return json.dumps(content).encode("utf-8")
    if isinstance(content, str):
        return content.encode("utf-8")
    if isinstance(content, (bytes, bytearray)):
        return bytes(content)
    raise ContentError(
        "content",
        type(content).__name__,
        "str, bytes, dict, list or pathlib.Path",
        "Convert the content to one of the supported types",
    )


def encode_content(content: Content) -> Tuple[str, str]:
    """
    Returns:
        ``(content_base64, mime_type)``

    Raises:
        ContentError: Unsupported type or unreadable file.
    """
    raw = _to_bytes(content)
    mime_type = detect_mime_type(content)
    return base64.b64encode(raw).decode("ascii"), mime_type


def encode_image(image: Union[str, bytes, bytearray, Path]) -> str:
    """
    Base64 payload for a feed image.

    A ``data:`` URL is reduced to its base64 part; bytes and files are
    encoded as-is.
    """
    if isinstance(image, str) and image.startswith("data:"):
        _, sep, payload = image.partition(",")
        if sep and payload:
            return payload
        raise ContentError.invalid_base64("image")
    if isinstance(image, (dict, list)):
        raise ContentError("image", type(image).__name__, "bytes, str or pathlib.Path")
    return base64.b64encode(_to_bytes(image)).decode("ascii")
