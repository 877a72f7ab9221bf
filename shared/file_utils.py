"""
File and text processing utilities.
"""

from pathlib import PurePosixPath
from urllib.parse import unquote, urlparse


def sanitize_filename(filename: str) -> str:
    """Sanitize filename for safe storage."""
    invalid_chars = '<>:"/\\|?*'
    for char in invalid_chars:
        filename = filename.replace(char, "_")
    return filename


def extract_file_name(url: str) -> str:
    """Return the last path component of a download URL, or "unknown"."""
    try:
        parsed = urlparse(url)
    except ValueError:
        return "unknown"
    if not parsed.scheme:
        return "unknown"
    name = PurePosixPath(unquote(parsed.path)).name
    return sanitize_filename(name) if name else "unknown"


def decode_text(data: bytes) -> str:
    """Decode bytes as UTF-8, replacing undecodable sequences."""
    if data.startswith(b"\xef\xbb\xbf"):
        data = data[3:]
    return data.decode("utf-8", errors="replace")
