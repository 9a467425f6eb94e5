"""
Helpers for uploaded file names and Content-Disposition headers.
"""
import re
from pathlib import PurePosixPath
from urllib.parse import quote

MAX_FILE_NAME_LENGTH = 255
DEFAULT_FILE_NAME = "unnamed"
DEFAULT_CONTENT_TYPE = "application/octet-stream"

# control characters and double quotes (the latter would break the header value)
_UNSAFE_CHARS = re.compile(r'[\x00-\x1f\x7f"]')


def sanitize_file_name(name: str | None) -> str:
    """
    Reduce a client-supplied file name to a safe base name.

    - backslashes are treated as path separators, and only the last path
      component is kept, so "../../etc/passwd" becomes "passwd"
    - control characters and double quotes are removed
    - the result is capped at 255 characters, keeping the extension
    - an empty result becomes "unnamed"
    """
    if not name:
        return DEFAULT_FILE_NAME

    base = PurePosixPath(name.replace("\\", "/")).name
    base = _UNSAFE_CHARS.sub("", base).strip()

    if base in ("", ".", ".."):
        return DEFAULT_FILE_NAME

    if len(base) > MAX_FILE_NAME_LENGTH:
        stem, dot, ext = base.rpartition(".")
        if dot and stem and len(ext) < 16:
            base = stem[: MAX_FILE_NAME_LENGTH - len(ext) - 1] + "." + ext
        else:
            base = base[:MAX_FILE_NAME_LENGTH]

    return base


def content_disposition(disposition: str, file_name: str) -> str:
    """
    Build a Content-Disposition value, e.g. 'attachment; filename="report.pdf"'.

    Non-ASCII names get an ASCII fallback plus an RFC 5987 `filename*` parameter,
    since HTTP header values are latin-1 on the wire.
    """
    try:
        file_name.encode("ascii")
    except UnicodeEncodeError:
        fallback = file_name.encode("ascii", "replace").decode("ascii").replace("?", "_")
        return f"{disposition}; filename=\"{fallback}\"; filename*=UTF-8''{quote(file_name)}"
    return f'{disposition}; filename="{file_name}"'
