# mediatype.py
# Bundlee – Mediatype subsystem: map file extensions to Content-Type values

import mimetypes
import os


# ============================================================
# Configuration
# ============================================================

FALLBACK_CONTENT_TYPE = "application/octet-stream"

TEXT_CHARSET = "UTF-8"

# Extension mappings for common static assets
EXTENSION_MAP = {
    ".html": "text/html",
    ".htm": "text/html",
    ".css": "text/css",
    ".js": "text/javascript",
    ".mjs": "text/javascript",
    ".cjs": "text/javascript",
    ".jsx": "text/jsx",
    ".ts": "text/typescript",
    ".tsx": "text/tsx",
    ".json": "application/json",
    ".map": "application/json",
    ".webmanifest": "application/manifest+json",
    ".txt": "text/plain",
    ".md": "text/markdown",
    ".markdown": "text/markdown",
    ".csv": "text/csv",
    ".xml": "application/xml",
    ".svg": "image/svg+xml",
    ".yaml": "text/yaml",
    ".yml": "text/yaml",
    ".toml": "application/toml",
    ".wasm": "application/wasm",
    ".png": "image/png",
    ".jpg": "image/jpeg",
    ".jpeg": "image/jpeg",
    ".gif": "image/gif",
    ".webp": "image/webp",
    ".avif": "image/avif",
    ".ico": "image/vnd.microsoft.icon",
    ".woff": "font/woff",
    ".woff2": "font/woff2",
    ".ttf": "font/ttf",
    ".otf": "font/otf",
    ".pdf": "application/pdf",
    ".zip": "application/zip",
    ".gz": "application/gzip",
    ".mp3": "audio/mpeg",
    ".mp4": "video/mp4",
    ".webm": "video/webm",
}

# Python's built-in table only; the module-level mimetypes functions also
# read host files such as /etc/mime.types
_BUILTIN_TYPES = mimetypes.MimeTypes()

# Non text/* types whose payload is still text
TEXT_APPLICATION_TYPES = {
    "application/json",
    "application/manifest+json",
    "application/xml",
    "application/toml",
    "application/javascript",
    "image/svg+xml",
}


# ============================================================
# Resolution
# ============================================================

def is_text_type(mime_type: str) -> bool:
    """Check if a MIME type carries text and should advertise a charset."""
    return mime_type.startswith("text/") or mime_type in TEXT_APPLICATION_TYPES


def extension_of(name: str) -> str:
    """Lower-cased extension of a bare extension (".txt") or a file path."""
    base = name.replace("\\", "/").rsplit("/", 1)[-1]
    if base.startswith(".") and base.count(".") == 1:
        return base.lower()
    return os.path.splitext(base)[1].lower()


def content_type_for(name: str) -> str:
    """
    Resolve the Content-Type for an extension or a file path.

    ``".txt"`` and ``"dir/readme.txt"`` both resolve to
    ``"text/plain; charset=UTF-8"``. Unknown or missing extensions resolve
    to ``application/octet-stream``.
    """
    ext = extension_of(name or "")
    if len(ext) < 2:
        return FALLBACK_CONTENT_TYPE

    mime_type = EXTENSION_MAP.get(ext)
    if mime_type is None:
        mime_type = _BUILTIN_TYPES.guess_type("file" + ext)[0]
    if mime_type is None:
        return FALLBACK_CONTENT_TYPE

    if is_text_type(mime_type):
        return f"{mime_type}; charset={TEXT_CHARSET}"
    return mime_type
