"""
Mediatype subsystem for Bundlee.

Purpose: Infer the Content-Type stored with every bundled file.

Responsibilities:
- Map extensions to MIME types (built-in table, then the platform table)
- Append a UTF-8 charset to text types
- Fall back to application/octet-stream
"""

from .mediatype import (
    content_type_for,
    extension_of,
    is_text_type,
    FALLBACK_CONTENT_TYPE,
)

__all__ = [
    "content_type_for",
    "extension_of",
    "is_text_type",
    "FALLBACK_CONTENT_TYPE",
]
