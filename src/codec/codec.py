# codec.py
# Bundlee – Codec subsystem: gzip + URL-safe Base-64 transport encoding

import base64
import binascii
import gzip
import io
import os
import re
import shutil
import zlib


# ============================================================
# Exceptions
# ============================================================

class DecodeError(Exception):
    """Encoded bundle content could not be decoded, decompressed or read as text."""
    pass


CorruptArchiveError = DecodeError


# ============================================================
# Configuration
# ============================================================

DEFAULT_COMPRESSION_LEVEL = 9  # any level round-trips

# Chunk size used when streaming a file into the compressor
STREAM_CHUNK_SIZE = 64 * 1024

_URLSAFE_B64 = re.compile(r"[A-Za-z0-9_-]*={0,2}")


# ============================================================
# Compression
# ============================================================

def compress_bytes(data: bytes, level: int = DEFAULT_COMPRESSION_LEVEL) -> bytes:
    """Gzip-compress a buffer. The header mtime is zeroed so output is reproducible."""
    return gzip.compress(data, compresslevel=level, mtime=0)


def compress_file(path: str | os.PathLike, level: int = DEFAULT_COMPRESSION_LEVEL) -> bytes:
    """
    Stream a file through a gzip writer.

    Args:
        path: File to compress
        level: Compression level (0-9)

    Returns:
        The complete gzip member as bytes
    """
    buffer = io.BytesIO()
    with open(path, "rb") as src:
        with gzip.GzipFile(fileobj=buffer, mode="wb", compresslevel=level, mtime=0) as dst:
            shutil.copyfileobj(src, dst, STREAM_CHUNK_SIZE)
    return buffer.getvalue()


def decompress_bytes(data: bytes) -> bytes:
    """Reverse :func:`compress_bytes`. Raises DecodeError on a corrupt stream."""
    try:
        return gzip.decompress(data)
    except (OSError, EOFError, zlib.error) as e:
        raise DecodeError(f"Corrupt gzip stream: {e}") from e


# ============================================================
# Text Encoding
# ============================================================

def encode_content(data: bytes) -> str:
    """
    Encode binary data into a URL-safe Base-64 string without padding.
    """
    return base64.urlsafe_b64encode(data).decode("ascii").rstrip("=")


def decode_content(text: str) -> bytes:
    """
    Decode a URL-safe Base-64 string, with or without padding.

    Characters outside the URL-safe alphabet are rejected instead of being
    silently discarded.
    """
    if not isinstance(text, str) or not _URLSAFE_B64.fullmatch(text):
        raise DecodeError("Content is not URL-safe Base-64")

    stripped = text.rstrip("=")
    # Restore padding for base64 decoding
    padding = "=" * ((4 - len(stripped) % 4) % 4)
    try:
        return base64.urlsafe_b64decode(stripped + padding)
    except (binascii.Error, ValueError) as e:
        raise DecodeError(f"Invalid Base-64 content: {e}") from e


# ============================================================
# Entry Content
# ============================================================

def pack_bytes(data: bytes) -> str:
    """Compress and encode an in-memory buffer into bundle content."""
    return encode_content(compress_bytes(data))


def pack_file(path: str | os.PathLike) -> str:
    """Compress and encode a file into bundle content."""
    return encode_content(compress_file(path))


def unpack_bytes(content: str) -> bytes:
    """Decode and decompress bundle content back into the original bytes."""
    return decompress_bytes(decode_content(content))


def unpack_text(content: str) -> str:
    """
    Decode bundle content into text.

    The decompressed bytes must be valid UTF-8. Binary assets survive
    :func:`unpack_bytes` but raise DecodeError here.
    """
    raw = unpack_bytes(content)
    try:
        return raw.decode("utf-8")
    except UnicodeDecodeError as e:
        raise DecodeError(f"Content is not valid UTF-8 text: {e}") from e
