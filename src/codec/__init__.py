"""
Codec subsystem for Bundlee.

Purpose: Turn file bytes into transport-safe bundle content and back.

Responsibilities:
- Stream files through gzip compression
- Encode compressed bytes as unpadded URL-safe Base-64
- Reverse both steps and decode the result as UTF-8 text

Non-responsibilities:
- No file discovery
- No caching of decoded content
"""

from .codec import (
    compress_bytes,
    compress_file,
    decompress_bytes,
    encode_content,
    decode_content,
    pack_bytes,
    pack_file,
    unpack_bytes,
    unpack_text,
    DecodeError,
    CorruptArchiveError,
)

__all__ = [
    "compress_bytes",
    "compress_file",
    "decompress_bytes",
    "encode_content",
    "decode_content",
    "pack_bytes",
    "pack_file",
    "unpack_bytes",
    "unpack_text",
    "DecodeError",
    "CorruptArchiveError",
]
