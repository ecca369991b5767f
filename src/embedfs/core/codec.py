from __future__ import annotations

"""
Payload Compressor/Encoder.

Turns raw file bytes into a text blob that can be embedded in a string
literal (gzip, then base64, then hard-wrapped lines) and back.
"""

import base64
import binascii
import gzip
import zlib

from embedfs.domain.errors import DecodeError

LINE_WIDTH = 80


def encode(data: bytes) -> str:
    """
    Compress and text-encode a payload.

    The gzip header is written with a zero timestamp so identical input
    always yields an identical blob.

    Args:
        data: Raw bytes.

    Returns:
        str: Base64 text wrapped at LINE_WIDTH, every line ending in '\\n'.
    """
    packed = base64.b64encode(gzip.compress(bytes(data), mtime=0)).decode("ascii")
    return "".join(
        packed[i:i + LINE_WIDTH] + "\n" for i in range(0, len(packed), LINE_WIDTH)
    )


def decode(blob: str) -> bytes:
    """
    Invert encode().

    Line breaks and surrounding whitespace are ignored. An empty blob
    decodes to empty bytes.

    Args:
        blob: Text produced by encode().

    Returns:
        bytes: The original payload.

    Raises:
        DecodeError: Invalid base64 or an invalid/truncated gzip stream.
    """
    text = "".join(blob.split())
    if not text:
        return b""

    try:
        raw = base64.b64decode(text, validate=True)
    except (binascii.Error, ValueError) as e:
        raise DecodeError(f"invalid base64 payload: {e}") from e

    try:
        return gzip.decompress(raw)
    except (OSError, EOFError, zlib.error) as e:
        raise DecodeError(f"invalid gzip payload: {e}") from e
