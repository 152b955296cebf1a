"""Strict unpadded base64url decoding shared by the token codec and key-set decoder."""

from __future__ import annotations

import re

from jwt.utils import base64url_decode

_B64URL_RE = re.compile(r"[A-Za-z0-9_-]*")


def b64url_decode(value: str) -> bytes:
    """
    Decode an unpadded base64url string.

    ``jwt.utils.base64url_decode`` silently drops characters outside the
    alphabet and tolerates padding; the compact token and JWK formats allow
    neither, so both are rejected here with ``ValueError``.
    """
    if not _B64URL_RE.fullmatch(value) or len(value) % 4 == 1:
        raise ValueError("invalid base64url data")
    return base64url_decode(value)


def b64url_uint(value: str) -> int:
    """Decode a base64url string holding a big-endian unsigned integer."""
    return int.from_bytes(b64url_decode(value), byteorder="big")
