from __future__ import annotations

import base64
import binascii
import re
from typing import Union

BytesLike = Union[bytes, bytearray, memoryview]


def ensure_bytes(data: Union[BytesLike, str]) -> bytes:
    """
    Ensure input is bytes.

    Accepts:
      - bytes / bytearray / memoryview  -> bytes(data)
      - str: treated as hex; optional '0x' prefix; even-length enforced

    Raises:
      ValueError on invalid hex strings.
    """
    if isinstance(data, (bytes, bytearray, memoryview)):
        return bytes(data)
    if isinstance(data, str):
        return from_hex(data)
    raise TypeError(f"Unsupported type for ensure_bytes: {type(data)!r}")


def strip_0x(s: str) -> str:
    """Drop a leading '0x'/'0X' scheme prefix if present."""
    return s[2:] if s.startswith(("0x", "0X")) else s


def to_hex(b: BytesLike, prefix: bool = True) -> str:
    """
    Bytes -> hex string (lowercase). Prefix with '0x' by default.
    """
    s = bytes(b).hex()
    return f"0x{s}" if prefix else s


def from_hex(s: str) -> bytes:
    """
    Hex string (optionally '0x' prefixed) -> bytes.

    Enforces even-length (nibbles must pair to bytes) and lowercase/uppercase agnostic.
    """
    if not isinstance(s, str):
        raise TypeError("from_hex expects a string")
    s = strip_0x(s)
    if len(s) % 2 != 0:
        raise ValueError("hex string must have even length")
    try:
        return bytes.fromhex(s)
    except ValueError as e:
        raise ValueError(f"invalid hex string: {e}") from e


# --- base64url (RFC 4648 §5, unpadded) ----------------------------------------

_B64URL_RE = re.compile(r"[A-Za-z0-9_-]*")


def base64url_encode(b: BytesLike) -> str:
    """URL-safe base64 without '=' padding, as carried in transaction memos."""
    return base64.urlsafe_b64encode(bytes(b)).decode("ascii").rstrip("=")


def base64url_decode(s: str) -> bytes:
    """Inverse of `base64url_encode`; only the unpadded URL-safe alphabet is accepted."""
    if not isinstance(s, str):
        raise TypeError("base64url_decode expects a string")
    if not _B64URL_RE.fullmatch(s):
        raise ValueError("invalid base64url string: unexpected characters")
    padded = s + "=" * (-len(s) % 4)
    try:
        return base64.urlsafe_b64decode(padded.encode("ascii"))
    except (binascii.Error, UnicodeEncodeError) as e:
        raise ValueError(f"invalid base64url string: {e}") from e


__all__ = [
    "BytesLike",
    "ensure_bytes",
    "strip_0x",
    "to_hex",
    "from_hex",
    "base64url_encode",
    "base64url_decode",
]
