"""
Utility helpers for the Python SDK.

Re-exports:
- bytes: hex and base64url helpers
- hash: Keccak-256 convenience wrappers
"""

from .bytes import (base64url_decode, base64url_encode, ensure_bytes,
                    from_hex, strip_0x, to_hex)
from .hash import keccak256, keccak256_hex

__all__ = [
    # bytes
    "to_hex",
    "from_hex",
    "strip_0x",
    "ensure_bytes",
    "base64url_encode",
    "base64url_decode",
    # hash
    "keccak256",
    "keccak256_hex",
]
