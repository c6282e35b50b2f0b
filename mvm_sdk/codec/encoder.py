"""
mvm_sdk.codec.encoder
=====================

Append-only binary writer (and its matching reader) shared by the memo envelope
and the multisig group key derivation.

Framing
-------
* integers: unsigned 16-bit big-endian (``write_int``)
* UUIDs:    16 raw bytes of the canonical UUID
* bytes:    ``write_int(len)`` followed by the raw bytes

Both consumers must produce byte-identical framing, otherwise memo decoders and
existing registry keys stop matching.
"""

from __future__ import annotations

import re
import struct
import uuid
from typing import Union

from ..errors import FormatError
from ..utils.bytes import BytesLike

MAX_INT = 0xFFFF
INT_SIZE = 2
UUID_SIZE = 16

_INT = struct.Struct(">H")
_UUID_RE = re.compile(r"[0-9a-fA-F]{8}-[0-9a-fA-F]{4}-[0-9a-fA-F]{4}-[0-9a-fA-F]{4}-[0-9a-fA-F]{12}")


def uuid_bytes(value: Union[str, uuid.UUID]) -> bytes:
    """16 raw bytes of a UUID given as a UUID or its canonical 8-4-4-4-12 hex string."""
    if isinstance(value, uuid.UUID):
        return value.bytes
    if not isinstance(value, str) or not _UUID_RE.fullmatch(value):
        raise FormatError("invalid UUID", value)
    return uuid.UUID(value).bytes


class Encoder:
    """Length-prefixed, append-only byte buffer."""

    __slots__ = ("_buf",)

    def __init__(self, initial: BytesLike = b"") -> None:
        self._buf = bytearray(initial)

    @property
    def buf(self) -> bytes:
        return bytes(self._buf)

    def __len__(self) -> int:
        return len(self._buf)

    def write(self, data: BytesLike) -> "Encoder":
        self._buf += bytes(data)
        return self

    def write_int(self, n: int) -> "Encoder":
        if isinstance(n, bool) or not isinstance(n, int) or not 0 <= n <= MAX_INT:
            raise FormatError(f"integer must be in [0, {MAX_INT}]", n)
        self._buf += _INT.pack(n)
        return self

    def write_uuid(self, value: Union[str, uuid.UUID]) -> "Encoder":
        self._buf += uuid_bytes(value)
        return self

    def write_bytes(self, data: BytesLike) -> "Encoder":
        data = bytes(data)
        self.write_int(len(data))
        self._buf += data
        return self


class Decoder:
    """Reader for buffers produced by `Encoder`; FormatError on truncation."""

    __slots__ = ("_buf", "_pos")

    def __init__(self, data: BytesLike) -> None:
        self._buf = bytes(data)
        self._pos = 0

    @property
    def remaining(self) -> int:
        return len(self._buf) - self._pos

    def read(self, n: int) -> bytes:
        if n < 0 or self.remaining < n:
            raise FormatError(f"truncated input: need {n} bytes at offset {self._pos}", self.remaining)
        out = self._buf[self._pos : self._pos + n]
        self._pos += n
        return out

    def read_int(self) -> int:
        return _INT.unpack(self.read(INT_SIZE))[0]

    def read_uuid(self) -> str:
        return str(uuid.UUID(bytes=self.read(UUID_SIZE)))

    def read_bytes(self) -> bytes:
        return self.read(self.read_int())


__all__ = ["Encoder", "Decoder", "uuid_bytes", "MAX_INT", "INT_SIZE", "UUID_SIZE"]
