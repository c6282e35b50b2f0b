"""
mvm_sdk.codec.memo
==================

Memo envelope wrapping an extra for a destination process:

    purpose (int) ∥ process (UUID) ∥ reserved (bytes, empty) ∥ reserved (bytes, empty) ∥ extra (bytes)

rendered as unpadded base64url text. The two reserved fields are always empty
but stay in the framing so existing consumers keep parsing it.
"""

from __future__ import annotations

import uuid
from dataclasses import dataclass
from typing import Union

from ..config import GROUP_EVENT, MEMO_MAX_LENGTH
from ..errors import FormatError
from ..utils.bytes import base64url_decode, base64url_encode, from_hex, to_hex
from .encoder import Decoder, Encoder


@dataclass(frozen=True)
class Memo:
    purpose: int
    process: str
    extra: str  # lowercase hex, no 0x


def _extra_bytes(extra: Union[str, bytes]) -> bytes:
    if isinstance(extra, (bytes, bytearray, memoryview)):
        return bytes(extra)
    try:
        return from_hex(extra)
    except (TypeError, ValueError) as e:
        raise FormatError("extra must be an even-length hex string", extra) from e


def encode_memo(extra: Union[str, bytes], process: Union[str, uuid.UUID]) -> str:
    enc = Encoder()
    enc.write_int(GROUP_EVENT)
    enc.write_uuid(process)
    enc.write_bytes(b"")
    enc.write_bytes(b"")
    enc.write_bytes(_extra_bytes(extra))
    return base64url_encode(enc.buf)


def memo_fits(extra: Union[str, bytes], process: Union[str, uuid.UUID]) -> bool:
    """True if the encoded memo stays within MEMO_MAX_LENGTH characters."""
    return len(encode_memo(extra, process)) <= MEMO_MAX_LENGTH


def decode_memo(text: str) -> Memo:
    try:
        raw = base64url_decode(text)
    except (TypeError, ValueError) as e:
        raise FormatError("memo is not valid base64url", text) from e
    dec = Decoder(raw)
    purpose = dec.read_int()
    process = dec.read_uuid()
    dec.read_bytes()
    dec.read_bytes()
    extra = dec.read_bytes()
    if dec.remaining:
        raise FormatError("trailing bytes after memo envelope", dec.remaining)
    return Memo(purpose=purpose, process=process, extra=to_hex(extra, prefix=False))


__all__ = ["Memo", "encode_memo", "decode_memo", "memo_fits"]
