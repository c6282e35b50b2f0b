"""
mvm_sdk.codec
-------------

Binary framing for memos and registry keys.

- encoder: Encoder / Decoder (int, UUID, length-prefixed bytes)
- memo:    encode_memo / decode_memo for the group-event envelope
"""

from .encoder import Decoder, Encoder, uuid_bytes
from .memo import Memo, decode_memo, encode_memo, memo_fits

__all__ = ["Encoder", "Decoder", "uuid_bytes", "Memo", "encode_memo", "decode_memo", "memo_fits"]
