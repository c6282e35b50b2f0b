"""
mvm_sdk.extra.generator
=======================

Turn a contract call into the opcode-prefixed "extra" carried by an MVM memo.

Flow
----
1. Build the raw extra (``address ∥ selector ∥ args``) with
   `mvm_sdk.contracts.call.encode_call`.
2. ``ignore_upload`` short-circuits here (payment path): the raw extra is
   returned without an opcode.
3. If the memo for the raw extra fits in ``MEMO_MAX_LENGTH`` characters the
   extra is kept inline.
4. Otherwise the raw bytes are uploaded once, keyed by keccak256(raw), and the
   32-byte key replaces the payload (opcode bit 0).

Opcode bits: 1 = stored externally, 2 = delegatecall. The opcode is written as
one byte in front of the payload (``"0" + str(opcode)``) and the whole string is
lower-cased.
"""

from __future__ import annotations

import logging
from dataclasses import dataclass
from enum import Enum
from typing import Any, Mapping, Optional, Protocol, Sequence

from ..codec.memo import encode_memo
from ..config import DEFAULT, MEMO_MAX_LENGTH, MvmConfig
from ..contracts.call import ContractCall, encode_call
from ..errors import PayloadTooLargeError, UploadError
from ..utils.bytes import to_hex
from ..utils.hash import keccak256_hex

log = logging.getLogger(__name__)

OPCODE_STORED = 1
OPCODE_DELEGATECALL = 2


class Uploader(Protocol):
    def upload(self, *, uploadkey: str, key: str, raw: str, address: str) -> Mapping[str, Any]: ...


class ExtraKind(str, Enum):
    RAW = "raw"  # ignore_upload: no opcode handling
    INLINE = "inline"  # call data carried in the memo
    STORED = "stored"  # 32-byte key carried in the memo, call data uploaded


@dataclass(frozen=True)
class ExtraOptions:
    delegatecall: bool = False
    process: Optional[str] = None  # destination process; defaults to the registry process
    address: Optional[str] = None  # registry address sent along with uploads
    uploadkey: Optional[str] = None
    ignore_upload: bool = False


@dataclass(frozen=True)
class ExtraResult:
    kind: ExtraKind
    extra: str
    raw: str  # raw call extra before any substitution
    opcode: Optional[int] = None
    key: Optional[str] = None  # 0x-prefixed keccak256(raw) when stored

    @property
    def stored(self) -> bool:
        return self.kind is ExtraKind.STORED

    def __str__(self) -> str:
        return self.extra


def _finalize(opcode: int, payload: str) -> str:
    return ("0" + str(opcode) + payload).lower()


class ExtraGenerator:
    """
    Generate extras for a given configuration and upload collaborator.

    Parameters
    ----------
    uploader : object with ``upload(uploadkey=, key=, raw=, address=)`` returning
        the service response; usually `mvm_sdk.api.client.MvmApiClient`. Only
        needed for payloads that overflow the memo.
    config : MvmConfig supplying the default process and registry address.
    """

    def __init__(self, uploader: Optional[Uploader] = None, *, config: Optional[MvmConfig] = None) -> None:
        self._uploader = uploader
        self._config = config or DEFAULT

    @property
    def config(self) -> MvmConfig:
        return self._config

    def generate(
        self,
        contract_address: Optional[str],
        *,
        method_id: Optional[str] = None,
        method_name: Optional[str] = None,
        types: Sequence[str] = (),
        values: Sequence[Any] = (),
        options: Optional[ExtraOptions] = None,
    ) -> ExtraResult:
        call = encode_call(
            contract_address,
            method_id=method_id,
            method_name=method_name,
            types=types,
            values=values,
        )
        return self.generate_for_call(call, options)

    def generate_for_call(self, call: ContractCall, options: Optional[ExtraOptions] = None) -> ExtraResult:
        opts = options or ExtraOptions()
        raw = call.extra
        if opts.ignore_upload:
            return ExtraResult(kind=ExtraKind.RAW, extra=raw, raw=raw)

        process = opts.process or self._config.registry_process
        opcode = OPCODE_DELEGATECALL if opts.delegatecall else 0

        memo_length = len(encode_memo(raw, process))
        if memo_length <= MEMO_MAX_LENGTH:
            log.debug("extra inline: memo_length=%d selector=%s", memo_length, call.selector)
            return ExtraResult(kind=ExtraKind.INLINE, extra=_finalize(opcode, raw), raw=raw, opcode=opcode)

        if not opts.uploadkey:
            raise PayloadTooLargeError(memo_length=memo_length, limit=MEMO_MAX_LENGTH)

        key = self._upload(call.raw, uploadkey=opts.uploadkey, address=opts.address or self._config.registry_address)
        opcode |= OPCODE_STORED
        return ExtraResult(
            kind=ExtraKind.STORED,
            extra=_finalize(opcode, key[2:]),
            raw=raw,
            opcode=opcode,
            key=key,
        )

    def _upload(self, raw: bytes, *, uploadkey: str, address: str) -> str:
        if self._uploader is None:
            raise UploadError("no upload client configured")
        key = keccak256_hex(raw)
        log.info("uploading extra: key=%s size=%d", key, len(raw))
        res = self._uploader.upload(uploadkey=uploadkey, key=key, raw=to_hex(raw), address=address)
        if not isinstance(res, Mapping) or not res.get("hash"):
            raise UploadError("upload was not acknowledged", key=key, response=res)
        return key


def generate_extra(
    contract_address: Optional[str],
    *,
    method_id: Optional[str] = None,
    method_name: Optional[str] = None,
    types: Sequence[str] = (),
    values: Sequence[Any] = (),
    options: Optional[ExtraOptions] = None,
    uploader: Optional[Uploader] = None,
    config: Optional[MvmConfig] = None,
) -> str:
    """One-shot helper returning the final extra string."""
    gen = ExtraGenerator(uploader, config=config)
    return gen.generate(
        contract_address,
        method_id=method_id,
        method_name=method_name,
        types=types,
        values=values,
        options=options,
    ).extra


__all__ = [
    "ExtraGenerator",
    "ExtraOptions",
    "ExtraResult",
    "ExtraKind",
    "Uploader",
    "generate_extra",
    "OPCODE_STORED",
    "OPCODE_DELEGATECALL",
]
