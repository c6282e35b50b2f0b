"""
mvm_sdk.registry.resolver
=========================

Map assets and user groups to MVM contract addresses through the on-chain
registry, and back.

Registry views, bound from `mvm_sdk.config.REGISTRY_ABI`:

- ``contracts(uint256) -> address``
- ``assets(address)    -> uint128``  (asset UUID as an integer)
- ``users(address)     -> bytes``    (packed member record)

Keys
----
* asset key: the 16 raw bytes of the asset UUID, read as a big-endian word.
* group key: ``keccak256(count ∥ uuid_1 .. uuid_n ∥ threshold)`` framed with
  `mvm_sdk.codec.encoder.Encoder`. Member order is part of the key; callers
  must agree on it out of band.

Reverse lookups are permissive: a value that is empty or too short to hold a
UUID is reported as "not found" (empty string) instead of raising.

Example
-------
    from mvm_sdk.rpc.http import RpcClient
    from mvm_sdk.registry.resolver import RegistryResolver

    resolver = RegistryResolver(RpcClient.from_config(cfg), config=cfg)
    addr = resolver.contract_for_users(["e8e8cd79-cd40-4796-8c54-3a13cfe50115"])
    resolver.user_for_contract(addr)
"""

from __future__ import annotations

import logging
import uuid
from typing import Any, Mapping, Optional, Protocol, Sequence, Union

from eth_abi import decode as abi_decode
from eth_abi import encode as abi_encode
from eth_abi.exceptions import DecodingError

from ..codec.encoder import INT_SIZE, UUID_SIZE, Encoder, uuid_bytes
from ..config import DEFAULT, REGISTRY_ABI, MvmConfig
from ..contracts.call import normalize_address
from ..errors import FormatError, RegistryUnavailableError
from ..types.abi import MethodDescriptor, method_table
from ..utils.bytes import from_hex
from ..utils.hash import keccak256

log = logging.getLogger(__name__)

# Packed user record: member count prefix, then the first member UUID.
USER_RECORD_OFFSET = INT_SIZE

UserIds = Union[str, Sequence[str]]


class _RpcClient(Protocol):
    def eth_call(self, to: str, data: str) -> str: ...


# --- Key derivation ---------------------------------------------------------


def asset_key(asset_id: str) -> int:
    """Registry key for an asset: its raw UUID bytes as an unsigned integer."""
    return int.from_bytes(uuid_bytes(asset_id), "big")


def group_key(user_ids: UserIds, threshold: Optional[int] = None) -> bytes:
    """32-byte multisig group key; threshold defaults to the member count."""
    ids = [user_ids] if isinstance(user_ids, str) else list(user_ids)
    if not ids:
        raise FormatError("at least one user id is required", user_ids)
    if not threshold:
        threshold = len(ids)
    enc = Encoder()
    enc.write_int(len(ids))
    for uid in ids:
        enc.write_uuid(uid)
    enc.write_int(threshold)
    return keccak256(enc.buf)


# --- Resolver ---------------------------------------------------------------


class RegistryResolver:
    """
    Read-side client of the MVM registry contract.

    Parameters
    ----------
    rpc : client exposing ``eth_call(to, data) -> "0x…"`` (see `mvm_sdk.rpc.http.RpcClient`).
    config : MvmConfig supplying the default registry address.
    address : registry contract address override.
    """

    def __init__(self, rpc: _RpcClient, *, config: Optional[MvmConfig] = None, address: Optional[str] = None) -> None:
        self._rpc = rpc
        self._config = config or DEFAULT
        self._address = "0x" + normalize_address(address or self._config.registry_address)
        self._views: Mapping[str, MethodDescriptor] = method_table(REGISTRY_ABI)

    @property
    def address(self) -> str:
        return self._address

    # ------------------------------------------------------------------ forward

    def contract_for_asset(self, asset_id: str) -> str:
        return self._contracts(asset_key(asset_id))

    def contract_for_users(self, user_ids: UserIds, threshold: Optional[int] = None) -> str:
        return self._contracts(int.from_bytes(group_key(user_ids, threshold), "big"))

    # ------------------------------------------------------------------ reverse

    def asset_for_contract(self, address: str) -> str:
        value = self._view("assets", "0x" + normalize_address(address))
        if not value:
            return ""
        return str(uuid.UUID(bytes=int(value).to_bytes(UUID_SIZE, "big")))

    def user_for_contract(self, address: str) -> str:
        record = self._view("users", "0x" + normalize_address(address))
        return user_from_record(record or b"")

    # ------------------------------------------------------------------ internals

    def _contracts(self, key: int) -> str:
        addr = self._view("contracts", key)
        return addr or ""

    def _view(self, fn: str, *args: Any) -> Any:
        m = self._views[fn]
        raw = self._call(m, args)
        return self._decode_single(m.outputs[0], raw, fn)

    def _call(self, m: MethodDescriptor, args: Sequence[Any]) -> bytes:
        fn = m.name
        data = "0x" + m.selector + abi_encode(list(m.types), list(args)).hex()
        try:
            out = self._rpc.eth_call(self._address, data)
        except Exception as e:
            raise RegistryUnavailableError(str(e), registry=self._address, function=fn) from e
        try:
            return from_hex(out or "0x")
        except (TypeError, ValueError):
            log.debug("registry %s returned non-hex data: %r", fn, out)
            return b""

    @staticmethod
    def _decode_single(typ: str, raw: bytes, fn: str) -> Any:
        if not raw:
            return None
        try:
            return abi_decode([typ], raw)[0]
        except (DecodingError, ValueError, OverflowError) as e:
            log.debug("registry %s returned undecodable data (%d bytes): %s", fn, len(raw), e)
            return None


def user_from_record(record: bytes) -> str:
    """
    Extract the user UUID from a packed ``users(address)`` record.

    The UUID sits at bytes 3..18 (1-based) of the record, after the 2-byte member
    count. Records too short to hold it are treated as not found.
    """
    end = USER_RECORD_OFFSET + UUID_SIZE
    if len(record) < end:
        if record:
            log.debug("users record too short: %d bytes", len(record))
        return ""
    return str(uuid.UUID(bytes=bytes(record[USER_RECORD_OFFSET:end])))


__all__ = ["RegistryResolver", "asset_key", "group_key", "user_from_record", "USER_RECORD_OFFSET"]
