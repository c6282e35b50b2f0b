"""
mvm_sdk.contracts.call
======================

Raw contract-call payloads: ``address ∥ selector ∥ abi-encoded arguments``.

    from mvm_sdk.contracts.call import encode_call

    call = encode_call(
        "0x2e8f70631208a2ecfacf4a6e3f7d2c17f7c5c5f8",
        method_name="transfer",
        types=["address", "uint256"],
        values=["0x" + "11" * 20, 1000],
    )
    call.extra   # hex, no 0x: 20-byte address + 4-byte selector + 64 bytes of args

The selector is computed from the canonical signature unless an explicit
``method_id`` is given. Argument encoding is standard ABI tuple encoding via
`eth_abi`, so dynamic types (bytes, string, arrays) are supported.
"""

from __future__ import annotations

import re
from dataclasses import dataclass
from typing import Any, Optional, Sequence, Tuple

from eth_abi import encode as abi_encode
from eth_abi.exceptions import EncodingError

from ..errors import AbiError, ArityError, FormatError, MissingAddressError, MissingSelectorError
from ..types.abi import canonical_type, function_selector, normalize_selector
from ..utils.bytes import from_hex, strip_0x

_ADDRESS_RE = re.compile(r"^[0-9a-fA-F]{40}$")


def normalize_address(address: str) -> str:
    """Strip the 0x prefix and lowercase; FormatError unless 20 bytes of hex."""
    if not isinstance(address, str):
        raise FormatError("address must be a hex string", address)
    s = strip_0x(address.strip())
    if not _ADDRESS_RE.match(s):
        raise FormatError("address must be 20 bytes of hex", address)
    return s.lower()


@dataclass(frozen=True)
class ContractCall:
    address: str  # 40 hex chars, no 0x
    selector: str  # 8 hex chars
    types: Tuple[str, ...]
    values: Tuple[Any, ...]
    arguments: str  # abi-encoded args, hex, no 0x

    @property
    def extra(self) -> str:
        return self.address + self.selector + self.arguments

    @property
    def raw(self) -> bytes:
        return from_hex(self.extra)


def encode_arguments(types: Sequence[str], values: Sequence[Any], *, function: Optional[str] = None) -> str:
    """ABI tuple encoding of `values` as `types`; empty string when there are no arguments."""
    if len(types) != len(values):
        raise ArityError(types=len(types), values=len(values), function=function)
    if not types:
        return ""
    try:
        return abi_encode(list(types), list(values)).hex()
    except (EncodingError, TypeError, ValueError, OverflowError) as e:
        raise AbiError(f"argument encoding failed: {e}", function=function) from e


def encode_call(
    contract_address: Optional[str],
    *,
    method_id: Optional[str] = None,
    method_name: Optional[str] = None,
    types: Sequence[str] = (),
    values: Sequence[Any] = (),
) -> ContractCall:
    """
    Build the raw call payload for `contract_address`.

    Raises
    ------
    MissingAddressError   no contract address
    MissingSelectorError  neither method_id nor method_name
    FormatError           malformed address or method id
    ArityError            len(types) != len(values)
    AbiError              unsupported type string or value that cannot be encoded
    """
    if not contract_address:
        raise MissingAddressError()
    address = normalize_address(contract_address)
    if not method_id and not method_name:
        raise MissingSelectorError()
    ctypes = tuple(canonical_type(t) for t in types)
    if method_id:
        selector = normalize_selector(method_id)
    else:
        selector = function_selector(str(method_name), ctypes)
    arguments = encode_arguments(ctypes, list(values), function=method_name)
    return ContractCall(
        address=address,
        selector=selector,
        types=ctypes,
        values=tuple(values),
        arguments=arguments,
    )


__all__ = ["ContractCall", "encode_call", "encode_arguments", "normalize_address"]
