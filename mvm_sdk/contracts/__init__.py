"""
mvm_sdk.contracts
=================

Helpers for turning contract calls into MVM payloads.

Submodules
----------
- call   : encode_call -> ContractCall (address ∥ selector ∥ abi-encoded args)
- client : ContractClient, invoke ABI functions by name

`client` depends on `mvm_sdk.extra`, which itself uses `call`; it is therefore
resolved lazily on first attribute access.
"""

from __future__ import annotations

import importlib
from typing import Any

from .call import ContractCall, encode_call, normalize_address

__all__ = ["ContractCall", "encode_call", "normalize_address", "ContractClient", "client", "call"]


def __getattr__(name: str) -> Any:
    if name == "client":
        return importlib.import_module(".client", __name__)
    if name == "ContractClient":
        return importlib.import_module(".client", __name__).ContractClient
    raise AttributeError(f"module {__name__!r} has no attribute {name!r}")
