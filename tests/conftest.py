from __future__ import annotations

from typing import Any, Dict, List, Optional, Tuple

import pytest
from eth_abi import decode as abi_decode
from eth_abi import encode as abi_encode

from mvm_sdk.config import MvmConfig
from mvm_sdk.types.abi import function_selector

ZERO_ADDRESS = "0x" + "00" * 20

SEL_CONTRACTS = function_selector("contracts", ["uint256"])
SEL_ASSETS = function_selector("assets", ["address"])
SEL_USERS = function_selector("users", ["address"])


class FakeRpc:
    """
    In-memory stand-in for the registry behind ``eth_call``.

    contracts: key (int) -> address
    assets:    address (lowercase, 0x) -> uint128
    users:     address (lowercase, 0x) -> packed record bytes
    raw:       selector -> verbatim 0x-hex result (overrides the maps)
    """

    def __init__(self) -> None:
        self.calls: List[Tuple[str, str]] = []
        self.contracts: Dict[int, str] = {}
        self.assets: Dict[str, int] = {}
        self.users: Dict[str, bytes] = {}
        self.raw: Dict[str, str] = {}
        self.fail: Optional[Exception] = None

    def eth_call(self, to: str, data: str) -> str:
        self.calls.append((to, data))
        if self.fail is not None:
            raise self.fail
        selector, args = data[2:10], bytes.fromhex(data[10:])
        if selector in self.raw:
            return self.raw[selector]
        if selector == SEL_CONTRACTS:
            (key,) = abi_decode(["uint256"], args)
            addr = self.contracts.get(key, ZERO_ADDRESS)
            return "0x" + abi_encode(["address"], [addr]).hex()
        if selector == SEL_ASSETS:
            (addr,) = abi_decode(["address"], args)
            return "0x" + abi_encode(["uint128"], [self.assets.get(addr.lower(), 0)]).hex()
        if selector == SEL_USERS:
            (addr,) = abi_decode(["address"], args)
            return "0x" + abi_encode(["bytes"], [self.users.get(addr.lower(), b"")]).hex()
        raise AssertionError(f"unexpected selector {selector}")


class FakeUploader:
    """Records uploads; acknowledges with a hash unless `ack` is False."""

    def __init__(self, ack: bool = True) -> None:
        self.ack = ack
        self.calls: List[Dict[str, Any]] = []

    def upload(self, *, uploadkey: str, key: str, raw: str, address: str) -> Dict[str, Any]:
        self.calls.append({"uploadkey": uploadkey, "key": key, "raw": raw, "address": address})
        if not self.ack:
            return {"error": "storage failed"}
        return {"hash": "0x" + "ab" * 32}


@pytest.fixture
def config() -> MvmConfig:
    return MvmConfig(rpc_url="http://127.0.0.1:8545", api_url="http://127.0.0.1:9000")


@pytest.fixture
def rpc() -> FakeRpc:
    return FakeRpc()


@pytest.fixture
def uploader() -> FakeUploader:
    return FakeUploader()
