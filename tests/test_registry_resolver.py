import uuid

import pytest

from mvm_sdk.codec.encoder import Encoder
from mvm_sdk.config import REGISTRY_ABI
from mvm_sdk.errors import FormatError, RegistryUnavailableError, RpcError
from mvm_sdk.registry.resolver import (RegistryResolver, asset_key, group_key,
                                       user_from_record)
from mvm_sdk.types.abi import function_selector, method_table
from mvm_sdk.utils.hash import keccak256

ASSET = "965e5c6e-434c-3fa9-b780-c50f43cd955c"
USER_A = "e8e8cd79-cd40-4796-8c54-3a13cfe50115"
USER_B = "a15e0b6d-76ed-4443-b83f-ade9eca2681a"
CONTRACT_A = "0x" + "a1" * 20
CONTRACT_B = "0x" + "b2" * 20


def test_asset_key_is_raw_uuid_word():
    assert asset_key(ASSET) == int("965e5c6e434c3fa9b780c50f43cd955c", 16)


def test_group_key_framing():
    enc = Encoder().write_int(2).write_uuid(USER_A).write_uuid(USER_B).write_int(1)
    assert group_key([USER_A, USER_B], 1) == keccak256(enc.buf)
    assert len(group_key([USER_A])) == 32


def test_group_key_threshold_defaults_to_member_count():
    assert group_key([USER_A, USER_B]) == group_key([USER_A, USER_B], 2)
    assert group_key(USER_A) == group_key([USER_A], 1)


def test_group_key_is_order_sensitive():
    assert group_key([USER_A, USER_B]) != group_key([USER_B, USER_A])


def test_group_key_rejects_bad_input():
    with pytest.raises(FormatError):
        group_key([])
    with pytest.raises(FormatError):
        group_key(["nope"])


def test_contract_for_asset(rpc, config):
    rpc.contracts[asset_key(ASSET)] = CONTRACT_A
    resolver = RegistryResolver(rpc, config=config)
    assert resolver.contract_for_asset(ASSET).lower() == CONTRACT_A
    to, data = rpc.calls[0]
    assert to == config.registry_address.lower()
    assert data.startswith("0x") and len(data) == 2 + 8 + 64


def test_contract_for_users(rpc, config):
    rpc.contracts[int.from_bytes(group_key([USER_A, USER_B]), "big")] = CONTRACT_B
    resolver = RegistryResolver(rpc, config=config)
    assert resolver.contract_for_users([USER_A, USER_B]).lower() == CONTRACT_B
    assert resolver.contract_for_users([USER_A, USER_B], 2).lower() == CONTRACT_B
    # a different ordering derives a different key, which is unregistered
    assert int(resolver.contract_for_users([USER_B, USER_A]), 16) == 0


def test_registry_address_override(rpc, config):
    resolver = RegistryResolver(rpc, config=config, address="0x" + "cd" * 20)
    resolver.contract_for_asset(ASSET)
    assert rpc.calls[0][0] == "0x" + "cd" * 20


def test_asset_for_contract(rpc, config):
    rpc.assets[CONTRACT_A] = int(uuid.UUID(ASSET).hex, 16)
    assert RegistryResolver(rpc, config=config).asset_for_contract(CONTRACT_A) == ASSET


def test_asset_for_contract_empty_value_is_not_found(rpc, config):
    resolver = RegistryResolver(rpc, config=config)
    assert resolver.asset_for_contract(CONTRACT_B) == ""


def test_asset_for_contract_tolerates_empty_return_data(rpc, config):
    # Permissive legacy behaviour: "0x" (no code at the registry) reads as not found
    rpc.raw[function_selector("assets", ["address"])] = "0x"
    assert RegistryResolver(rpc, config=config).asset_for_contract(CONTRACT_A) == ""


def test_user_for_contract_pinned_sample(rpc, config):
    # users(address) record: member count (0001) ∥ member uuid ∥ threshold (0001)
    record = bytes.fromhex("0001" + "e8e8cd79cd4047968c543a13cfe50115" + "0001")
    rpc.users[CONTRACT_A] = record
    assert RegistryResolver(rpc, config=config).user_for_contract(CONTRACT_A) == USER_A


def test_user_for_contract_empty_record_is_not_found(rpc, config):
    assert RegistryResolver(rpc, config=config).user_for_contract(CONTRACT_B) == ""


def test_user_for_contract_undersized_record_is_not_found(rpc, config):
    # Tolerated on purpose: a record too short to hold a UUID reads as not found
    rpc.users[CONTRACT_A] = bytes.fromhex("0001e8e8cd79")
    assert RegistryResolver(rpc, config=config).user_for_contract(CONTRACT_A) == ""


def test_user_from_record_offset():
    record = b"\x00\x02" + uuid.UUID(USER_B).bytes + uuid.UUID(USER_A).bytes + b"\x00\x02"
    assert user_from_record(record) == USER_B
    assert user_from_record(record[:17]) == ""
    assert user_from_record(record[:18]) == USER_B


def test_rpc_failure_raises_registry_unavailable(rpc, config):
    rpc.fail = RpcError(code=-32098, message="Network error")
    resolver = RegistryResolver(rpc, config=config)
    with pytest.raises(RegistryUnavailableError) as ei:
        resolver.contract_for_asset(ASSET)
    assert isinstance(ei.value.__cause__, RpcError)
    assert ei.value.function == "contracts"
    with pytest.raises(RegistryUnavailableError):
        resolver.user_for_contract(CONTRACT_A)


def test_malformed_contract_address(rpc, config):
    with pytest.raises(FormatError):
        RegistryResolver(rpc, config=config).asset_for_contract("0x1234")


def test_views_are_bound_from_registry_abi(rpc, config):
    resolver = RegistryResolver(rpc, config=config)
    resolver.contract_for_asset(ASSET)
    resolver.asset_for_contract(CONTRACT_A)
    resolver.user_for_contract(CONTRACT_A)
    selectors = [data[2:10] for _, data in rpc.calls]
    views = method_table(REGISTRY_ABI)
    assert selectors == [views["contracts"].selector, views["assets"].selector, views["users"].selector]
    assert [views[n].outputs for n in ("contracts", "assets", "users")] == [("address",), ("uint128",), ("bytes",)]
