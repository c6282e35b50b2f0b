import pytest

from mvm_sdk.contracts.call import encode_call
from mvm_sdk.contracts.client import ContractClient
from mvm_sdk.errors import AbiError, ArityError
from mvm_sdk.extra.generator import ExtraGenerator, ExtraKind, ExtraOptions

CONTRACT = "0x2e8f70631208a2ecfacf4a6e3f7d2c17f7c5c5f8"
RECIPIENT = "0x" + "11" * 20

ABI = [
    {
        "type": "function",
        "name": "transfer",
        "inputs": [{"name": "to", "type": "address"}, {"name": "amount", "type": "uint256"}],
        "outputs": [{"name": "", "type": "bool"}],
    },
    {
        "type": "function",
        "name": "setData",
        "inputs": [{"name": "data", "type": "bytes"}],
        "outputs": [],
    },
    {"type": "event", "name": "Transfer", "inputs": []},
]


@pytest.fixture
def client(config, uploader) -> ContractClient:
    return ContractClient(CONTRACT, ABI, generator=ExtraGenerator(uploader, config=config))


def test_methods_are_bound_descriptors(client):
    assert set(client.methods) == {"transfer", "setData", "transfer(address,uint256)", "setData(bytes)"}
    assert client.methods["transfer"].selector == "a9059cbb"
    assert client.methods["transfer"].types == ("address", "uint256")
    assert client.address == CONTRACT[2:]


def test_encode_by_name_matches_explicit_call(client):
    call = client.encode("transfer", RECIPIENT, 1000)
    expected = encode_call(CONTRACT, method_name="transfer", types=["address", "uint256"], values=[RECIPIENT, 1000])
    assert call.extra == expected.extra


def test_invoke_inline(client):
    res = client.invoke("transfer", RECIPIENT, 1000)
    assert res.kind is ExtraKind.INLINE
    assert res.extra.startswith("00" + CONTRACT[2:] + "a9059cbb")


def test_invoke_with_upload(client, uploader):
    res = client.invoke("setData", b"\x42" * 200, options=ExtraOptions(uploadkey="k", delegatecall=True))
    assert res.kind is ExtraKind.STORED
    assert res.extra.startswith("03")
    assert len(uploader.calls) == 1


def test_unknown_method(client):
    with pytest.raises(AbiError):
        client.invoke("mint", 1)


def test_wrong_argument_count(client):
    with pytest.raises(ArityError):
        client.invoke("transfer", RECIPIENT)


ERC721_TRANSFERS = [
    {
        "type": "function",
        "name": "safeTransferFrom",
        "inputs": [
            {"name": "from", "type": "address"},
            {"name": "to", "type": "address"},
            {"name": "tokenId", "type": "uint256"},
        ],
        "outputs": [],
    },
    {
        "type": "function",
        "name": "safeTransferFrom",
        "inputs": [
            {"name": "from", "type": "address"},
            {"name": "to", "type": "address"},
            {"name": "tokenId", "type": "uint256"},
            {"name": "data", "type": "bytes"},
        ],
        "outputs": [],
    },
]


def test_overloaded_functions_are_callable(config):
    nft = ContractClient(CONTRACT, ERC721_TRANSFERS, generator=ExtraGenerator(config=config))

    # plain name binds the last declared overload
    assert nft.method("safeTransferFrom").types == ("address", "address", "uint256", "bytes")
    res = nft.invoke("safeTransferFrom", RECIPIENT, RECIPIENT, 7, b"\x01")
    assert res.extra.startswith("00" + CONTRACT[2:] + "b88d4fde")

    res = nft.invoke("safeTransferFrom(address,address,uint256)", RECIPIENT, RECIPIENT, 7)
    assert res.extra.startswith("00" + CONTRACT[2:] + "42842e0e")
