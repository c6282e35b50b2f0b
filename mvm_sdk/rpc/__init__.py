"""
mvm_sdk.rpc
-----------

JSON-RPC over HTTP (httpx). Used by the registry resolver for ``eth_call``.

    from mvm_sdk.rpc import RpcClient
    rpc = RpcClient(url="https://quorum-testnet.mixin.zone/")
"""

from .http import RpcClient

__all__ = ["RpcClient"]
