from __future__ import annotations

"""
HTTP JSON-RPC client (sync), built on httpx.

- One attempt per request: retry policy belongs to the caller.
- Transport failures and JSON-RPC error objects both surface as RpcError.
- Accepts an optional httpx transport so tests can use httpx.MockTransport.

Example:
    from mvm_sdk.rpc.http import RpcClient
    with RpcClient("https://quorum-testnet.mixin.zone/") as rpc:
        out = rpc.eth_call("0x3c84...", "0x...")
"""

import json
import logging
import time
from dataclasses import dataclass, field
from itertools import count
from typing import Any, Dict, Iterator, Mapping, Optional, Sequence, Union

import httpx

from ..errors import JsonRpcCode, RpcError, from_jsonrpc_error
from ..version import user_agent

log = logging.getLogger(__name__)

JSON = Union[dict, list, str, int, float, bool, None]
Params = Union[Sequence[Any], Mapping[str, Any], None]


def _now_ms() -> int:
    return int(time.time() * 1000)


@dataclass
class RpcClient:
    """Synchronous JSON-RPC 2.0 client over HTTP."""

    url: str
    timeout: float = 30.0
    headers: Optional[Mapping[str, str]] = None
    transport: Optional[httpx.BaseTransport] = None
    _id_counter: Iterator[int] = field(default_factory=lambda: count(start=_now_ms()))
    _client: Optional[httpx.Client] = field(init=False, default=None)

    def __post_init__(self) -> None:
        merged_headers: Dict[str, str] = {
            "Content-Type": "application/json",
            "Accept": "application/json",
            "User-Agent": user_agent(),
        }
        if self.headers:
            merged_headers.update(dict(self.headers))
        self._client = httpx.Client(
            timeout=self.timeout,
            headers=merged_headers,
            transport=self.transport,
        )

    @classmethod
    def from_config(cls, config: Any, **kwargs: Any) -> "RpcClient":
        """Build from an MvmConfig (rpc_url, request_timeout, http_headers())."""
        return cls(
            url=config.rpc_url,
            timeout=float(config.request_timeout),
            headers=config.http_headers(),
            **kwargs,
        )

    # --- context manager -------------------------------------------------

    def __enter__(self) -> "RpcClient":
        return self

    def __exit__(self, exc_type, exc, tb) -> None:  # noqa: ANN001
        self.close()

    def close(self) -> None:
        if self._client is not None:
            self._client.close()

    # --- public API ------------------------------------------------------

    def request(self, method: str, params: Params = None) -> JSON:
        """Perform a single JSON-RPC request and return `result` or raise RpcError."""
        payload = self._make_payload(method, params)
        return self._send_once(method, payload)

    def eth_call(self, to: str, data: str, block: Union[str, int] = "latest") -> str:
        """Execute a read-only call against `to`; returns the 0x-hex return data."""
        tag = hex(block) if isinstance(block, int) else block
        res = self.request("eth_call", [{"to": to, "data": data}, tag])
        if not isinstance(res, str):
            raise RpcError(
                code=JsonRpcCode.INTERNAL_ERROR,
                message="eth_call returned a non-string result",
                method="eth_call",
                data=res,
            )
        return res

    # --- internals -------------------------------------------------------

    def _make_payload(self, method: str, params: Params) -> Dict[str, Any]:
        if params is None:
            params = []
        elif isinstance(params, Mapping):
            params = dict(params)
        elif isinstance(params, Sequence) and not isinstance(params, (str, bytes, bytearray)):
            params = list(params)
        else:
            # Coerce single param into positional list
            params = [params]  # type: ignore[list-item]
        return {"jsonrpc": "2.0", "id": next(self._id_counter), "method": method, "params": params}

    def _send_once(self, method: str, payload: Dict[str, Any]) -> JSON:
        assert self._client is not None
        body = json.dumps(payload, separators=(",", ":"), ensure_ascii=False)
        log.debug("rpc -> %s id=%s", method, payload["id"])
        try:
            r = self._client.post(self.url, content=body)
        except httpx.HTTPError as e:
            raise RpcError(
                code=JsonRpcCode.TRANSPORT_ERROR,
                message="Network error",
                method=method,
                data=str(e),
            ) from e
        # Avoid raise_for_status() to keep error body visible below
        try:
            resp = r.json()
        except ValueError as e:
            raise RpcError(
                code=JsonRpcCode.INTERNAL_ERROR,
                message="Non-JSON response from RPC",
                method=method,
                data=r.text[:256],
                http_status=r.status_code,
            ) from e

        if not isinstance(resp, dict):
            raise RpcError(
                code=JsonRpcCode.INTERNAL_ERROR,
                message="Invalid JSON-RPC response type",
                method=method,
                data=type(resp).__name__,
                http_status=r.status_code,
            )
        if resp.get("error") is not None:
            raise from_jsonrpc_error(resp["error"], method=method, http_status=r.status_code)
        if "result" not in resp:
            raise RpcError(
                code=JsonRpcCode.INTERNAL_ERROR,
                message="Malformed JSON-RPC response",
                method=method,
                data=resp,
                http_status=r.status_code,
            )
        return resp["result"]


__all__ = ["RpcClient"]
