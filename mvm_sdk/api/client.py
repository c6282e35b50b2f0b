"""
mvm_sdk.api.client
==================

HTTP client for the MVM helper service.

The service exposes two JSON endpoints:

- **POST /**:        store an extra payload under its keccak256 key
                     ``{uploadkey, key, raw, address}`` -> ``{"hash": ...}``
- **POST /payment**: create a payment (or transaction) record for an extra
                     ``{extra, process, delegatecall, uploadkey, address, type, trace, asset, amount}``

Typical usage
-------------
    from mvm_sdk.api.client import MvmApiClient

    with MvmApiClient() as api:
        ack = api.upload(uploadkey="...", key="0x...", raw="0x...", address="0x...")

Design notes
------------
* Uses deterministic hex encoding (0x…) for bytes in JSON bodies.
* Keys whose value is None are dropped from request bodies.
* One attempt per request; failures surface as `UploadError` / `ApiError`.
"""

from __future__ import annotations

import logging
from typing import Any, Dict, Optional
from urllib.parse import urljoin

import requests

from ..config import DEFAULT, MvmConfig
from ..errors import ApiError, UploadError

log = logging.getLogger(__name__)

JsonDict = Dict[str, Any]


def _compact(body: JsonDict) -> JsonDict:
    return {k: v for k, v in body.items() if v is not None}


class MvmApiClient:
    """
    Client for the upload and payment endpoints.

    Parameters
    ----------
    config : MvmConfig
        Supplies ``api_url``, timeout and headers.
    session : requests.Session | None
        Optional custom session. If not provided, a new session is created.
    """

    def __init__(
        self,
        config: Optional[MvmConfig] = None,
        *,
        session: Optional[requests.Session] = None,
    ) -> None:
        self._config = config or DEFAULT
        self._base_url = self._config.api_url.rstrip("/") + "/"
        self._timeout = float(self._config.request_timeout)
        self._http = session or requests.Session()
        self._http.headers.update(self._config.http_headers())

    # --- context manager -------------------------------------------------

    def __enter__(self) -> "MvmApiClient":
        return self

    def __exit__(self, exc_type, exc, tb) -> None:  # noqa: ANN001
        self.close()

    def close(self) -> None:
        self._http.close()

    # ---- Helpers -------------------------------------------------------------

    def _abs(self, path: str) -> str:
        return urljoin(self._base_url, path)

    def _post(self, path: str, body: JsonDict) -> JsonDict:
        url = self._abs(path)
        try:
            resp = self._http.post(url, json=_compact(body), timeout=self._timeout)
        except requests.RequestException as e:
            raise ApiError(f"POST failed: {e}", url=url) from e
        if resp.status_code // 100 != 2:
            raise ApiError(f"unexpected response: {resp.text[:256]}", url=url, status=resp.status_code)
        try:
            payload = resp.json()
        except ValueError as e:
            raise ApiError("expected JSON response", url=url, status=resp.status_code) from e
        if not isinstance(payload, dict):
            raise ApiError("server returned non-object JSON", url=url, status=resp.status_code)
        return payload

    # ---- Public API ----------------------------------------------------------

    def upload(self, *, uploadkey: str, key: str, raw: str, address: Optional[str] = None) -> JsonDict:
        """
        Store `raw` (0x-hex) under `key` (0x + 64 hex); return the acknowledgement.

        Raises UploadError if the request fails or the response carries no ``hash``.
        """
        try:
            res = self._post("", {"uploadkey": uploadkey, "key": key, "raw": raw, "address": address})
        except ApiError as e:
            raise UploadError(e.message, key=key, response=e.status) from e
        if not res.get("hash"):
            raise UploadError("upload was not acknowledged", key=key, response=res)
        log.info("extra stored: key=%s hash=%s", key, res["hash"])
        return res

    def payment(
        self,
        *,
        extra: str,
        process: Optional[str] = None,
        delegatecall: Optional[bool] = None,
        uploadkey: Optional[str] = None,
        address: Optional[str] = None,
        type: Optional[str] = None,  # noqa: A002 - wire field name
        trace: Optional[str] = None,
        asset: Optional[str] = None,
        amount: Optional[str] = None,
    ) -> JsonDict:
        """Request a payment (or transaction) record; the response is returned unchanged."""
        body = {
            "extra": extra,
            "process": process,
            "delegatecall": delegatecall,
            "uploadkey": uploadkey,
            "address": address,
            "type": type,
            "trace": trace,
            "asset": asset,
            "amount": amount,
        }
        res = self._post("payment", body)
        log.info("payment requested: type=%s trace=%s", type or "payment", trace)
        return res


__all__ = ["MvmApiClient"]
