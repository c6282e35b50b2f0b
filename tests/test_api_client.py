from typing import Any, Dict, List

import pytest
import requests

from mvm_sdk.api.client import MvmApiClient
from mvm_sdk.errors import ApiError, UploadError


class FakeResponse:
    def __init__(self, status_code: int, payload: Any = None, text: str = "") -> None:
        self.status_code = status_code
        self._payload = payload
        self.text = text

    def json(self) -> Any:
        if self._payload is None:
            raise ValueError("no json")
        return self._payload


class FakeSession:
    def __init__(self, response: Any) -> None:
        self.headers: Dict[str, str] = {}
        self.posts: List[Dict[str, Any]] = []
        self.response = response
        self.closed = False

    def post(self, url: str, json: Any = None, timeout: float = None) -> FakeResponse:
        self.posts.append({"url": url, "json": json, "timeout": timeout})
        if isinstance(self.response, Exception):
            raise self.response
        return self.response

    def close(self) -> None:
        self.closed = True


def test_upload_posts_to_root(config):
    session = FakeSession(FakeResponse(200, {"hash": "0xabc"}))
    api = MvmApiClient(config, session=session)
    res = api.upload(uploadkey="k", key="0x" + "11" * 32, raw="0x1234", address="0x" + "22" * 20)
    assert res == {"hash": "0xabc"}
    post = session.posts[0]
    assert post["url"] == "http://127.0.0.1:9000/"
    assert post["json"] == {"uploadkey": "k", "key": "0x" + "11" * 32, "raw": "0x1234", "address": "0x" + "22" * 20}
    assert post["timeout"] == config.request_timeout
    assert session.headers["User-Agent"] == config.user_agent


def test_upload_without_hash_fails(config):
    api = MvmApiClient(config, session=FakeSession(FakeResponse(200, {"ok": True})))
    with pytest.raises(UploadError):
        api.upload(uploadkey="k", key="0x00", raw="0x00")


def test_upload_http_failure_is_upload_error(config):
    api = MvmApiClient(config, session=FakeSession(FakeResponse(500, None, "boom")))
    with pytest.raises(UploadError) as ei:
        api.upload(uploadkey="k", key="0x00", raw="0x00")
    assert isinstance(ei.value.__cause__, ApiError)


def test_payment_omits_unset_fields(config):
    record = {"type": "payment", "trace_id": "t", "code_id": "c"}
    session = FakeSession(FakeResponse(200, record))
    api = MvmApiClient(config, session=session)
    out = api.payment(extra="abcd", delegatecall=False, type="payment", amount="1")
    assert out == record
    post = session.posts[0]
    assert post["url"] == "http://127.0.0.1:9000/payment"
    assert post["json"] == {"extra": "abcd", "delegatecall": False, "type": "payment", "amount": "1"}


def test_network_error_is_api_error(config):
    api = MvmApiClient(config, session=FakeSession(requests.ConnectionError("refused")))
    with pytest.raises(ApiError):
        api.payment(extra="00")


def test_non_object_json_is_api_error(config):
    api = MvmApiClient(config, session=FakeSession(FakeResponse(200, ["x"])))
    with pytest.raises(ApiError):
        api.payment(extra="00")


def test_context_manager_closes_session(config):
    session = FakeSession(FakeResponse(200, {}))
    with MvmApiClient(config, session=session):
        pass
    assert session.closed
