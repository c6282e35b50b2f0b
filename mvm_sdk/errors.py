"""
Typed error classes for the MVM Python SDK.

These are raised by the codec, ABI call encoder, extra generator, registry
resolver and the HTTP clients so callers can catch specific failure modes while
still being able to catch the base `MvmSdkError`.

Nothing in the SDK retries or swallows these; they surface to the immediate
caller and abort the current invocation.
"""

from __future__ import annotations

from dataclasses import dataclass
from enum import IntEnum
from typing import Any, Dict, Optional

__all__ = [
    "MvmSdkError",
    "FormatError",
    "ArityError",
    "MissingAddressError",
    "MissingSelectorError",
    "PayloadTooLargeError",
    "UploadError",
    "RegistryUnavailableError",
    "AbiError",
    "RpcError",
    "ApiError",
    "JsonRpcCode",
    "from_jsonrpc_error",
]


class MvmSdkError(Exception):
    """Base class for all SDK errors."""


class JsonRpcCode(IntEnum):
    # JSON-RPC 2.0 standard codes
    PARSE_ERROR = -32700
    INVALID_REQUEST = -32600
    METHOD_NOT_FOUND = -32601
    INVALID_PARAMS = -32602
    INTERNAL_ERROR = -32603

    # Server errors (implementation-defined range: -32099 to -32000)
    SERVER_ERROR = -32000

    # Client-side transport failure (no response object)
    TRANSPORT_ERROR = -32098


@dataclass(slots=True)
class FormatError(MvmSdkError):
    """Malformed UUID, address, hex string, or out-of-range framing integer."""

    message: str
    value: Optional[Any] = None

    def __str__(self) -> str:  # pragma: no cover - trivial
        if self.value is None:
            return f"FormatError: {self.message}"
        return f"FormatError: {self.message} (got {self.value!r})"


@dataclass(slots=True)
class ArityError(MvmSdkError):
    """Number of declared argument types differs from the number of values."""

    types: int
    values: int
    function: Optional[str] = None

    def __str__(self) -> str:  # pragma: no cover - trivial
        where = f" [fn={self.function}]" if self.function else ""
        return f"ArityError{where}: types.length={self.types} != values.length={self.values}"


@dataclass(slots=True)
class MissingAddressError(MvmSdkError):
    message: str = "contract address is required"

    def __str__(self) -> str:  # pragma: no cover - trivial
        return f"MissingAddressError: {self.message}"


@dataclass(slots=True)
class MissingSelectorError(MvmSdkError):
    message: str = "method id or method name is required"

    def __str__(self) -> str:  # pragma: no cover - trivial
        return f"MissingSelectorError: {self.message}"


@dataclass(slots=True)
class PayloadTooLargeError(MvmSdkError):
    """
    The extra would overflow the memo ceiling and no upload key was supplied.

    Fields:
      - memo_length: base64url length the inline memo would have had
      - limit: the memo ceiling
    """

    memo_length: int
    limit: int

    def __str__(self) -> str:  # pragma: no cover - trivial
        return (
            f"PayloadTooLargeError: memo would be {self.memo_length} chars (limit {self.limit}); "
            "please provide an upload key to store the extra externally"
        )


@dataclass(slots=True)
class UploadError(MvmSdkError):
    """The external store did not acknowledge an upload."""

    message: str
    key: Optional[str] = None
    response: Optional[Any] = None

    def __str__(self) -> str:  # pragma: no cover - trivial
        bits = [self.message]
        if self.key:
            bits.append(f"key={self.key}")
        if self.response is not None:
            bits.append(f"response={self.response!r}")
        return "UploadError: " + " ".join(bits)


@dataclass(slots=True)
class RegistryUnavailableError(MvmSdkError):
    """A registry read failed at the RPC layer."""

    message: str
    registry: Optional[str] = None
    function: Optional[str] = None

    def __str__(self) -> str:  # pragma: no cover - trivial
        where = []
        if self.registry:
            where.append(f"registry={self.registry}")
        if self.function:
            where.append(f"fn={self.function}")
        where_s = (" [" + ", ".join(where) + "]") if where else ""
        return f"RegistryUnavailableError{where_s}: {self.message}"


@dataclass(slots=True)
class AbiError(MvmSdkError):
    """
    Raised when ABI validation or argument encoding fails.

    Typical causes: unsupported type strings, out-of-range integers, bad address values.
    """

    message: str
    function: Optional[str] = None
    parameter: Optional[str] = None

    def __str__(self) -> str:  # pragma: no cover - trivial
        where = []
        if self.function:
            where.append(f"fn={self.function}")
        if self.parameter:
            where.append(f"param={self.parameter}")
        where_s = (" [" + ", ".join(where) + "]") if where else ""
        return f"AbiError{where_s}: {self.message}"


@dataclass(slots=True)
class RpcError(MvmSdkError):
    """Raised when a JSON-RPC call returns an error object or the transport fails."""

    code: int
    message: str
    method: Optional[str] = None
    data: Optional[Any] = None
    http_status: Optional[int] = None

    def __str__(self) -> str:  # pragma: no cover - trivial
        parts = [f"RPC[{self.method or '-'}] code={self.code} msg={self.message!r}"]
        if self.http_status is not None:
            parts.append(f"http={self.http_status}")
        if self.data is not None:
            parts.append(f"data={self.data!r}")
        return " ".join(parts)

    @property
    def code_enum(self) -> Optional[JsonRpcCode]:
        try:
            return JsonRpcCode(self.code)
        except ValueError:
            return None


@dataclass(slots=True)
class ApiError(MvmSdkError):
    """Raised when the MVM HTTP service answers with a failure."""

    message: str
    url: Optional[str] = None
    status: Optional[int] = None

    def __str__(self) -> str:  # pragma: no cover - trivial
        bits = [self.message]
        if self.url:
            bits.append(f"url={self.url}")
        if self.status is not None:
            bits.append(f"http={self.status}")
        return "ApiError: " + " ".join(bits)


def from_jsonrpc_error(
    err_obj: Dict[str, Any],
    *,
    method: Optional[str] = None,
    http_status: Optional[int] = None,
) -> RpcError:
    """
    Convert a JSON-RPC error object into RpcError.

    `err_obj` should resemble: {"code": int, "message": str, "data": any?}
    """
    code = int(err_obj.get("code", JsonRpcCode.SERVER_ERROR))
    message = str(err_obj.get("message", "Unknown JSON-RPC error"))
    return RpcError(
        code=code,
        message=message,
        method=method,
        data=err_obj.get("data"),
        http_status=http_status,
    )
