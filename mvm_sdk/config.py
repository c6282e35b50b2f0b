"""
SDK configuration: service endpoints, registry identity and the multisig receiver set.

- Loads sane defaults and supports overrides via environment variables (MVM_*).
- Immutable: pass a config (or a derived copy from `with_overrides`) into the
  generator, resolver and builders instead of relying on module globals.
- Provides helpers for building HTTP headers and validating endpoints.
"""

from __future__ import annotations

import os
import re
from dataclasses import dataclass, field
from typing import Any, Dict, Optional, Tuple

from .version import user_agent as _default_user_agent

# Memo purpose code for group events (the only purpose this SDK emits)
GROUP_EVENT = 1

# Hard ceiling on the base64url memo text carried by a transaction
MEMO_MAX_LENGTH = 200

DEFAULT_RPC_URL = "https://quorum-testnet.mixin.zone/"
DEFAULT_API_URL = "https://mvm-api.test.mixinbots.com"
DEFAULT_REGISTRY_ADDRESS = "0x3c84B6C98FBeB813e05a7A7813F0442883450B1F"
DEFAULT_REGISTRY_PROCESS = "bd670872-76ce-3263-b933-3aa337e212a4"

DEFAULT_RECEIVERS: Tuple[str, ...] = (
    "a15e0b6d-76ed-4443-b83f-ade9eca2681a",
    "b9126674-b07d-49b6-bf4f-48d965b2242b",
    "15141fe4-1cfd-40f8-9819-71e453054639",
    "3e72ca0c-1bab-49ad-aa0a-4d8471d375e7",
)
DEFAULT_THRESHOLD = 3

# Minimal registry ABI: the three read views this SDK uses
REGISTRY_ABI = [
    {
        "type": "function",
        "name": "contracts",
        "inputs": [{"name": "", "type": "uint256"}],
        "outputs": [{"name": "", "type": "address"}],
        "stateMutability": "view",
    },
    {
        "type": "function",
        "name": "assets",
        "inputs": [{"name": "", "type": "address"}],
        "outputs": [{"name": "", "type": "uint128"}],
        "stateMutability": "view",
    },
    {
        "type": "function",
        "name": "users",
        "inputs": [{"name": "", "type": "address"}],
        "outputs": [{"name": "", "type": "bytes"}],
        "stateMutability": "view",
    },
]

_ADDRESS_RE = re.compile(r"^(0x)?[0-9a-fA-F]{40}$")
_UUID_RE = re.compile(r"[0-9a-fA-F]{8}-[0-9a-fA-F]{4}-[0-9a-fA-F]{4}-[0-9a-fA-F]{4}-[0-9a-fA-F]{12}")


def _env(name: str, default: Optional[str] = None) -> Optional[str]:
    v = os.getenv(name)
    return v if v is not None else default


def _ensure_scheme(url: Optional[str], allowed: tuple[str, ...]) -> Optional[str]:
    if not url:
        return url
    lower = url.lower()
    if not any(lower.startswith(f"{sch}://") for sch in allowed):
        raise ValueError(f"URL must start with {allowed}, got: {url!r}")
    return url


def _ensure_address(addr: str) -> str:
    if not _ADDRESS_RE.match(addr or ""):
        raise ValueError(f"registry address must be 20 bytes of hex, got: {addr!r}")
    return addr


def _ensure_uuid(value: str) -> str:
    if not isinstance(value, str) or not _UUID_RE.fullmatch(value):
        raise ValueError(f"expected a UUID, got: {value!r}")
    return value


@dataclass(frozen=True, slots=True)
class MvmConfig:
    # Endpoints
    rpc_url: str = DEFAULT_RPC_URL
    api_url: str = DEFAULT_API_URL
    # Registry identity
    registry_address: str = DEFAULT_REGISTRY_ADDRESS
    registry_process: str = DEFAULT_REGISTRY_PROCESS
    # Multisig receiver set used for every transaction input
    receivers: Tuple[str, ...] = DEFAULT_RECEIVERS
    threshold: int = DEFAULT_THRESHOLD
    # HTTP behavior
    request_timeout: float = 10.0
    user_agent: str = field(default_factory=_default_user_agent)

    def __post_init__(self) -> None:
        _ensure_scheme(self.rpc_url, ("http", "https"))
        _ensure_scheme(self.api_url, ("http", "https"))
        _ensure_address(self.registry_address)
        _ensure_uuid(self.registry_process)
        for r in self.receivers:
            _ensure_uuid(r)
        if not 0 < int(self.threshold) <= len(self.receivers):
            raise ValueError(
                f"threshold must be in [1, {len(self.receivers)}], got: {self.threshold!r}"
            )

    @classmethod
    def from_env(cls, prefix: str = "MVM_") -> "MvmConfig":
        """
        Create config from environment variables:

        MVM_RPC_URL            (http/https) JSON-RPC provider for the registry
        MVM_API_URL            (http/https) upload & payment service
        MVM_REGISTRY_ADDRESS   (0x + 40 hex)
        MVM_REGISTRY_PROCESS   (UUID)
        MVM_TIMEOUT            (float seconds, HTTP)
        MVM_USER_AGENT         (str)
        """
        return cls(
            rpc_url=_env(f"{prefix}RPC_URL", DEFAULT_RPC_URL) or DEFAULT_RPC_URL,
            api_url=_env(f"{prefix}API_URL", DEFAULT_API_URL) or DEFAULT_API_URL,
            registry_address=_env(f"{prefix}REGISTRY_ADDRESS", DEFAULT_REGISTRY_ADDRESS)
            or DEFAULT_REGISTRY_ADDRESS,
            registry_process=_env(f"{prefix}REGISTRY_PROCESS", DEFAULT_REGISTRY_PROCESS)
            or DEFAULT_REGISTRY_PROCESS,
            request_timeout=float(_env(f"{prefix}TIMEOUT", "10.0") or "10.0"),
            user_agent=_env(f"{prefix}USER_AGENT", None) or _default_user_agent(),
        )

    @classmethod
    def with_overrides(
        cls, base: Optional["MvmConfig"] = None, **overrides: Any
    ) -> "MvmConfig":
        """
        Build from an existing config plus keyword overrides.
        Unknown keys are ignored.
        """
        base = base or cls.from_env()
        data = base.to_dict()
        data.update({k: v for k, v in overrides.items() if k in data})
        data["receivers"] = tuple(data["receivers"])
        return cls(**data)

    def http_headers(self) -> Dict[str, str]:
        return {
            "Content-Type": "application/json",
            "Accept": "application/json",
            "User-Agent": self.user_agent,
        }

    def to_dict(self) -> Dict[str, Any]:
        return {
            "rpc_url": self.rpc_url,
            "api_url": self.api_url,
            "registry_address": self.registry_address,
            "registry_process": self.registry_process,
            "receivers": list(self.receivers),
            "threshold": int(self.threshold),
            "request_timeout": float(self.request_timeout),
            "user_agent": self.user_agent,
        }


# Convenience singleton (safe to use for simple scripts)
DEFAULT = MvmConfig.from_env()

__all__ = [
    "MvmConfig",
    "DEFAULT",
    "GROUP_EVENT",
    "MEMO_MAX_LENGTH",
    "REGISTRY_ABI",
    "DEFAULT_RECEIVERS",
    "DEFAULT_THRESHOLD",
    "DEFAULT_REGISTRY_ADDRESS",
    "DEFAULT_REGISTRY_PROCESS",
    "DEFAULT_RPC_URL",
    "DEFAULT_API_URL",
]
