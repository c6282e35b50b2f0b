"""
mvm_sdk.tx.build
================

Transaction inputs for the messaging network's transfer API.

Every MVM transaction pays into the fixed multisig receiver set of the
configured network and carries the extra inside a group-event memo:

    tx = build_transaction_input(
        asset="965e5c6e-434c-3fa9-b780-c50f43cd955c",
        amount="0.00000001",
        extra=generate_extra(...),
    )
    tx.to_dict()   # JSON body for the transfer call
"""

from __future__ import annotations

import uuid
from dataclasses import dataclass, field
from typing import Any, Dict, Optional, Tuple

from ..codec.memo import encode_memo
from ..config import DEFAULT, MvmConfig


@dataclass(frozen=True)
class OpponentMultisig:
    receivers: Tuple[str, ...]
    threshold: int

    def to_dict(self) -> Dict[str, Any]:
        return {"receivers": list(self.receivers), "threshold": int(self.threshold)}


@dataclass(frozen=True)
class TransactionInput:
    asset_id: str
    amount: str
    memo: str
    opponent_multisig: OpponentMultisig
    trace_id: str = field(default_factory=lambda: str(uuid.uuid4()))

    def to_dict(self) -> Dict[str, Any]:
        return {
            "asset_id": self.asset_id,
            "amount": self.amount,
            "trace_id": self.trace_id,
            "opponent_multisig": self.opponent_multisig.to_dict(),
            "memo": self.memo,
        }


def build_transaction_input(
    *,
    asset: str,
    amount: str,
    extra: str,
    trace: Optional[str] = None,
    process: Optional[str] = None,
    config: Optional[MvmConfig] = None,
) -> TransactionInput:
    """
    Wrap `extra` for `process` (default: the registry process) and address it to
    the configured receivers. `trace` defaults to a fresh UUID4.
    """
    cfg = config or DEFAULT
    return TransactionInput(
        asset_id=asset,
        amount=str(amount),
        trace_id=trace or str(uuid.uuid4()),
        opponent_multisig=OpponentMultisig(receivers=tuple(cfg.receivers), threshold=cfg.threshold),
        memo=encode_memo(extra, process or cfg.registry_process),
    )


__all__ = ["OpponentMultisig", "TransactionInput", "build_transaction_input"]
