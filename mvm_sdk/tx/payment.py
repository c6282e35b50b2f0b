"""
mvm_sdk.tx.payment
==================

Payment path: the raw extra (no opcode, no upload) is handed to the MVM
service, which applies its own size rules and returns a payment or
transaction record.
"""

from __future__ import annotations

import dataclasses
from dataclasses import dataclass
from typing import Any, Dict, Literal, Optional, Protocol, Sequence

from ..config import DEFAULT, MvmConfig
from ..extra.generator import ExtraGenerator, ExtraOptions


class _PaymentApi(Protocol):
    def payment(self, **body: Any) -> Dict[str, Any]: ...


@dataclass(frozen=True)
class PaymentRequest:
    asset: Optional[str] = None
    amount: Optional[str] = None
    trace: Optional[str] = None
    type: Literal["payment", "tx"] = "payment"


def generate_payment(
    api: _PaymentApi,
    contract_address: Optional[str],
    *,
    method_id: Optional[str] = None,
    method_name: Optional[str] = None,
    types: Sequence[str] = (),
    values: Sequence[Any] = (),
    options: Optional[ExtraOptions] = None,
    payment: Optional[PaymentRequest] = None,
    config: Optional[MvmConfig] = None,
) -> Dict[str, Any]:
    """Build the raw extra and request a payment record for it; the record is returned unchanged."""
    opts = dataclasses.replace(options or ExtraOptions(), ignore_upload=True)
    pay = payment or PaymentRequest()
    result = ExtraGenerator(config=config or DEFAULT).generate(
        contract_address,
        method_id=method_id,
        method_name=method_name,
        types=types,
        values=values,
        options=opts,
    )
    return api.payment(
        extra=result.extra,
        process=opts.process,
        delegatecall=opts.delegatecall,
        uploadkey=opts.uploadkey,
        address=opts.address,
        type=pay.type,
        trace=pay.trace,
        asset=pay.asset,
        amount=pay.amount,
    )


__all__ = ["PaymentRequest", "generate_payment"]
