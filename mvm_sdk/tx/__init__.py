"""
mvm_sdk.tx
==========

Transaction-side helpers.

Submodules
----------
- build   : TransactionInput for the transfer API (multisig receivers + memo)
- payment : request a payment record for a contract call through the MVM service
"""

from .build import OpponentMultisig, TransactionInput, build_transaction_input
from .payment import PaymentRequest, generate_payment

__all__ = [
    "OpponentMultisig",
    "TransactionInput",
    "build_transaction_input",
    "PaymentRequest",
    "generate_payment",
]
