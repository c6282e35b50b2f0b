"""
mvm_sdk.types
=============

ABI models & validators (see :mod:`mvm_sdk.types.abi`).
"""

from .abi import (MethodDescriptor, canonical_signature, canonical_type,
                  function_selector, method_table, validate_abi)

__all__ = [
    "MethodDescriptor",
    "canonical_signature",
    "canonical_type",
    "function_selector",
    "method_table",
    "validate_abi",
]
