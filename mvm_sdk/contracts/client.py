"""
mvm_sdk.contracts.client
========================

A small, ergonomic contract client that:
- Validates a JSON ABI and binds every function to its selector and argument types
- Encodes calls by name with positional arguments
- Produces memo extras through an `ExtraGenerator`

Example
-------
    from mvm_sdk.api.client import MvmApiClient
    from mvm_sdk.contracts.client import ContractClient
    from mvm_sdk.extra.generator import ExtraGenerator, ExtraOptions

    gen = ExtraGenerator(MvmApiClient(cfg), config=cfg)
    token = ContractClient("0x2e8f…", abi, generator=gen)

    extra = token.invoke("transfer", "0x" + "11" * 20, 1000).extra
    big = token.invoke("setData", b"..." * 100, options=ExtraOptions(uploadkey="…"))
"""

from __future__ import annotations

from typing import Any, Mapping, Optional, Sequence

from ..errors import AbiError, ArityError
from ..extra.generator import ExtraGenerator, ExtraOptions, ExtraResult
from ..types.abi import MethodDescriptor, method_table
from .call import ContractCall, encode_call, normalize_address


class ContractClient:
    """
    ABI-driven client bound to a deployed contract address.

    Parameters
    ----------
    address : contract address (with or without 0x).
    abi : JSON ABI (list of entries); only functions are bound. Overloads are
        reachable by canonical signature, e.g. ``"safeTransferFrom(address,address,uint256)"``;
        the plain name binds the last declared one.
    generator : ExtraGenerator used by `invoke`; a default one (no uploader) is
        created if omitted.
    """

    def __init__(
        self,
        address: str,
        abi: Sequence[Mapping[str, Any]],
        *,
        generator: Optional[ExtraGenerator] = None,
    ) -> None:
        self._address = normalize_address(address)
        self._methods: Mapping[str, MethodDescriptor] = method_table(list(abi))
        self._generator = generator or ExtraGenerator()

    # ------------------------------------------------------------------ Accessors

    @property
    def address(self) -> str:
        return self._address

    @property
    def methods(self) -> Mapping[str, MethodDescriptor]:
        return self._methods

    def method(self, name: str) -> MethodDescriptor:
        try:
            return self._methods[name]
        except KeyError:
            raise AbiError(f"Function not found in ABI: {name}", function=name) from None

    # ------------------------------------------------------------------ Encoding

    def encode(self, name: str, *args: Any) -> ContractCall:
        """Raw call payload for `name(*args)`."""
        m = self.method(name)
        if len(args) != len(m.types):
            raise ArityError(types=len(m.types), values=len(args), function=name)
        return encode_call(self._address, method_id=m.selector, method_name=m.name, types=m.types, values=args)

    def invoke(self, name: str, *args: Any, options: Optional[ExtraOptions] = None) -> ExtraResult:
        """Generate the memo extra for `name(*args)`."""
        return self._generator.generate_for_call(self.encode(name, *args), options)


__all__ = ["ContractClient"]
