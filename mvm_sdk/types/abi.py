from __future__ import annotations

"""
ABI datatypes & validation (Python SDK)

This module defines:
- TypedDict shapes for ABI function entries and parameters
- A small validator/normalizer for JSON ABI objects (tuples resolved from `components`)
- Helpers to compute canonical signatures and 4-byte selectors
- `MethodDescriptor`, the bound {selector, types} view used by ContractClient

Validation here is structural and type-string–aware; the actual argument
encoding is delegated to `eth_abi`.
"""

import re
from dataclasses import dataclass
from types import MappingProxyType
from typing import (Any, Dict, List, Literal, Mapping, Optional, Sequence,
                    Tuple, TypedDict, Union)

from mvm_sdk.errors import AbiError, FormatError
from mvm_sdk.utils.bytes import strip_0x
from mvm_sdk.utils.hash import keccak256

# --- Type-string parsing -----------------------------------------------------

_BASE_TYPES = {
    # integers
    **{f"uint{b}": True for b in range(8, 257, 8)},
    **{f"int{b}": True for b in range(8, 257, 8)},
    # misc scalars
    "bool": True,
    "address": True,
    "bytes": True,  # dynamic
    "string": True,  # utf-8
    # fixed-size bytes
    **{f"bytes{n}": True for n in range(1, 33)},
}

# Shorthands that must be expanded before hashing a signature
_ALIASES = {"uint": "uint256", "int": "int256", "byte": "bytes1"}

_TUPLE_RE = re.compile(r"^\((.*)\)$")
_ARRAY_SUFFIX_RE = re.compile(r"(\[\]|\[\d+\])$")
_SELECTOR_RE = re.compile(r"^[0-9a-fA-F]{8}$")


def canonical_type(type_str: str) -> str:
    """Normalize an ABI type string: strip spaces, expand aliases, validate shape."""
    if not isinstance(type_str, str):
        raise AbiError(f"type must be a string, got {type(type_str).__name__}")
    s = re.sub(r"\s+", "", type_str.strip())
    base, dims = _peel_array_suffixes(s)
    suffix = "".join("[]" if d is None else f"[{d}]" for d in reversed(dims))
    m = _TUPLE_RE.match(base)
    if m:
        return f"({','.join(_parse_tuple(m.group(1)))}){suffix}"
    base = _ALIASES.get(base, base)
    if base not in _BASE_TYPES:
        raise AbiError(f"Unsupported base type: {base}")
    return base + suffix


def _split_top_level_commas(s: str) -> List[str]:
    """Split on commas but ignore commas inside nested tuples/arrays."""
    out: List[str] = []
    depth = 0
    buf: List[str] = []
    for ch in s:
        if ch == "(":
            depth += 1
            buf.append(ch)
        elif ch == ")":
            depth -= 1
            if depth < 0:
                raise AbiError("Unbalanced parentheses in tuple type")
            buf.append(ch)
        elif ch == "," and depth == 0:
            out.append("".join(buf).strip())
            buf = []
        else:
            buf.append(ch)
    if depth != 0:
        raise AbiError("Unbalanced parentheses in tuple type")
    if buf:
        out.append("".join(buf).strip())
    return out


def _parse_tuple(inner: str) -> Tuple[str, ...]:
    if not inner:
        return tuple()
    return tuple(canonical_type(e) for e in _split_top_level_commas(inner))


def _peel_array_suffixes(t: str) -> Tuple[str, List[Optional[int]]]:
    """Return (base, dims) where dims is list of sizes (outermost first) or None for dynamic."""
    dims: List[Optional[int]] = []
    while True:
        m = _ARRAY_SUFFIX_RE.search(t)
        if not m:
            break
        suffix = m.group(1)
        t = t[: -len(suffix)]
        if suffix == "[]":
            dims.append(None)
        else:
            size = int(suffix[1:-1])
            if size <= 0:
                raise AbiError("Fixed array dimension must be positive")
            dims.append(size)
    return t, dims


# --- ABI shapes --------------------------------------------------------------


class AbiParam(TypedDict, total=False):
    name: str
    type: str
    components: List["AbiParam"]


class AbiFunction(TypedDict, total=False):
    type: Literal["function"]
    name: str
    inputs: List[AbiParam]
    outputs: List[AbiParam]
    stateMutability: Literal["view", "pure", "nonpayable", "payable"]


Abi = List[AbiFunction]


# --- Validation & normalization ---------------------------------------------


def _require(cond: bool, msg: str) -> None:
    if not cond:
        raise AbiError(msg)


def param_type(p: Mapping[str, Any]) -> str:
    """
    Resolve a JSON ABI parameter to its canonical type string.

    Struct params arrive as ``{"type": "tuple", "components": [...]}`` (possibly
    with array suffixes such as ``tuple[]``) and are expanded to ``(t1,t2,...)``.
    """
    typ = p.get("type")
    _require(isinstance(typ, str), "param.type must be string")
    if typ.startswith("tuple"):
        comps = p.get("components")
        _require(isinstance(comps, list), "tuple param requires a components list")
        inner = ",".join(param_type(c) for c in comps)
        return canonical_type(f"({inner}){typ[len('tuple'):]}")
    return canonical_type(typ)


def _validate_param(p: Any, ctx: str) -> AbiParam:
    _require(isinstance(p, dict), f"{ctx}: parameter must be an object")
    name = p.get("name", "")
    _require(isinstance(name, str), f"{ctx}: param.name must be string")
    try:
        ctyp = param_type(p)
    except AbiError as e:
        raise AbiError(e.message, parameter=name or None) from e
    return {"name": name, "type": ctyp}


def _validate_fn(e: Dict[str, Any]) -> AbiFunction:
    name = e.get("name")
    _require(isinstance(name, str) and name, "function.name must be non-empty string")
    inputs = e.get("inputs", [])
    outputs = e.get("outputs", [])
    _require(isinstance(inputs, list), "function.inputs must be a list")
    _require(isinstance(outputs, list), "function.outputs must be a list")
    mut = e.get("stateMutability", "nonpayable")
    _require(
        mut in ("view", "pure", "nonpayable", "payable"),
        "function.stateMutability invalid",
    )
    return {
        "type": "function",
        "name": name,
        "inputs": [_validate_param(p, f"function {name} input") for p in inputs],
        "outputs": [_validate_param(p, f"function {name} output") for p in outputs],
        "stateMutability": mut,  # type: ignore[typeddict-item]
    }


def validate_abi(abi: Any) -> Abi:
    """
    Validate and normalize the function entries of a JSON ABI.
    - Entries other than functions (events, constructor, errors, ...) are skipped
    - Canonicalizes all type strings
    - Keeps overloaded functions; `method_table` decides how they are bound
    Returns a new normalized list (does not mutate input).
    """
    _require(isinstance(abi, list), "ABI must be a list of entries")
    out: Abi = []
    for i, raw in enumerate(abi):
        _require(isinstance(raw, dict), f"ABI entry at index {i} must be an object")
        if raw.get("type", "function") != "function":
            continue
        out.append(_validate_fn(raw))
    return out


# --- Signatures, selectors ---------------------------------------------------


def canonical_signature(name: str, types: Sequence[str]) -> str:
    """e.g., transfer(address,uint256)"""
    return f"{name}({','.join(canonical_type(t) for t in types)})"


def function_selector(name: str, types: Sequence[str]) -> str:
    """First 4 bytes of keccak256(signature), as 8 lowercase hex chars (no 0x)."""
    return keccak256(canonical_signature(name, types).encode("utf-8"))[:4].hex()


def normalize_selector(selector: str) -> str:
    """Accept an explicit selector with or without 0x; FormatError unless 4 bytes of hex."""
    s = strip_0x(selector) if isinstance(selector, str) else selector
    if not isinstance(s, str) or not _SELECTOR_RE.match(s):
        raise FormatError("method id must be 4 bytes of hex", selector)
    return s.lower()


# --- Convenience model -------------------------------------------------------


@dataclass(frozen=True)
class MethodDescriptor:
    name: str
    selector: str
    types: Tuple[str, ...]
    outputs: Tuple[str, ...] = ()

    @property
    def signature(self) -> str:
        return canonical_signature(self.name, self.types)

    @staticmethod
    def from_abi(fn: AbiFunction) -> "MethodDescriptor":
        types = tuple(p["type"] for p in fn.get("inputs", []))
        return MethodDescriptor(
            name=fn["name"],
            selector=function_selector(fn["name"], types),
            types=types,
            outputs=tuple(p["type"] for p in fn.get("outputs", [])),
        )


def method_table(abi: Any) -> Mapping[str, MethodDescriptor]:
    """
    Read-only mapping of every function in `abi`.

    Each function is bound under its canonical signature, e.g.
    ``safeTransferFrom(address,address,uint256)``. The plain name is bound too;
    for overloaded names the last declared entry wins.
    """
    table: Dict[str, MethodDescriptor] = {}
    for fn in validate_abi(abi):
        m = MethodDescriptor.from_abi(fn)
        table[m.name] = m
        table[m.signature] = m
    return MappingProxyType(table)


__all__ = [
    "AbiParam",
    "AbiFunction",
    "Abi",
    "MethodDescriptor",
    "validate_abi",
    "method_table",
    "canonical_type",
    "param_type",
    "canonical_signature",
    "function_selector",
    "normalize_selector",
]
