"""
Content fingerprints for immutable geometry records.

Canonical serialization:
- JSON with sorted keys and no whitespace (separators=(',', ':'), ensure_ascii=False).
- Encode as UTF-8 bytes.
- The canonical object root is {kind: payload}.

Digest:
- CRC-32C (Castagnoli), reflected polynomial 0x82F63B78, init/XOR-out 0xFFFFFFFF.
- Rendered as 8 lowercase hex digits. Structural identity only; not a security hash.
"""
from __future__ import annotations

import json
from typing import Any, List, Tuple

import numpy as np


# ---- CRC-32C (Castagnoli) implementation ----
def _make_crc32c_table() -> Tuple[int, ...]:
    poly = 0x82F63B78  # reversed 0x1EDC6F41
    table: List[int] = []
    for i in range(256):
        crc = i
        for _ in range(8):
            if crc & 1:
                crc = (crc >> 1) ^ poly
            else:
                crc >>= 1
        table.append(crc & 0xFFFFFFFF)
    return tuple(table)

_CRC32C_TABLE: Tuple[int, ...] = _make_crc32c_table()

def crc32c(data: bytes) -> int:
    """Compute CRC-32C (Castagnoli) over data bytes."""
    crc = 0xFFFFFFFF
    for b in data:
        idx = (crc ^ b) & 0xFF
        crc = (_CRC32C_TABLE[idx] ^ (crc >> 8)) & 0xFFFFFFFF
    return crc ^ 0xFFFFFFFF


def _to_plain(obj: Any) -> Any:
    """Convert numpy arrays/scalars and tuples into JSON-native values."""
    if isinstance(obj, np.ndarray):
        return _to_plain(obj.tolist())
    if isinstance(obj, np.generic):
        return obj.item()
    if isinstance(obj, dict):
        return {str(k): _to_plain(v) for k, v in obj.items()}
    if isinstance(obj, (list, tuple)):
        return [_to_plain(v) for v in obj]
    if isinstance(obj, complex):
        return [obj.real, obj.imag]
    return obj


def canonical_encode(obj: Any) -> bytes:
    """Canonical JSON encoding for fingerprint purposes (sorted keys, no whitespace)."""
    return json.dumps(_to_plain(obj), sort_keys=True, separators=(',', ':'), ensure_ascii=False).encode('utf-8')


def fingerprint(kind: str, payload: Any) -> str:
    """
    Deterministic fingerprint of a record.

    Parameters
    ----------
    kind : str
        Record type tag, e.g. "Manifold". Keeps equal payloads of different kinds apart.
    payload : Any
        JSON-serializable content (numpy arrays allowed).

    Returns
    -------
    str
        8 hex digits of CRC-32C over canonical_encode({kind: payload}).
    """
    if not isinstance(kind, str) or not kind:
        raise ValueError("kind must be a non-empty string")
    return f"{crc32c(canonical_encode({kind: payload})):08x}"


def _const_text(c: Any) -> str:
    if hasattr(c, "co_code"):
        return _code_digest(c)
    if isinstance(c, frozenset):
        # Set iteration order depends on string hashing
        return "frozenset(" + ",".join(sorted(_const_text(x) for x in c)) + ")"
    if isinstance(c, tuple):
        return "(" + ",".join(_const_text(x) for x in c) + ")"
    return repr(c)


def _code_digest(code: Any) -> str:
    consts = ",".join(_const_text(c) for c in code.co_consts)
    names = ",".join(code.co_names)
    tail = (consts + "|" + names).encode("utf-8")
    return f"{crc32c(code.co_code + tail):08x}"


def callable_label(fn: Any) -> str:
    """
    Stable label for a plain function: '<module>:<qualname>', followed by
    '#<digest>' of its bytecode, constants and global names when it has a code object, so
    two lambdas of the same module are told apart.
    """
    module = getattr(fn, "__module__", None) or "?"
    qualname = getattr(fn, "__qualname__", None) or type(fn).__qualname__
    label = f"{module}:{qualname}"
    code = getattr(fn, "__code__", None)
    if code is not None:
        label += "#" + _code_digest(code)
    return label


__all__ = ["crc32c", "canonical_encode", "fingerprint", "callable_label"]
