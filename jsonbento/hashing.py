"""Stable 64-bit hashing of JSON values and of join keys."""

from __future__ import annotations

import struct
from collections.abc import Iterable, Mapping
from typing import Any

from jsonbento.value_locator import INT64_MAX, INT64_MIN, UINT64_MAX

_MASK = UINT64_MAX
_BITS = 64
_ROTATE = _BITS // 3

_DISTRIBUTE_PATTERN = 0x5555555555555555
_DISTRIBUTE_FACTOR = 17316035218449499591

_GOLDEN = 0x9E3779B9

_MURMUR_MUL = (0xC6A4A793 << 32) + 0x5BD1E995
_MURMUR_SEED = 0xC70F6907

USE_BOOST_HASH_COMBINE = True


def xor_shift(n: int, i: int) -> int:
    """Return ``n ^ (n >> i)`` on unsigned 64-bit values."""
    n &= _MASK
    return n ^ (n >> i)


def stable_hash_distribute(n: int) -> int:
    """Spread the bits of ``n`` over the whole 64-bit range."""
    inner = (_DISTRIBUTE_PATTERN * xor_shift(n, 32)) & _MASK
    return (_DISTRIBUTE_FACTOR * xor_shift(inner, 32)) & _MASK


def _rotl(value: int, shift: int) -> int:
    value &= _MASK
    shift %= _BITS
    return ((value << shift) | (value >> (_BITS - shift))) & _MASK


def stable_hash_combine(seed: int, comp: int) -> int:
    """Combine ``seed`` with a distributed ``comp`` by rotation and xor."""
    return _rotl(seed, _ROTATE) ^ stable_hash_distribute(comp)


def boost_hash_combine(seed: int, value: int) -> int:
    """Combine ``seed`` with ``value`` the way Boost's ``hash_combine`` does."""
    seed &= _MASK
    value &= _MASK
    mixed = (value + _GOLDEN + ((seed << 6) & _MASK) + (seed >> 2)) & _MASK
    return seed ^ mixed


def combine_hash(lhs: int, rhs: int) -> int:
    """Combine two hash values with the configured combining function."""
    if not USE_BOOST_HASH_COMBINE:
        return stable_hash_combine(lhs, rhs)
    return boost_hash_combine(lhs, rhs)


def _shift_mix(value: int) -> int:
    return value ^ (value >> 47)


def _hash_bytes(data: bytes, seed: int = _MURMUR_SEED) -> int:
    length = len(data)
    aligned = length & ~0x7
    result = (seed ^ ((length * _MURMUR_MUL) & _MASK)) & _MASK
    for start in range(0, aligned, 8):
        word = int.from_bytes(data[start:start + 8], "little")
        mixed = (_shift_mix((word * _MURMUR_MUL) & _MASK) * _MURMUR_MUL) & _MASK
        result = ((result ^ mixed) * _MURMUR_MUL) & _MASK
    if length & 0x7:
        tail = int.from_bytes(data[aligned:], "little")
        result = ((result ^ tail) * _MURMUR_MUL) & _MASK
    result = (_shift_mix(result) * _MURMUR_MUL) & _MASK
    return _shift_mix(result)


def _hash_int(value: int) -> int:
    if value < INT64_MIN or value > UINT64_MAX:
        raise OverflowError(f"integer {value} is out of range")
    return value & _MASK


def _hash_float(value: float) -> int:
    if value == 0.0:
        return 0
    return _hash_bytes(struct.pack("<d", value))


def _hash_str(value: str) -> int:
    return _hash_bytes(value.encode("utf-8"))


def json_hash_code(value: Any) -> int:
    """Return an unsigned 64-bit hash of a plain JSON value.

    Objects hash their members in iteration order; arrays their elements.
    """
    if value is None:
        return 0
    if isinstance(value, bool):
        return int(value)
    if isinstance(value, int):
        return _hash_int(value)
    if isinstance(value, float):
        return _hash_float(value)
    if isinstance(value, str):
        return _hash_str(value)
    if isinstance(value, Mapping):
        result = 0
        for key, item in value.items():
            if not isinstance(key, str):
                raise TypeError("object keys must be strings")
            result = combine_hash(result, _hash_str(key))
            result = combine_hash(result, json_hash_code(item))
        return result
    if isinstance(value, (list, tuple)):
        result = 0
        for item in value:
            result = combine_hash(result, json_hash_code(item))
        return result
    raise TypeError(f"unsupported JSON value type: {type(value).__name__}")


def compute_hash(row: Mapping[str, Any], columns: Iterable[str]) -> int:
    """Hash the values of ``row`` under ``columns``; absent columns are skipped."""
    if not isinstance(row, Mapping):
        raise TypeError("a row must be a JSON object")
    result = 0
    for column in columns:
        if column in row:
            result = combine_hash(result, json_hash_code(row[column]))
    return result


__all__ = [
    "xor_shift",
    "stable_hash_distribute",
    "stable_hash_combine",
    "boost_hash_combine",
    "combine_hash",
    "json_hash_code",
    "compute_hash",
]