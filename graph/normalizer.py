"""Store-native scalar decoding.

The graph store ships 64-bit integers split into two signed 32-bit words
(``{"low": ..., "high": ...}``). ``normalize`` walks an arbitrary record
structure and folds every such pair back into a single ``int``.

Python integers are unbounded, so values outside the 53-bit safe range of a
double are reconstructed exactly rather than losing precision.
"""

from __future__ import annotations

from collections.abc import MutableMapping, MutableSequence
from typing import Any, Mapping

WORD_MASK = 0xFFFFFFFF


def _is_word(value: Any) -> bool:
    return isinstance(value, int) and not isinstance(value, bool)


def is_two_word_int(value: Any) -> bool:
    if not isinstance(value, Mapping):
        return False
    if "low" not in value or "high" not in value:
        return False
    return _is_word(value["low"]) and _is_word(value["high"])


def to_int64(low: int, high: int) -> int:
    # low word is unsigned, high word carries the sign
    return (int(high) << 32) + (int(low) & WORD_MASK)


def normalize(value: Any) -> Any:
    if is_two_word_int(value):
        return to_int64(value["low"], value["high"])
    if isinstance(value, MutableMapping):
        for key in list(value.keys()):
            value[key] = normalize(value[key])
        return value
    if isinstance(value, MutableSequence):
        for idx, item in enumerate(value):
            value[idx] = normalize(item)
        return value
    if isinstance(value, tuple):
        return tuple(normalize(item) for item in value)
    if isinstance(value, Mapping):
        return {key: normalize(item) for key, item in value.items()}
    return value
