"""
Checked unsigned 64-bit arithmetic.

Python ints never overflow, so the u64 domain of the on-chain program is
emulated explicitly: every operation verifies that its operands and its result
stay inside ``[0, U64_MAX]`` and raises ``MathOverflowError`` otherwise.
Nothing here saturates or wraps.
"""

from __future__ import annotations

from ...errors import MathOverflowError


U64_MAX = (1 << 64) - 1
U16_MAX = (1 << 16) - 1

# Fixed-point scale (1.0) and basis-point denominator. Not configurable.
SCALE = 10_000


def _require_int(name: str, value: int) -> None:
    if not isinstance(value, int) or isinstance(value, bool):
        raise TypeError(f"{name} must be an int")


def require_u64(name: str, value: int) -> int:
    _require_int(name, value)
    if not (0 <= value <= U64_MAX):
        raise ValueError(f"{name} must be in [0, {U64_MAX}]: {value}")
    return value


def require_u16(name: str, value: int) -> int:
    _require_int(name, value)
    if not (0 <= value <= U16_MAX):
        raise ValueError(f"{name} must be in [0, {U16_MAX}]: {value}")
    return value


def _check(op: str, result: int) -> int:
    if result < 0 or result > U64_MAX:
        raise MathOverflowError(f"u64 {op} out of range: {result}")
    return result


def checked_add(a: int, b: int) -> int:
    return _check("add", require_u64("a", a) + require_u64("b", b))


def checked_sub(a: int, b: int) -> int:
    return _check("sub", require_u64("a", a) - require_u64("b", b))


def checked_mul(a: int, b: int) -> int:
    return _check("mul", require_u64("a", a) * require_u64("b", b))


def checked_div(a: int, b: int) -> int:
    require_u64("a", a)
    require_u64("b", b)
    if b == 0:
        raise MathOverflowError("u64 div by zero")
    return a // b


def to_u16(value: int) -> int:
    """Narrow a u64 result to u16 (no truncation)."""
    require_u64("value", value)
    if value > U16_MAX:
        raise MathOverflowError(f"value does not fit in u16: {value}")
    return value
