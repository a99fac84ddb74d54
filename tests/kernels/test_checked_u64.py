from __future__ import annotations

import pytest

from prediction_pump.errors import CurveErrorKind, MathOverflowError
from prediction_pump.kernels.python.checked_u64 import (
    SCALE,
    U16_MAX,
    U64_MAX,
    checked_add,
    checked_div,
    checked_mul,
    checked_sub,
    require_u16,
    require_u64,
    to_u16,
)


def test_constants() -> None:
    assert SCALE == 10_000
    assert U64_MAX == 18_446_744_073_709_551_615
    assert U16_MAX == 65_535


def test_add_at_boundary() -> None:
    assert checked_add(U64_MAX - 1, 1) == U64_MAX
    with pytest.raises(MathOverflowError):
        checked_add(U64_MAX, 1)


def test_sub_underflow() -> None:
    assert checked_sub(5, 5) == 0
    with pytest.raises(MathOverflowError):
        checked_sub(4, 5)


def test_mul_overflow() -> None:
    assert checked_mul(1 << 32, (1 << 32) - 1) == (1 << 64) - (1 << 32)
    with pytest.raises(MathOverflowError):
        checked_mul(1 << 32, 1 << 32)


def test_div_floors_and_rejects_zero() -> None:
    assert checked_div(7, 2) == 3
    assert checked_div(0, 9) == 0
    with pytest.raises(MathOverflowError) as exc_info:
        checked_div(1, 0)
    assert exc_info.value.kind is CurveErrorKind.MATH_OVERFLOW


def test_operands_must_be_u64_ints() -> None:
    with pytest.raises(TypeError):
        checked_add(True, 1)
    with pytest.raises(TypeError):
        checked_mul(1.0, 1)  # type: ignore[arg-type]
    with pytest.raises(ValueError):
        checked_add(-1, 1)
    with pytest.raises(ValueError):
        checked_add(U64_MAX + 1, 0)


def test_to_u16_does_not_truncate() -> None:
    assert to_u16(U16_MAX) == U16_MAX
    with pytest.raises(MathOverflowError):
        to_u16(U16_MAX + 1)


def test_require_ranges() -> None:
    assert require_u64("x", 0) == 0
    assert require_u16("x", U16_MAX) == U16_MAX
    with pytest.raises(ValueError):
        require_u16("x", U16_MAX + 1)
