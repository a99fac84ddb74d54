"""Exception types for the bonding curve pricing engine.

Every failure of an engine call is one of these; callers are expected to abort
the enclosing trade. ``kind`` is stable and safe to match on.
"""

from __future__ import annotations

from enum import Enum, unique


@unique
class CurveErrorKind(Enum):
    INVALID_PRICE = "invalid_price"
    INVALID_MAX_SUPPLY = "invalid_max_supply"
    INSUFFICIENT_SUPPLY = "insufficient_supply"
    INVALID_CURVE_PARAMS = "invalid_curve_params"
    FEE_TOO_HIGH = "fee_too_high"
    MATH_OVERFLOW = "math_overflow"


class CurveError(Exception):
    """Base class for all pricing engine failures."""

    kind: CurveErrorKind


class InvalidPriceError(CurveError):
    """Zero trade amount, or zero initial price."""

    kind = CurveErrorKind.INVALID_PRICE


class InvalidMaxSupplyError(CurveError):
    """Buy would exceed ``max_supply``, or ``max_supply`` is zero."""

    kind = CurveErrorKind.INVALID_MAX_SUPPLY


class InsufficientSupplyError(InvalidMaxSupplyError):
    """Sell amount exceeds the outstanding supply.

    Subclasses ``InvalidMaxSupplyError`` so existing handlers keep catching it.
    """

    kind = CurveErrorKind.INSUFFICIENT_SUPPLY


class InvalidCurveParamsError(CurveError):
    """``curve_steepness`` is zero or below the safe minimum."""

    kind = CurveErrorKind.INVALID_CURVE_PARAMS


class FeeTooHighError(CurveError):
    """``fee_rate`` exceeds the 10% cap."""

    kind = CurveErrorKind.FEE_TOO_HIGH


class MathOverflowError(CurveError):
    """A checked arithmetic step left the unsigned range or divided by zero."""

    kind = CurveErrorKind.MATH_OVERFLOW
