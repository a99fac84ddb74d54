"""
Quadratic bonding curve kernel (v1 semantics).

Price as a function of outstanding supply:

    price(s) = initial_price * (1 + s / curve_steepness)^2

All values are u64 integers scaled by ``SCALE`` (10_000 == 1.0); every
multiplication, addition, subtraction and division goes through the checked
helpers in ``checked_u64`` so an out-of-range intermediate raises
``MathOverflowError`` instead of wrapping.

Rounding is floor at every division. Trades are priced with the trapezoidal
rule over the supply interval; market cap uses the closed-form integral.
"""

from __future__ import annotations

from dataclasses import dataclass

from ...errors import (
    FeeTooHighError,
    InsufficientSupplyError,
    InvalidCurveParamsError,
    InvalidMaxSupplyError,
    InvalidPriceError,
)
from .checked_u64 import (
    SCALE,
    checked_add,
    checked_div,
    checked_mul,
    checked_sub,
    require_u64,
    to_u16,
)


MIN_CURVE_STEEPNESS = 1000
MAX_FEE_RATE_BPS = 1000


@dataclass(frozen=True)
class CurveQuote:
    """Trapezoidal quote over ``[supply_low, supply_high]``.

    ``base_amount`` is the unfee'd value; ``total`` is ``base_amount + fee`` for
    buys and ``base_amount - fee`` for sells.
    """

    supply_low: int
    supply_high: int
    start_price: int
    end_price: int
    average_price: int
    base_amount: int
    fee: int
    total: int


def validate_curve_params(
    *,
    initial_price: int,
    curve_steepness: int,
    max_supply: int,
    fee_rate: int,
) -> None:
    if initial_price <= 0:
        raise InvalidPriceError("initial_price must be greater than 0")
    if curve_steepness <= 0:
        raise InvalidCurveParamsError("curve_steepness must be greater than 0")
    if curve_steepness < MIN_CURVE_STEEPNESS:
        raise InvalidCurveParamsError(
            f"curve_steepness must be at least {MIN_CURVE_STEEPNESS}: {curve_steepness}"
        )
    if max_supply <= 0:
        raise InvalidMaxSupplyError("max_supply must be greater than 0")
    if fee_rate > MAX_FEE_RATE_BPS:
        raise FeeTooHighError(f"fee_rate must be at most {MAX_FEE_RATE_BPS} bps: {fee_rate}")


def price_at_supply(*, initial_price: int, curve_steepness: int, supply: int) -> int:
    require_u64("supply", supply)
    if supply == 0:
        return require_u64("initial_price", initial_price)

    ratio = checked_div(checked_mul(supply, SCALE), curve_steepness)
    multiplier = checked_add(SCALE, ratio)
    multiplier_sq = checked_div(checked_mul(multiplier, multiplier), SCALE)
    return checked_div(checked_mul(initial_price, multiplier_sq), SCALE)


def compute_fee(*, base_amount: int, fee_rate: int) -> int:
    """``floor(base_amount * fee_rate / 10_000)``."""
    return checked_div(checked_mul(base_amount, fee_rate), SCALE)


def _trapezoid(
    *,
    initial_price: int,
    curve_steepness: int,
    fee_rate: int,
    supply_low: int,
    supply_high: int,
    is_buy: bool,
) -> CurveQuote:
    start_price = price_at_supply(
        initial_price=initial_price, curve_steepness=curve_steepness, supply=supply_low
    )
    end_price = price_at_supply(
        initial_price=initial_price, curve_steepness=curve_steepness, supply=supply_high
    )
    average_price = checked_div(checked_add(start_price, end_price), 2)
    base_amount = checked_mul(average_price, supply_high - supply_low)
    fee = compute_fee(base_amount=base_amount, fee_rate=fee_rate)
    total = checked_add(base_amount, fee) if is_buy else checked_sub(base_amount, fee)
    return CurveQuote(
        supply_low=supply_low,
        supply_high=supply_high,
        start_price=start_price,
        end_price=end_price,
        average_price=average_price,
        base_amount=base_amount,
        fee=fee,
        total=total,
    )


def quote_buy(
    *,
    initial_price: int,
    curve_steepness: int,
    max_supply: int,
    fee_rate: int,
    current_supply: int,
    amount: int,
) -> CurveQuote:
    """Cost of minting ``amount`` tokens at ``current_supply`` (fee added)."""
    require_u64("current_supply", current_supply)
    require_u64("amount", amount)
    if amount == 0:
        raise InvalidPriceError("amount must be greater than 0")
    # Compared in unbounded ints: a sum past u64 is past max_supply too.
    if current_supply + amount > max_supply:
        raise InvalidMaxSupplyError(
            f"buy would exceed max_supply: {current_supply} + {amount} > {max_supply}"
        )
    return _trapezoid(
        initial_price=initial_price,
        curve_steepness=curve_steepness,
        fee_rate=fee_rate,
        supply_low=current_supply,
        supply_high=current_supply + amount,
        is_buy=True,
    )


def quote_sell(
    *,
    initial_price: int,
    curve_steepness: int,
    fee_rate: int,
    current_supply: int,
    amount: int,
) -> CurveQuote:
    """Payout for burning ``amount`` tokens at ``current_supply`` (fee subtracted)."""
    require_u64("current_supply", current_supply)
    require_u64("amount", amount)
    if amount == 0:
        raise InvalidPriceError("amount must be greater than 0")
    if amount > current_supply:
        raise InsufficientSupplyError(
            f"sell amount exceeds current supply: {amount} > {current_supply}"
        )
    return _trapezoid(
        initial_price=initial_price,
        curve_steepness=curve_steepness,
        fee_rate=fee_rate,
        supply_low=checked_sub(current_supply, amount),
        supply_high=current_supply,
        is_buy=False,
    )


def slippage_bps(*, spot_price: int, total: int, amount: int) -> int:
    """
    Deviation of the per-unit execution price from spot, in basis points.

        actual = total / amount
        slippage = |actual - spot| * 10_000 / spot
    """
    actual = checked_div(total, amount)
    if actual >= spot_price:
        diff = checked_sub(actual, spot_price)
    else:
        diff = checked_sub(spot_price, actual)
    return to_u16(checked_div(checked_mul(diff, SCALE), spot_price))


def market_cap(*, initial_price: int, curve_steepness: int, supply: int) -> int:
    """
    Closed-form integral of the curve over ``[0, supply]``:

        initial_price * supply * (1 + supply / (2 * curve_steepness))
    """
    require_u64("supply", supply)
    if supply == 0:
        return 0

    supply_factor = checked_div(checked_mul(supply, SCALE), checked_mul(2, curve_steepness))
    multiplier = checked_add(SCALE, supply_factor)
    return checked_div(checked_mul(checked_mul(initial_price, supply), multiplier), SCALE)


def sample_price_curve(
    *,
    initial_price: int,
    curve_steepness: int,
    max_supply: int,
    points: int,
) -> tuple[tuple[int, int], ...]:
    """Evenly spaced ``(supply, price)`` samples over ``[0, max_supply]``, both ends included."""
    if not isinstance(points, int) or isinstance(points, bool):
        raise TypeError("points must be an int")
    if points < 2:
        raise ValueError(f"points must be at least 2: {points}")
    require_u64("max_supply", max_supply)

    samples = []
    for i in range(points):
        supply = (max_supply * i) // (points - 1)
        price = price_at_supply(
            initial_price=initial_price, curve_steepness=curve_steepness, supply=supply
        )
        samples.append((supply, price))
    return tuple(samples)
