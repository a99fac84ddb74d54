"""
Bonding curve pricing engine.

Stateless pricing for outcome tokens of a binary prediction market. Every
function takes the market's ``CurveParams`` plus a caller-supplied supply and
returns an integer or raises a ``CurveError`` subclass; nothing is stored.

Algorithm Design:
- Type: Fixed-Point Integer Arithmetic (scale 10_000) / Checked u64
- Time Complexity: O(1) per call
- Trade pricing: trapezoidal rule over the supply interval, fee on top (buy)
  or taken out (sell)
- Market cap: exact closed-form integral of the quadratic curve
"""

from __future__ import annotations

from ..errors import CurveError
from ..kernels.python import bonding_curve_v1 as _kernel
from ..kernels.python.bonding_curve_v1 import CurveQuote
from ..state.curve_params import CurveParams


def validate_params(params: CurveParams) -> None:
    """
    Check a parameter record before a market accepts it.

    Checks, in order: initial_price > 0, curve_steepness > 0,
    curve_steepness >= 1000, max_supply > 0, fee_rate <= 1000.

    Raises:
        InvalidPriceError, InvalidCurveParamsError, InvalidMaxSupplyError,
        FeeTooHighError: for the first violated check.
    """
    _kernel.validate_curve_params(
        initial_price=params.initial_price,
        curve_steepness=params.curve_steepness,
        max_supply=params.max_supply,
        fee_rate=params.fee_rate,
    )


def is_valid_params(params: CurveParams) -> bool:
    try:
        validate_params(params)
    except CurveError:
        return False
    return True


def price_at_supply(params: CurveParams, supply: int) -> int:
    """
    Instantaneous unit price at ``supply``.

        price = initial_price * (1 + supply / curve_steepness)^2

    Returns ``initial_price`` exactly when supply is zero.
    """
    return _kernel.price_at_supply(
        initial_price=params.initial_price,
        curve_steepness=params.curve_steepness,
        supply=supply,
    )


def quote_buy(params: CurveParams, current_supply: int, amount: int) -> CurveQuote:
    """Full breakdown of a buy; see ``calculate_buy_price``."""
    return _kernel.quote_buy(
        initial_price=params.initial_price,
        curve_steepness=params.curve_steepness,
        max_supply=params.max_supply,
        fee_rate=params.fee_rate,
        current_supply=current_supply,
        amount=amount,
    )


def quote_sell(params: CurveParams, current_supply: int, amount: int) -> CurveQuote:
    """Full breakdown of a sell; see ``calculate_sell_price``."""
    return _kernel.quote_sell(
        initial_price=params.initial_price,
        curve_steepness=params.curve_steepness,
        fee_rate=params.fee_rate,
        current_supply=current_supply,
        amount=amount,
    )


def calculate_buy_price(params: CurveParams, current_supply: int, amount: int) -> int:
    """
    Cost of buying ``amount`` tokens when ``current_supply`` are outstanding.

        avg = (price(s) + price(s + amount)) / 2
        base = avg * amount
        cost = base + base * fee_rate / 10_000

    Raises:
        InvalidPriceError: amount is zero
        InvalidMaxSupplyError: current_supply + amount > max_supply
        MathOverflowError: an intermediate left the u64 range
    """
    return quote_buy(params, current_supply, amount).total


def calculate_sell_price(params: CurveParams, current_supply: int, amount: int) -> int:
    """
    Payout for selling ``amount`` tokens when ``current_supply`` are outstanding.

        avg = (price(s - amount) + price(s)) / 2
        base = avg * amount
        payout = base - base * fee_rate / 10_000

    Raises:
        InvalidPriceError: amount is zero
        InsufficientSupplyError: amount > current_supply (an InvalidMaxSupplyError)
        MathOverflowError: an intermediate left the u64 range
    """
    return quote_sell(params, current_supply, amount).total


def calculate_slippage(params: CurveParams, current_supply: int, amount: int, is_buy: bool) -> int:
    """
    Basis-point deviation between the average execution price of a trade
    (fee included) and the spot price at ``current_supply``.

    Raises the quoter's errors, and ``MathOverflowError`` if the result does
    not fit in u16.
    """
    spot = price_at_supply(params, current_supply)
    if is_buy:
        quote = quote_buy(params, current_supply, amount)
    else:
        quote = quote_sell(params, current_supply, amount)
    return _kernel.slippage_bps(spot_price=spot, total=quote.total, amount=amount)


def calculate_market_cap(params: CurveParams, supply: int) -> int:
    """Exact integral of the price curve from 0 to ``supply`` (0 at zero supply)."""
    return _kernel.market_cap(
        initial_price=params.initial_price,
        curve_steepness=params.curve_steepness,
        supply=supply,
    )


def sample_price_curve(params: CurveParams, points: int) -> tuple[tuple[int, int], ...]:
    """``points`` evenly spaced ``(supply, price)`` pairs from 0 to ``max_supply``."""
    return _kernel.sample_price_curve(
        initial_price=params.initial_price,
        curve_steepness=params.curve_steepness,
        max_supply=params.max_supply,
        points=points,
    )
