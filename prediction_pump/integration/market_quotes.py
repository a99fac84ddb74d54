"""
Trade-quote adapter for market and settlement code.

This is an imperative-shell wrapper around the pricing engine:
- Accepts curve params as a `CurveParams` record or the 26-byte stored form.
- Validates params, prices the trade, and reports spot/average/fee/slippage.
- Maps engine errors onto the market program's error code space.

The adapter does not touch supply; callers apply `new_supply` atomically with
the token mint/burn of the trade.
"""

from __future__ import annotations

import logging
from dataclasses import dataclass
from enum import Enum, unique
from typing import Optional, Union

from ..core.bonding_curve import (
    price_at_supply,
    quote_buy,
    quote_sell,
    validate_params,
)
from ..errors import CurveError, CurveErrorKind
from ..kernels.python.bonding_curve_v1 import slippage_bps
from ..kernels.python.checked_u64 import checked_div
from ..state.curve_params import CurveParams
from .config import QuoteConfig


logger = logging.getLogger(__name__)

ParamsLike = Union[CurveParams, bytes, bytearray, memoryview]


@unique
class TradeSide(Enum):
    BUY = "buy"
    SELL = "sell"


@unique
class MarketErrorCode(Enum):
    INVALID_PRICE = "InvalidPrice"
    INVALID_CURVE_PARAMS = "InvalidCurveParams"
    INVALID_MAX_SUPPLY = "InvalidMaxSupply"
    FEE_TOO_HIGH = "FeeTooHigh"
    MATH_OVERFLOW = "MathOverflow"
    SLIPPAGE_EXCEEDED = "SlippageExceeded"


MARKET_ERROR_MESSAGES: dict[MarketErrorCode, str] = {
    MarketErrorCode.INVALID_PRICE: "Invalid price (must be greater than 0)",
    MarketErrorCode.INVALID_CURVE_PARAMS: "Invalid bonding curve parameters",
    MarketErrorCode.INVALID_MAX_SUPPLY: "Invalid maximum supply",
    MarketErrorCode.FEE_TOO_HIGH: "Fee rate cannot exceed 10%",
    MarketErrorCode.MATH_OVERFLOW: "Mathematical overflow occurred",
    MarketErrorCode.SLIPPAGE_EXCEEDED: "Slippage exceeds the configured maximum",
}

# Sell-side supply shortfalls keep the historical InvalidMaxSupply code.
_KIND_TO_CODE: dict[CurveErrorKind, MarketErrorCode] = {
    CurveErrorKind.INVALID_PRICE: MarketErrorCode.INVALID_PRICE,
    CurveErrorKind.INVALID_MAX_SUPPLY: MarketErrorCode.INVALID_MAX_SUPPLY,
    CurveErrorKind.INSUFFICIENT_SUPPLY: MarketErrorCode.INVALID_MAX_SUPPLY,
    CurveErrorKind.INVALID_CURVE_PARAMS: MarketErrorCode.INVALID_CURVE_PARAMS,
    CurveErrorKind.FEE_TOO_HIGH: MarketErrorCode.FEE_TOO_HIGH,
    CurveErrorKind.MATH_OVERFLOW: MarketErrorCode.MATH_OVERFLOW,
}


class MarketError(Exception):
    """An engine or adapter failure expressed in market error codes."""

    def __init__(self, code: MarketErrorCode, detail: str = "") -> None:
        self.code = code
        self.detail = detail
        message = MARKET_ERROR_MESSAGES[code]
        super().__init__(f"{code.value}: {message}" + (f" ({detail})" if detail else ""))


class SlippageExceededError(Exception):
    """Quoted slippage is above `QuoteConfig.max_slippage_bps`."""

    def __init__(self, slippage_bps: int, max_slippage_bps: int) -> None:
        self.slippage_bps = slippage_bps
        self.max_slippage_bps = max_slippage_bps
        super().__init__(f"slippage {slippage_bps} bps exceeds maximum {max_slippage_bps} bps")


@dataclass(frozen=True)
class TradeQuote:
    side: TradeSide
    amount: int
    current_supply: int
    new_supply: int
    spot_price: int
    average_price: int
    base_amount: int
    fee: int
    # Cost for buys, payout for sells; fee included.
    total: int
    slippage_bps: int

    @property
    def execution_price(self) -> int:
        """Per-unit price actually paid/received (floor)."""
        return checked_div(self.total, self.amount)


@dataclass(frozen=True)
class QuoteOutcome:
    ok: bool
    quote: Optional[TradeQuote] = None
    error: Optional[str] = None
    code: Optional[MarketErrorCode] = None


def _coerce_params(params: ParamsLike) -> CurveParams:
    if isinstance(params, CurveParams):
        return params
    if isinstance(params, (bytes, bytearray, memoryview)):
        return CurveParams.from_bytes(params)
    raise TypeError(f"params must be CurveParams or bytes, got {type(params).__name__}")


def _coerce_side(side: Union[TradeSide, str]) -> TradeSide:
    if isinstance(side, TradeSide):
        return side
    if isinstance(side, str):
        try:
            return TradeSide(side.strip().lower())
        except ValueError:
            raise ValueError(f"side must be 'buy' or 'sell', got {side!r}") from None
    raise TypeError("side must be a TradeSide or str")


def quote_trade(
    params: ParamsLike,
    current_supply: int,
    amount: int,
    side: Union[TradeSide, str],
    *,
    config: QuoteConfig = QuoteConfig(),
) -> TradeQuote:
    """
    Price a single trade against the market's curve.

    Raises:
        CurveError: from the engine (invalid params, amount, supply, overflow)
        SlippageExceededError: slippage is above `config.max_slippage_bps`
    """
    curve = _coerce_params(params)
    trade_side = _coerce_side(side)
    validate_params(curve)

    spot = price_at_supply(curve, current_supply)
    if trade_side is TradeSide.BUY:
        q = quote_buy(curve, current_supply, amount)
        new_supply = q.supply_high
    else:
        q = quote_sell(curve, current_supply, amount)
        new_supply = q.supply_low
    slippage = slippage_bps(spot_price=spot, total=q.total, amount=amount)

    if config.max_slippage_bps is not None and slippage > config.max_slippage_bps:
        logger.info(
            "rejecting %s of %d at supply %d: slippage %d bps > %d bps",
            trade_side.value, amount, current_supply, slippage, config.max_slippage_bps,
        )
        raise SlippageExceededError(slippage, config.max_slippage_bps)

    quote = TradeQuote(
        side=trade_side,
        amount=amount,
        current_supply=current_supply,
        new_supply=new_supply,
        spot_price=spot,
        average_price=q.average_price,
        base_amount=q.base_amount,
        fee=q.fee,
        total=q.total,
        slippage_bps=slippage,
    )
    logger.debug(
        "quoted %s amount=%d supply=%d->%d total=%d fee=%d slippage_bps=%d",
        trade_side.value, amount, current_supply, new_supply, quote.total, quote.fee, slippage,
    )
    return quote


def to_market_error(err: Exception) -> MarketError:
    """Map an engine/adapter exception onto the market error code space."""
    if isinstance(err, MarketError):
        return err
    if isinstance(err, CurveError):
        return MarketError(_KIND_TO_CODE[err.kind], str(err))
    if isinstance(err, SlippageExceededError):
        return MarketError(MarketErrorCode.SLIPPAGE_EXCEEDED, str(err))
    raise TypeError(f"not a pricing error: {type(err).__name__}") from err


def quote_trade_or_error(
    params: ParamsLike,
    current_supply: int,
    amount: int,
    side: Union[TradeSide, str],
    *,
    config: QuoteConfig = QuoteConfig(),
) -> QuoteOutcome:
    """Non-raising form of `quote_trade` for shells that report failures as data."""
    try:
        quote = quote_trade(params, current_supply, amount, side, config=config)
    except (CurveError, SlippageExceededError) as exc:
        mapped = to_market_error(exc)
        logger.warning("quote failed: %s", mapped)
        return QuoteOutcome(ok=False, error=str(exc), code=mapped.code)
    return QuoteOutcome(ok=True, quote=quote)
