from __future__ import annotations

import logging

import pytest

from prediction_pump.errors import (
    InsufficientSupplyError,
    InvalidCurveParamsError,
    InvalidMaxSupplyError,
    InvalidPriceError,
    MathOverflowError,
)
from prediction_pump.integration.config import QuoteConfig
from prediction_pump.integration.market_quotes import (
    MarketError,
    MarketErrorCode,
    SlippageExceededError,
    TradeSide,
    quote_trade,
    quote_trade_or_error,
    to_market_error,
)
from prediction_pump.state import CurveParams


PARAMS = CurveParams(initial_price=1000, curve_steepness=10_000, max_supply=1_000_000, fee_rate=100)


def test_buy_quote_fields() -> None:
    q = quote_trade(PARAMS, 0, 10_000, TradeSide.BUY)
    assert q.side is TradeSide.BUY
    assert q.new_supply == 10_000
    assert q.spot_price == 1000
    assert q.average_price == 2500
    assert q.base_amount == 25_000_000
    assert q.fee == 250_000
    assert q.total == 25_250_000
    assert q.execution_price == 2525
    assert q.slippage_bps == 15_250


def test_sell_quote_from_stored_bytes() -> None:
    q = quote_trade(PARAMS.to_bytes(), 1100, 100, "sell")
    assert q.side is TradeSide.SELL
    assert q.new_supply == 1000
    assert q.total == 120_879
    assert q.spot_price == 1232


def test_side_parsing() -> None:
    assert quote_trade(PARAMS, 0, 1, " BUY ").side is TradeSide.BUY
    with pytest.raises(ValueError):
        quote_trade(PARAMS, 0, 1, "hold")
    with pytest.raises(TypeError):
        quote_trade(PARAMS, 0, 1, 1)  # type: ignore[arg-type]


def test_params_type_checked() -> None:
    with pytest.raises(TypeError):
        quote_trade({"initial_price": 1}, 0, 1, "buy")  # type: ignore[arg-type]


def test_invalid_params_rejected_before_pricing() -> None:
    bad = CurveParams(initial_price=1000, curve_steepness=999, max_supply=1_000_000, fee_rate=100)
    with pytest.raises(InvalidCurveParamsError):
        quote_trade(bad, 0, 1, "buy")


def test_slippage_limit() -> None:
    with pytest.raises(SlippageExceededError) as exc_info:
        quote_trade(PARAMS, 1000, 1000, "buy", config=QuoteConfig(max_slippage_bps=500))
    assert exc_info.value.slippage_bps == 1057
    assert exc_info.value.max_slippage_bps == 500
    assert quote_trade(PARAMS, 1000, 10, "buy", config=QuoteConfig(max_slippage_bps=500)).slippage_bps == 107


@pytest.mark.parametrize(
    "err, code",
    [
        (InvalidPriceError("x"), MarketErrorCode.INVALID_PRICE),
        (InvalidMaxSupplyError("x"), MarketErrorCode.INVALID_MAX_SUPPLY),
        (InsufficientSupplyError("x"), MarketErrorCode.INVALID_MAX_SUPPLY),
        (InvalidCurveParamsError("x"), MarketErrorCode.INVALID_CURVE_PARAMS),
        (MathOverflowError("x"), MarketErrorCode.MATH_OVERFLOW),
        (SlippageExceededError(10, 5), MarketErrorCode.SLIPPAGE_EXCEEDED),
    ],
)
def test_error_mapping(err: Exception, code: MarketErrorCode) -> None:
    mapped = to_market_error(err)
    assert isinstance(mapped, MarketError)
    assert mapped.code is code
    assert str(mapped).startswith(code.value)


def test_error_mapping_rejects_foreign_exceptions() -> None:
    with pytest.raises(TypeError):
        to_market_error(KeyError("x"))
    existing = MarketError(MarketErrorCode.FEE_TOO_HIGH)
    assert to_market_error(existing) is existing
    assert str(existing) == "FeeTooHigh: Fee rate cannot exceed 10%"


def test_outcome_ok() -> None:
    outcome = quote_trade_or_error(PARAMS, 0, 10_000, "buy")
    assert outcome.ok
    assert outcome.quote is not None and outcome.quote.total == 25_250_000
    assert outcome.code is None


def test_outcome_error(caplog: pytest.LogCaptureFixture) -> None:
    with caplog.at_level(logging.WARNING, logger="prediction_pump"):
        outcome = quote_trade_or_error(PARAMS, 100, 200, "sell")
    assert not outcome.ok
    assert outcome.quote is None
    assert outcome.code is MarketErrorCode.INVALID_MAX_SUPPLY
    assert "exceeds current supply" in (outcome.error or "")
    assert any("quote failed" in r.getMessage() for r in caplog.records)


def test_quote_logs_at_debug(caplog: pytest.LogCaptureFixture) -> None:
    with caplog.at_level(logging.DEBUG, logger="prediction_pump"):
        quote_trade(PARAMS, 0, 10, "buy")
    assert any(r.name == "prediction_pump.integration.market_quotes" for r in caplog.records)
