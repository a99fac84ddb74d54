"""
Integration layer: configuration, logging and the trade-quote adapter used by
market and settlement code.
"""

from .config import QuoteConfig, get_curve_preset, load_curve_presets, load_quote_config
from .logging_setup import setup_logging
from .market_quotes import (
    MarketError,
    MarketErrorCode,
    QuoteOutcome,
    SlippageExceededError,
    TradeQuote,
    TradeSide,
    quote_trade,
    quote_trade_or_error,
    to_market_error,
)

__all__ = [
    "QuoteConfig",
    "get_curve_preset",
    "load_curve_presets",
    "load_quote_config",
    "setup_logging",
    "MarketError",
    "MarketErrorCode",
    "QuoteOutcome",
    "SlippageExceededError",
    "TradeQuote",
    "TradeSide",
    "quote_trade",
    "quote_trade_or_error",
    "to_market_error",
]
