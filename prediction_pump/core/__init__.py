"""
Core pricing engine
"""

from .bonding_curve import (
    calculate_buy_price,
    calculate_market_cap,
    calculate_sell_price,
    calculate_slippage,
    is_valid_params,
    price_at_supply,
    quote_buy,
    quote_sell,
    sample_price_curve,
    validate_params,
)
from ..errors import (
    CurveError,
    CurveErrorKind,
    FeeTooHighError,
    InsufficientSupplyError,
    InvalidCurveParamsError,
    InvalidMaxSupplyError,
    InvalidPriceError,
    MathOverflowError,
)
from ..kernels.python.bonding_curve_v1 import CurveQuote

__all__ = [
    "calculate_buy_price",
    "calculate_market_cap",
    "calculate_sell_price",
    "calculate_slippage",
    "is_valid_params",
    "price_at_supply",
    "quote_buy",
    "quote_sell",
    "sample_price_curve",
    "validate_params",
    "CurveQuote",
    "CurveError",
    "CurveErrorKind",
    "FeeTooHighError",
    "InsufficientSupplyError",
    "InvalidCurveParamsError",
    "InvalidMaxSupplyError",
    "InvalidPriceError",
    "MathOverflowError",
]
