"""
Persisted state owned by markets and read by the pricing engine.
"""

from .curve_params import CURVE_PARAMS_LEN, CurveParams

__all__ = [
    "CURVE_PARAMS_LEN",
    "CurveParams",
]
