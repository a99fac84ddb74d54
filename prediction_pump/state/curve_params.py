"""
Bonding curve parameter record, as stored on the owning market.

Persisted layout (26 bytes, little-endian, no padding, no version tag):

    initial_price    u64   8 bytes
    curve_steepness  u64   8 bytes
    max_supply       u64   8 bytes
    fee_rate         u16   2 bytes

Schema changes require a new market type, so the layout is fixed here.
"""

from __future__ import annotations

import struct
from dataclasses import dataclass
from typing import Any, Mapping

from ..kernels.python.bonding_curve_v1 import validate_curve_params
from ..kernels.python.checked_u64 import require_u16, require_u64


_LAYOUT = struct.Struct("<QQQH")
CURVE_PARAMS_LEN = _LAYOUT.size  # 26

FIELD_NAMES: tuple[str, ...] = ("initial_price", "curve_steepness", "max_supply", "fee_rate")


@dataclass(frozen=True)
class CurveParams:
    """Immutable curve parameters.

    Construction only checks integer ranges (u64 / u16). Use ``create()`` or
    ``core.validate_params()`` to enforce the market invariants.
    """

    initial_price: int
    curve_steepness: int
    max_supply: int
    fee_rate: int

    def __post_init__(self) -> None:
        require_u64("initial_price", self.initial_price)
        require_u64("curve_steepness", self.curve_steepness)
        require_u64("max_supply", self.max_supply)
        require_u16("fee_rate", self.fee_rate)

    @classmethod
    def create(
        cls,
        initial_price: int,
        curve_steepness: int,
        max_supply: int,
        fee_rate: int,
    ) -> "CurveParams":
        """Build and validate; raises a ``CurveError`` subclass on bad invariants."""
        params = cls(
            initial_price=initial_price,
            curve_steepness=curve_steepness,
            max_supply=max_supply,
            fee_rate=fee_rate,
        )
        validate_curve_params(
            initial_price=params.initial_price,
            curve_steepness=params.curve_steepness,
            max_supply=params.max_supply,
            fee_rate=params.fee_rate,
        )
        return params

    def to_bytes(self) -> bytes:
        return _LAYOUT.pack(self.initial_price, self.curve_steepness, self.max_supply, self.fee_rate)

    @classmethod
    def from_bytes(cls, data: bytes) -> "CurveParams":
        if not isinstance(data, (bytes, bytearray, memoryview)):
            raise TypeError("data must be bytes-like")
        if len(data) != CURVE_PARAMS_LEN:
            raise ValueError(f"curve params must be exactly {CURVE_PARAMS_LEN} bytes, got {len(data)}")
        initial_price, curve_steepness, max_supply, fee_rate = _LAYOUT.unpack(bytes(data))
        return cls(
            initial_price=initial_price,
            curve_steepness=curve_steepness,
            max_supply=max_supply,
            fee_rate=fee_rate,
        )

    def to_dict(self) -> dict[str, int]:
        return {name: getattr(self, name) for name in FIELD_NAMES}

    @classmethod
    def from_dict(cls, d: Mapping[str, Any]) -> "CurveParams":
        """Strict inverse of ``to_dict``. Unknown or missing keys are rejected."""
        if not isinstance(d, Mapping):
            raise TypeError("curve params must be a mapping")
        extra = sorted(set(d) - set(FIELD_NAMES))
        if extra:
            raise ValueError(f"unknown curve params field(s): {', '.join(map(str, extra))}")
        missing = [name for name in FIELD_NAMES if name not in d]
        if missing:
            raise ValueError(f"missing curve params field(s): {', '.join(missing)}")
        kwargs: dict[str, int] = {}
        for name in FIELD_NAMES:
            val = d[name]
            if not isinstance(val, int) or isinstance(val, bool):
                raise TypeError(f"curve param {name!r} must be int, got {type(val).__name__}")
            kwargs[name] = int(val)
        return cls(**kwargs)
