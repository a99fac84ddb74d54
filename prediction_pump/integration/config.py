"""
Declarative configuration for markets and the quote adapter.

Curve presets live in `prediction_pump/configs/curve_presets.yaml`:

    presets:
      <name>: {initial_price, curve_steepness, max_supply, fee_rate}
    quote:
      max_slippage_bps: <u16 or null>

Every preset is validated with the engine's parameter validator on load, so a
loaded preset is always safe to price with.
"""

from __future__ import annotations

import logging
from dataclasses import dataclass
from functools import lru_cache
from pathlib import Path
from typing import Any, Mapping, Optional

import yaml

from ..core.bonding_curve import validate_params
from ..kernels.python.checked_u64 import require_u16
from ..state.curve_params import CurveParams


logger = logging.getLogger(__name__)


def default_presets_path() -> Path:
    # prediction_pump/integration/config.py -> prediction_pump/configs/curve_presets.yaml
    return Path(__file__).resolve().parents[1] / "configs" / "curve_presets.yaml"


@dataclass(frozen=True)
class QuoteConfig:
    # Trades whose slippage (fee included) exceeds this bound are rejected by
    # `quote_trade`. None disables the check.
    max_slippage_bps: Optional[int] = None

    def __post_init__(self) -> None:
        if self.max_slippage_bps is not None:
            require_u16("max_slippage_bps", self.max_slippage_bps)


def _load_yaml_document(path: Path) -> Mapping[str, Any]:
    try:
        text = path.read_text(encoding="utf-8")
    except OSError as exc:
        raise ValueError(f"cannot read config {path}: {exc}") from exc
    try:
        obj = yaml.safe_load(text)
    except yaml.YAMLError as exc:
        raise ValueError(f"invalid config YAML {path}: {exc}") from exc
    if obj is None:
        obj = {}
    if not isinstance(obj, Mapping):
        raise TypeError(f"config YAML must be a mapping: {path}")
    return obj


def parse_curve_presets(doc: Mapping[str, Any]) -> dict[str, CurveParams]:
    raw = doc.get("presets")
    if not isinstance(raw, Mapping) or not raw:
        raise ValueError("config must define a non-empty 'presets' mapping")

    presets: dict[str, CurveParams] = {}
    for name, fields in raw.items():
        if not isinstance(name, str) or not name.strip():
            raise ValueError(f"preset names must be non-empty strings: {name!r}")
        params = CurveParams.from_dict(fields)
        validate_params(params)
        presets[name] = params
    return presets


def parse_quote_config(doc: Mapping[str, Any]) -> QuoteConfig:
    raw = doc.get("quote")
    if raw is None:
        return QuoteConfig()
    if not isinstance(raw, Mapping):
        raise TypeError("'quote' must be a mapping")
    unknown = sorted(set(raw) - {"max_slippage_bps"})
    if unknown:
        raise ValueError(f"unknown quote config field(s): {', '.join(map(str, unknown))}")
    return QuoteConfig(**dict(raw))


@lru_cache(maxsize=1)
def _load_default_document() -> Mapping[str, Any]:
    path = default_presets_path()
    logger.debug("loading curve presets from %s", path)
    return _load_yaml_document(path)


def _document(path: Optional[Path]) -> Mapping[str, Any]:
    if path is None:
        return _load_default_document()
    logger.debug("loading curve presets from %s", path)
    return _load_yaml_document(Path(path))


def load_curve_presets(path: Optional[Path] = None) -> dict[str, CurveParams]:
    """Load and validate all presets (default file when `path` is None)."""
    presets = parse_curve_presets(_document(path))
    logger.debug("loaded %d curve preset(s): %s", len(presets), ", ".join(sorted(presets)))
    return presets


def get_curve_preset(name: str, path: Optional[Path] = None) -> CurveParams:
    presets = load_curve_presets(path)
    try:
        return presets[name]
    except KeyError:
        raise KeyError(f"unknown curve preset {name!r}; available: {', '.join(sorted(presets))}") from None


def load_quote_config(path: Optional[Path] = None) -> QuoteConfig:
    return parse_quote_config(_document(path))
