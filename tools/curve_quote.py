#!/usr/bin/env python3
"""
Offline bonding curve calculator.

Examples:
  python3 tools/curve_quote.py --preset default price 10000
  python3 tools/curve_quote.py --preset standard buy 10000 1000
  python3 tools/curve_quote.py --params 1000,10000,1000000,100 sell 5000 100
  python3 tools/curve_quote.py --preset steep curve --points 11
  python3 tools/curve_quote.py --preset default encode
  python3 tools/curve_quote.py --params-hex <52 hex chars> market-cap 10000
"""

from __future__ import annotations

import argparse
import json
import logging
import sys
from pathlib import Path
from typing import Any, Optional, Sequence

ROOT = Path(__file__).resolve().parents[1]
if str(ROOT) not in sys.path:
    sys.path.insert(0, str(ROOT))

from prediction_pump.core import (
    CurveError,
    calculate_market_cap,
    price_at_supply,
    sample_price_curve,
    validate_params,
)
from prediction_pump.integration import (
    QuoteConfig,
    SlippageExceededError,
    get_curve_preset,
    load_quote_config,
    quote_trade,
    setup_logging,
    to_market_error,
)
from prediction_pump.state import CurveParams


logger = logging.getLogger("prediction_pump.tools.curve_quote")


def _parse_params_csv(text: str) -> CurveParams:
    parts = [p.strip() for p in text.split(",")]
    if len(parts) != 4:
        raise ValueError("--params expects initial_price,curve_steepness,max_supply,fee_rate")
    try:
        values = [int(p, 10) for p in parts]
    except ValueError as exc:
        raise ValueError(f"--params values must be integers: {exc}") from exc
    return CurveParams(*values)


def _resolve_params(args: argparse.Namespace) -> CurveParams:
    if args.params_hex:
        try:
            raw = bytes.fromhex(args.params_hex)
        except ValueError as exc:
            raise ValueError(f"--params-hex is not valid hex: {exc}") from exc
        return CurveParams.from_bytes(raw)
    if args.params:
        return _parse_params_csv(args.params)
    return get_curve_preset(args.preset, Path(args.config) if args.config else None)


def _build_parser() -> argparse.ArgumentParser:
    ap = argparse.ArgumentParser(description="Quote prices on a quadratic bonding curve.")
    src = ap.add_mutually_exclusive_group()
    src.add_argument("--preset", default="default", help="Named preset from the curve presets YAML")
    src.add_argument("--params", help="initial_price,curve_steepness,max_supply,fee_rate")
    src.add_argument("--params-hex", help="26-byte stored params as hex")
    ap.add_argument("--config", help="Alternate curve presets YAML")
    ap.add_argument("--max-slippage-bps", type=int, default=None, help="Reject trades above this slippage")
    ap.add_argument("-v", "--verbose", action="store_true", help="Debug logging")

    sub = ap.add_subparsers(dest="command", required=True)

    p_price = sub.add_parser("price", help="Spot price at a supply")
    p_price.add_argument("supply", type=int)

    for name in ("buy", "sell"):
        p_trade = sub.add_parser(name, help=f"Quote a {name}")
        p_trade.add_argument("supply", type=int, help="Current outstanding supply")
        p_trade.add_argument("amount", type=int)

    p_cap = sub.add_parser("market-cap", help="Integral of the curve up to a supply")
    p_cap.add_argument("supply", type=int)

    p_curve = sub.add_parser("curve", help="Sample (supply, price) points up to max_supply")
    p_curve.add_argument("--points", type=int, default=11)

    sub.add_parser("encode", help="Print the 26-byte stored form as hex")
    sub.add_parser("validate", help="Validate the parameters")
    return ap


def _run(args: argparse.Namespace) -> dict[str, Any]:
    params = _resolve_params(args)
    out: dict[str, Any] = {"params": params.to_dict()}

    if args.command == "validate":
        validate_params(params)
        out["valid"] = True
        return out

    if args.command == "encode":
        out["hex"] = params.to_bytes().hex()
        return out

    validate_params(params)

    if args.command == "price":
        out["supply"] = args.supply
        out["price"] = price_at_supply(params, args.supply)
    elif args.command in ("buy", "sell"):
        if args.max_slippage_bps is None:
            config = load_quote_config(Path(args.config) if args.config else None)
        else:
            config = QuoteConfig(args.max_slippage_bps)
        quote = quote_trade(params, args.supply, args.amount, args.command, config=config)
        out["quote"] = {
            "side": quote.side.value,
            "amount": quote.amount,
            "current_supply": quote.current_supply,
            "new_supply": quote.new_supply,
            "spot_price": quote.spot_price,
            "average_price": quote.average_price,
            "execution_price": quote.execution_price,
            "base_amount": quote.base_amount,
            "fee": quote.fee,
            "total": quote.total,
            "slippage_bps": quote.slippage_bps,
        }
    elif args.command == "market-cap":
        out["supply"] = args.supply
        out["market_cap"] = calculate_market_cap(params, args.supply)
    elif args.command == "curve":
        out["points"] = [[s, p] for s, p in sample_price_curve(params, args.points)]
    else:
        raise ValueError(f"unknown command: {args.command}")
    return out


def main(argv: Optional[Sequence[str]] = None) -> int:
    args = _build_parser().parse_args(argv)
    setup_logging(logging.DEBUG if args.verbose else logging.WARNING)

    try:
        out = _run(args)
    except (CurveError, SlippageExceededError) as exc:
        err = to_market_error(exc)
        logger.error("%s", err)
        print(json.dumps({"ok": False, "code": err.code.value, "error": str(exc)}, sort_keys=True))
        return 1
    except (KeyError, TypeError, ValueError) as exc:
        logger.error("invalid input: %s", exc)
        print(json.dumps({"ok": False, "error": str(exc)}, sort_keys=True))
        return 2

    out["ok"] = True
    print(json.dumps(out, sort_keys=True))
    return 0


if __name__ == "__main__":
    raise SystemExit(main())
