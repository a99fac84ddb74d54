"""
prediction_pump: bonding curve pricing for binary prediction markets.

- `core/`: public pricing engine API and error types.
- `state/`: the persisted curve parameter record.
- `kernels/python/`: integer-only arithmetic kernels.
- `integration/`: configuration, logging and the trade-quote adapter used by
  market/settlement code.
"""

__version__ = "0.1.0"
