"""
Kernel layer.

Deterministic, integer-only pricing kernels. `kernels/python/` holds the
production Python implementations; `core/` wraps them behind the public
engine API.
"""
