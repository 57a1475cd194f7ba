"""launchdeck — launch processes gated by check commands."""

__version__ = "0.1.0"
