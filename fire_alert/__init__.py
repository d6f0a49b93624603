"""Fire alert monitor: real-time fire, smoke and temperature alerting."""

__version__ = "1.0.0"
