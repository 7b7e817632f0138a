"""Self-hosted sleep-cycle recommendation server."""

__version__ = "0.1.0"
