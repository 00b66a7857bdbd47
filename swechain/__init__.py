"""In-memory coding-trajectory and issue-market state modules with bech32 addresses and pagination."""

__version__ = "0.1.0"