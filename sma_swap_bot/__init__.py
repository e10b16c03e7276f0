"""SMA Swap Bot - moving-average crossover trading on a Solana DEX aggregator.

This package provides a small, sequential trading loop that combines:
- Jupiter quote polling for a token pair
- A bounded simple-moving-average signal
- Swap execution on Solana with exponential backoff
"""

__version__ = "0.1.0"

__all__ = [
    "config",
    "dex",
    "engine",
    "infra",
    "cli",
]
