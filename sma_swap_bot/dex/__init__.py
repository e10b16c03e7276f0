"""DEX aggregator and ledger integration layer.

This module provides abstractions and implementations for quoting and
building swaps on Jupiter and for signing and confirming them on Solana.
"""

from sma_swap_bot.dex.base import (
    BroadcastError,
    ConfirmationError,
    LatestBlockhash,
    LedgerConnection,
    Quote,
    QuoteProvider,
    SigningError,
    SwapBuildError,
    SwapError,
    TransactionSigner,
)
from sma_swap_bot.dex.jupiter import JupiterClient

__all__ = [
    "Quote",
    "QuoteProvider",
    "LedgerConnection",
    "TransactionSigner",
    "LatestBlockhash",
    "SwapError",
    "SwapBuildError",
    "SigningError",
    "BroadcastError",
    "ConfirmationError",
    "JupiterClient",
]
