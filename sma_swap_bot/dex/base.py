"""Base DEX and ledger abstractions.

This module defines the interfaces the trading engine depends on, so the
Jupiter aggregator and the Solana RPC network can be replaced by fakes in
tests or by other implementations.
"""

from __future__ import annotations

from dataclasses import dataclass
from typing import Any, Protocol

# Raw Jupiter quote payload, passed through untouched to the swap endpoint
Quote = dict[str, Any]


class SwapError(Exception):
    """Base class for failures of a single swap attempt."""


class SwapBuildError(SwapError):
    """The swap-construction service did not return a usable transaction."""


class SigningError(SwapError):
    """The returned transaction could not be deserialized or signed."""


class BroadcastError(SwapError):
    """The signed transaction was rejected by the RPC node."""


class ConfirmationError(SwapError):
    """The transaction was not confirmed before its blockhash expired."""


@dataclass(slots=True, frozen=True)
class LatestBlockhash:
    """Finality checkpoint used to bound transaction confirmation.

    Attributes:
        blockhash: Recent blockhash (base58)
        last_valid_block_height: Last block height at which a transaction
            referencing this blockhash may still land
    """

    blockhash: str
    last_valid_block_height: int


class QuoteProvider(Protocol):
    """Interface of the price-quote and swap-construction service."""

    def get_quote(self, input_mint: str, output_mint: str, amount: int) -> Quote | None:
        """Return a raw quote payload, or None if the quote is unavailable."""
        ...

    def get_price(self, input_mint: str, output_mint: str, amount: int) -> float | None:
        """Return ``outAmount / inAmount`` for the pair, or None on failure."""
        ...

    def get_swap_transaction(self, quote: Quote, user_public_key: str) -> str:
        """Return a base64 serialized, unsigned swap transaction.

        Raises:
            SwapBuildError: If the service fails or the payload is malformed
        """
        ...

    def close(self) -> None:
        """Release network resources."""
        ...


class LedgerConnection(Protocol):
    """Interface of the ledger network connection."""

    def send_raw_transaction(self, raw: bytes) -> str:
        """Broadcast a signed transaction and return its signature.

        Raises:
            BroadcastError: If the node rejects the transaction
        """
        ...

    def get_latest_blockhash(self) -> LatestBlockhash:
        """Fetch the network's latest finality checkpoint."""
        ...

    def confirm_transaction(self, signature: str, checkpoint: LatestBlockhash) -> bool:
        """Block until ``signature`` is confirmed against ``checkpoint``.

        Raises:
            ConfirmationError: If confirmation fails or times out
        """
        ...


class TransactionSigner(Protocol):
    """Interface of the wallet holding the signing key."""

    @property
    def public_key(self) -> str:
        """Base58 public key of the wallet."""
        ...

    def sign(self, serialized_transaction: str) -> bytes:
        """Deserialize a base64 transaction, sign it and return raw bytes.

        Raises:
            SigningError: If the payload cannot be decoded or signed
        """
        ...


__all__ = [
    "Quote",
    "SwapError",
    "SwapBuildError",
    "SigningError",
    "BroadcastError",
    "ConfirmationError",
    "LatestBlockhash",
    "QuoteProvider",
    "LedgerConnection",
    "TransactionSigner",
]
