"""Solana ledger connection and wallet signer.

Wraps ``solana.rpc.api.Client`` and ``solders`` keypairs behind the
``LedgerConnection`` and ``TransactionSigner`` interfaces used by the
swap executor.
"""

from __future__ import annotations

import base64
import binascii
import logging

from solana.rpc.api import Client
from solana.rpc.commitment import Commitment, Confirmed
from solders.keypair import Keypair
from solders.signature import Signature
from solders.transaction import VersionedTransaction

from sma_swap_bot.dex.base import (
    BroadcastError,
    ConfirmationError,
    LatestBlockhash,
    SigningError,
)

logger = logging.getLogger(__name__)

CLUSTER_URLS = {
    "mainnet-beta": "https://api.mainnet-beta.solana.com",
    "devnet": "https://api.devnet.solana.com",
    "testnet": "https://api.testnet.solana.com",
}

SECRET_KEY_LENGTH = 64


def cluster_api_url(cluster: str = "mainnet-beta") -> str:
    """Return the public RPC endpoint for a Solana cluster.

    Raises:
        ValueError: If the cluster name is unknown
    """
    try:
        return CLUSTER_URLS[cluster]
    except KeyError:
        raise ValueError(
            f"Unknown Solana cluster: {cluster}. Expected one of: {', '.join(CLUSTER_URLS)}"
        ) from None


def parse_secret_key(value: str) -> Keypair:
    """Build a keypair from a comma-separated integer byte array.

    Args:
        value: Secret key such as ``"12,34,...,255"`` (64 bytes)

    Returns:
        Solders Keypair

    Raises:
        ValueError: If the value is empty, malformed or has the wrong length
    """
    if not value or not value.strip():
        raise ValueError("Wallet secret key is empty")

    raw = value.strip().strip("[]")
    try:
        numbers = [int(part) for part in raw.split(",") if part.strip()]
    except ValueError:
        raise ValueError("Wallet secret key must be a comma-separated list of integers") from None

    if any(n < 0 or n > 255 for n in numbers):
        raise ValueError("Wallet secret key bytes must be in range 0-255")

    if len(numbers) != SECRET_KEY_LENGTH:
        raise ValueError(
            f"Wallet secret key must have {SECRET_KEY_LENGTH} bytes, got {len(numbers)}"
        )

    return Keypair.from_bytes(bytes(numbers))


class KeypairSigner:
    """Signs serialized versioned transactions with a local keypair."""

    def __init__(self, keypair: Keypair) -> None:
        self.keypair = keypair

    @property
    def public_key(self) -> str:
        return str(self.keypair.pubkey())

    def sign(self, serialized_transaction: str) -> bytes:
        """Decode a base64 transaction, sign it and return the raw bytes.

        Raises:
            SigningError: If the payload cannot be decoded or signed
        """
        try:
            raw = base64.b64decode(serialized_transaction, validate=True)
        except (binascii.Error, ValueError) as e:
            raise SigningError(f"Transaction payload is not valid base64: {e}") from e

        try:
            unsigned = VersionedTransaction.from_bytes(raw)
            signed = VersionedTransaction(unsigned.message, [self.keypair])
        except Exception as e:
            raise SigningError(f"Failed to sign transaction: {e}") from e

        return bytes(signed)


class SolanaConnection:
    """Ledger connection over Solana JSON-RPC.

    Attributes:
        client: Underlying solana-py RPC client (created once, reused)
        commitment: Commitment level used for blockhash and confirmation
    """

    def __init__(
        self,
        endpoint: str | None = None,
        *,
        client: Client | None = None,
        commitment: Commitment = Confirmed,
        timeout: float = 30.0,
    ) -> None:
        if client is None:
            if endpoint is None:
                endpoint = cluster_api_url("mainnet-beta")
            client = Client(endpoint, commitment=commitment, timeout=timeout)
        self.client = client
        self.commitment = commitment
        logger.debug(f"Solana connection initialized: endpoint={endpoint}, commitment={commitment}")

    def send_raw_transaction(self, raw: bytes) -> str:
        """Broadcast signed transaction bytes and return the signature."""
        try:
            response = self.client.send_raw_transaction(raw)
        except Exception as e:
            raise BroadcastError(f"Failed to send transaction: {e}") from e

        signature = getattr(response, "value", None)
        if signature is None:
            raise BroadcastError("RPC node returned no signature")
        return str(signature)

    def get_latest_blockhash(self) -> LatestBlockhash:
        """Fetch the latest blockhash and its last valid block height."""
        try:
            response = self.client.get_latest_blockhash(self.commitment)
        except Exception as e:
            raise ConfirmationError(f"Failed to fetch latest blockhash: {e}") from e

        value = response.value
        return LatestBlockhash(
            blockhash=str(value.blockhash),
            last_valid_block_height=int(value.last_valid_block_height),
        )

    def confirm_transaction(self, signature: str, checkpoint: LatestBlockhash) -> bool:
        """Block until ``signature`` is confirmed or its blockhash expires.

        Raises:
            ConfirmationError: If the transaction failed on chain, expired, or
                the RPC call itself failed
        """
        logger.debug(
            f"Confirming {signature} against blockhash {checkpoint.blockhash} "
            f"(valid until height {checkpoint.last_valid_block_height})"
        )
        try:
            response = self.client.confirm_transaction(
                Signature.from_string(signature),
                self.commitment,
                last_valid_block_height=checkpoint.last_valid_block_height,
            )
        except Exception as e:
            raise ConfirmationError(f"Failed to confirm transaction {signature}: {e}") from e

        statuses = getattr(response, "value", None) or []
        status = statuses[0] if statuses else None
        if status is None:
            raise ConfirmationError(f"No status returned for transaction {signature}")
        if status.err is not None:
            raise ConfirmationError(f"Transaction {signature} failed on chain: {status.err}")
        return True


__all__ = [
    "CLUSTER_URLS",
    "KeypairSigner",
    "SolanaConnection",
    "cluster_api_url",
    "parse_secret_key",
]
