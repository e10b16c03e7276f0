"""Swap execution with exponential backoff.

Each attempt requests a fresh transaction from the swap-construction
service, signs it, broadcasts it and waits for confirmation. Attempts are
driven by a RetryPolicy; a failure at any step restarts the whole sequence.
"""

from __future__ import annotations

import logging

from sma_swap_bot.dex.base import (
    LedgerConnection,
    Quote,
    QuoteProvider,
    SwapError,
    TransactionSigner,
)
from sma_swap_bot.infra.retry import RetryExhaustedError, RetryPolicy

logger = logging.getLogger(__name__)

MAX_RETRIES = 3
INITIAL_DELAY = 5.0
DELAY_MULTIPLIER = 2.0


class SwapExecutor:
    """Executes swaps against the DEX and confirms them on the ledger.

    The executor holds no state between calls; attempt counters and the
    current backoff delay live inside the retry policy for a single call.

    Attributes:
        quotes: Swap-construction service
        ledger: Ledger connection used to broadcast and confirm
        signer: Wallet signer
        retry_policy: Backoff policy wrapping each full attempt
    """

    def __init__(
        self,
        quotes: QuoteProvider,
        ledger: LedgerConnection,
        signer: TransactionSigner,
        retry_policy: RetryPolicy | None = None,
    ) -> None:
        self.quotes = quotes
        self.ledger = ledger
        self.signer = signer
        self.retry_policy = retry_policy or RetryPolicy(
            max_attempts=MAX_RETRIES,
            initial_delay=INITIAL_DELAY,
            multiplier=DELAY_MULTIPLIER,
            retry_on=(SwapError,),
            label="execute swap",
        )

    def execute_swap(
        self,
        quote: Quote,
        input_mint: str,
        output_mint: str,
        amount: int,
    ) -> str | None:
        """Execute a swap for a previously fetched quote.

        Args:
            quote: Raw quote payload
            input_mint: Mint being sold
            output_mint: Mint being bought
            amount: Amount of ``input_mint`` in its smallest unit

        Returns:
            Transaction signature, or None if every attempt failed
        """
        logger.info(f"Executing swap: {amount} {input_mint} -> {output_mint}")

        try:
            signature = self.retry_policy.call(self._attempt_swap, quote)
        except RetryExhaustedError as e:
            logger.error(f"Max retries reached, swap failed: {e.last_exception}")
            return None

        logger.info(f"Swap executed with signature: {signature}")
        return signature

    def _attempt_swap(self, quote: Quote) -> str:
        """Run one full construct-sign-broadcast-confirm sequence.

        Raises:
            SwapError: If any step fails
        """
        serialized = self.quotes.get_swap_transaction(quote, self.signer.public_key)
        logger.debug("Swap response received")

        raw = self.signer.sign(serialized)
        logger.debug("Transaction signed")

        signature = self.ledger.send_raw_transaction(raw)
        logger.info(f"Transaction sent, signature: {signature}")

        checkpoint = self.ledger.get_latest_blockhash()
        self.ledger.confirm_transaction(signature, checkpoint)
        logger.info(f"Transaction confirmed: {signature}")

        return signature


__all__ = [
    "SwapExecutor",
    "MAX_RETRIES",
    "INITIAL_DELAY",
    "DELAY_MULTIPLIER",
]
