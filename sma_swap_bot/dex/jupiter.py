"""Jupiter aggregator client for quotes and swap transactions.

Quote lookups never raise: network failures and malformed responses are
logged and reported as ``None`` so the trading loop can skip the cycle.
Swap construction raises ``SwapBuildError`` because its caller retries.
"""

from __future__ import annotations

import logging
import math
from typing import Any

import requests

from sma_swap_bot.dex.base import Quote, SwapBuildError

logger = logging.getLogger(__name__)

JUPITER_QUOTE_API = "https://quote-api.jup.ag/v6/quote"
JUPITER_SWAP_API = "https://quote-api.jup.ag/v6/swap"
DEFAULT_SLIPPAGE_BPS = 50

REQUIRED_QUOTE_FIELDS = ("inAmount", "outAmount")


def parse_amount(value: Any) -> float | None:
    """Parse a Jupiter amount (number or numeric string), None unless finite."""
    if value is None or isinstance(value, bool):
        return None
    try:
        amount = float(value)
    except (TypeError, ValueError):
        return None
    if not math.isfinite(amount):
        return None
    return amount


def price_from_quote(quote: Quote) -> float | None:
    """Return ``outAmount / inAmount`` for a quote payload, or None if malformed."""
    in_amount = parse_amount(quote.get("inAmount"))
    out_amount = parse_amount(quote.get("outAmount"))
    if in_amount is None or out_amount is None or in_amount <= 0:
        return None
    return out_amount / in_amount


class JupiterClient:
    """Client for the Jupiter v6 quote and swap endpoints.

    Attributes:
        quote_url: Quote endpoint URL
        swap_url: Swap-construction endpoint URL
        slippage_bps: Slippage tolerance in basis points sent with every quote
        timeout: Request timeout in seconds
        session: Shared requests session (created once, reused for all calls)
    """

    def __init__(
        self,
        quote_url: str = JUPITER_QUOTE_API,
        swap_url: str = JUPITER_SWAP_API,
        slippage_bps: int = DEFAULT_SLIPPAGE_BPS,
        timeout: float = 10.0,
        session: requests.Session | None = None,
    ) -> None:
        self.quote_url = quote_url
        self.swap_url = swap_url
        self.slippage_bps = slippage_bps
        self.timeout = timeout
        self.session = session or requests.Session()

    def get_quote(self, input_mint: str, output_mint: str, amount: int) -> Quote | None:
        """Fetch a quote for swapping ``amount`` of ``input_mint`` into ``output_mint``.

        Args:
            input_mint: Input token mint address
            output_mint: Output token mint address
            amount: Amount in the input token's smallest unit

        Returns:
            Raw quote payload, or None on any failure
        """
        params = {
            "inputMint": input_mint,
            "outputMint": output_mint,
            "amount": int(amount),
            "slippageBps": self.slippage_bps,
        }

        try:
            response = self.session.get(self.quote_url, params=params, timeout=self.timeout)
            response.raise_for_status()
            data = response.json()
        except requests.RequestException as e:
            logger.error(f"Error fetching quote: {type(e).__name__}: {e}")
            return None
        except ValueError as e:
            logger.error(f"Error fetching quote: invalid JSON response: {e}")
            return None

        if not isinstance(data, dict):
            logger.error(f"Error fetching quote: unexpected response type {type(data).__name__}")
            return None

        missing = [field for field in REQUIRED_QUOTE_FIELDS if field not in data]
        if missing:
            logger.error(f"Error fetching quote: response missing {', '.join(missing)}")
            return None

        if price_from_quote(data) is None:
            logger.error(
                f"Error fetching quote: invalid amounts "
                f"inAmount={data.get('inAmount')!r} outAmount={data.get('outAmount')!r}"
            )
            return None

        logger.debug(f"Quote received: in={data['inAmount']} out={data['outAmount']}")
        return data

    def get_price(self, input_mint: str, output_mint: str, amount: int) -> float | None:
        """Return the unit price ``outAmount / inAmount`` for the pair, or None."""
        quote = self.get_quote(input_mint, output_mint, amount)
        if quote is None:
            return None
        return price_from_quote(quote)

    def get_swap_transaction(self, quote: Quote, user_public_key: str) -> str:
        """Request a serialized swap transaction for a previously fetched quote.

        Args:
            quote: Raw quote payload from :meth:`get_quote`
            user_public_key: Base58 public key of the signing wallet

        Returns:
            Base64-encoded unsigned transaction

        Raises:
            SwapBuildError: If the request fails or the response has no transaction
        """
        payload = {
            "quoteResponse": quote,
            "userPublicKey": user_public_key,
        }

        try:
            response = self.session.post(self.swap_url, json=payload, timeout=self.timeout)
            response.raise_for_status()
            data = response.json()
        except requests.RequestException as e:
            raise SwapBuildError(f"Swap request failed: {e}") from e
        except ValueError as e:
            raise SwapBuildError(f"Swap response is not valid JSON: {e}") from e

        serialized = data.get("swapTransaction") if isinstance(data, dict) else None
        if not serialized or not isinstance(serialized, str):
            raise SwapBuildError("Swap response missing swapTransaction")

        logger.debug("Swap transaction received")
        return serialized

    def close(self) -> None:
        """Close the underlying HTTP session."""
        self.session.close()


__all__ = [
    "JupiterClient",
    "JUPITER_QUOTE_API",
    "JUPITER_SWAP_API",
    "DEFAULT_SLIPPAGE_BPS",
    "parse_amount",
    "price_from_quote",
]
