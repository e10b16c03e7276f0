"""Pytest configuration and fakes shared across the suite."""

from __future__ import annotations

import pytest

from sma_swap_bot.dex.base import (
    ConfirmationError,
    LatestBlockhash,
    SigningError,
    SwapBuildError,
    SwapError,
)
from sma_swap_bot.engine.live_trading import SmaTradingEngine, TradingSession
from sma_swap_bot.engine.signal import PriceWindow
from sma_swap_bot.engine.swap_executor import SwapExecutor
from sma_swap_bot.infra.retry import RetryPolicy

BASE_MINT = "BASE_MINT"
TARGET_MINT = "TARGET_MINT"
TRADE_AMOUNT = 200_000_000
MOCK_SIGNATURE = "MOCK_TX_SIGNATURE"


# ============================================================================
# Dummy collaborators for testing
# ============================================================================


class FakeQuoteProvider:
    """Quote provider returning scripted prices without network calls."""

    def __init__(self, prices: list[float | None] | None = None) -> None:
        self.prices: list[float | None] = list(prices or [])
        self.quote_payload: dict = {"inAmount": "1000", "outAmount": "2000"}
        self.quote_available = True
        self.swap_failures = 0
        self.price_calls: list[tuple[str, str, int]] = []
        self.quote_calls: list[tuple[str, str, int]] = []
        self.swap_calls: list[tuple[dict, str]] = []
        self.closed = False

    def get_price(self, input_mint: str, output_mint: str, amount: int) -> float | None:
        self.price_calls.append((input_mint, output_mint, amount))
        if not self.prices:
            return None
        return self.prices.pop(0)

    def get_quote(self, input_mint: str, output_mint: str, amount: int) -> dict | None:
        self.quote_calls.append((input_mint, output_mint, amount))
        if not self.quote_available:
            return None
        return dict(self.quote_payload)

    def get_swap_transaction(self, quote: dict, user_public_key: str) -> str:
        self.swap_calls.append((quote, user_public_key))
        if self.swap_failures > 0:
            self.swap_failures -= 1
            raise SwapBuildError(f"Swap request failed (call {len(self.swap_calls)})")
        return f"tx-{len(self.swap_calls)}"

    def close(self) -> None:
        self.closed = True


class FakeLedger:
    """Ledger connection recording broadcasts and confirmations."""

    def __init__(self) -> None:
        self.sent: list[bytes] = []
        self.blockhash_calls = 0
        self.confirm_calls: list[tuple[str, LatestBlockhash]] = []
        self.confirm_failures = 0

    def send_raw_transaction(self, raw: bytes) -> str:
        self.sent.append(raw)
        return MOCK_SIGNATURE

    def get_latest_blockhash(self) -> LatestBlockhash:
        self.blockhash_calls += 1
        return LatestBlockhash(blockhash="MOCK_BLOCKHASH", last_valid_block_height=100)

    def confirm_transaction(self, signature: str, checkpoint: LatestBlockhash) -> bool:
        self.confirm_calls.append((signature, checkpoint))
        if self.confirm_failures > 0:
            self.confirm_failures -= 1
            raise ConfirmationError("block height exceeded")
        return True


class FakeSigner:
    """Signer that tags payloads instead of signing them."""

    public_key = "MOCK_PUBLIC_KEY"

    def __init__(self) -> None:
        self.sign_failures = 0
        self.signed: list[str] = []

    def sign(self, serialized_transaction: str) -> bytes:
        self.signed.append(serialized_transaction)
        if self.sign_failures > 0:
            self.sign_failures -= 1
            raise SigningError("bad transaction payload")
        return f"signed:{serialized_transaction}".encode()


# ============================================================================
# Fixtures
# ============================================================================


@pytest.fixture
def quotes() -> FakeQuoteProvider:
    return FakeQuoteProvider()


@pytest.fixture
def ledger() -> FakeLedger:
    return FakeLedger()


@pytest.fixture
def signer() -> FakeSigner:
    return FakeSigner()


@pytest.fixture
def sleeps() -> list[float]:
    """Delays requested by the retry policy, in order."""
    return []


@pytest.fixture
def retry_policy(sleeps: list[float]) -> RetryPolicy:
    return RetryPolicy(
        max_attempts=3,
        initial_delay=5.0,
        multiplier=2.0,
        retry_on=(SwapError,),
        sleep=sleeps.append,
        label="execute swap",
    )


@pytest.fixture
def executor(quotes, ledger, signer, retry_policy) -> SwapExecutor:
    return SwapExecutor(quotes, ledger, signer, retry_policy=retry_policy)


@pytest.fixture
def session(quotes, ledger, signer) -> TradingSession:
    return TradingSession(
        quotes=quotes,
        ledger=ledger,
        signer=signer,
        base_mint=BASE_MINT,
        target_mint=TARGET_MINT,
        trade_amount=TRADE_AMOUNT,
        window=PriceWindow(5),
        base_symbol="USDC",
        target_symbol="SCF",
    )


@pytest.fixture
def engine(session, executor) -> SmaTradingEngine:
    return SmaTradingEngine(session, executor, poll_interval_sec=0)
