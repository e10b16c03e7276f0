"""Live trading engine for the SMA crossover strategy.

This module provides the polling loop and position state machine: each cycle
fetches a price, feeds the moving-average window, and swaps between the base
and target token when the price crosses the average.
"""

from __future__ import annotations

import logging
import math
import threading
from dataclasses import dataclass, field
from datetime import datetime, timezone
from enum import Enum
from typing import Literal

from sma_swap_bot.dex.base import LedgerConnection, QuoteProvider, TransactionSigner
from sma_swap_bot.dex.jupiter import parse_amount
from sma_swap_bot.engine.signal import PriceWindow
from sma_swap_bot.engine.swap_executor import SwapExecutor

logger = logging.getLogger(__name__)

DEFAULT_POLL_INTERVAL_SEC = 5 * 60
DEFAULT_WINDOW_SIZE = 216  # 18 hours of 5-minute samples


class Position(str, Enum):
    """Which side of the pair the wallet currently holds."""

    HOLDING_BASE = "holding_base"
    HOLDING_TARGET = "holding_target"


@dataclass
class PositionState:
    """Current holding plus the price of the last executed transition.

    Attributes:
        holding: Side currently held
        last_trade_price: Price at which the last transition happened, or None
    """

    holding: Position = Position.HOLDING_BASE
    last_trade_price: float | None = None


@dataclass(slots=True)
class TradeRecord:
    """In-memory record of an executed transition."""

    timestamp: datetime
    side: Literal["buy", "sell"]
    price: float
    sma: float
    amount: int
    signature: str


@dataclass
class TradingSessionResult:
    """Counters and trade history for the current process.

    Attributes:
        cycles: Number of cycles started
        skipped_cycles: Cycles skipped because no price was available
        trades: Executed transitions
        failed_swaps: Transitions attempted but not executed
        errors: Unexpected error messages
        start_time: Session start time
        end_time: Session end time (None while running)
    """

    cycles: int = 0
    skipped_cycles: int = 0
    trades: list[TradeRecord] = field(default_factory=list)
    failed_swaps: int = 0
    errors: list[str] = field(default_factory=list)
    start_time: datetime | None = None
    end_time: datetime | None = None


@dataclass
class TradingSession:
    """Everything one trading process owns, passed explicitly to the engine.

    The ledger connection, HTTP client and signer are created once at startup
    and reused for every cycle.

    Attributes:
        quotes: Quote and swap-construction service
        ledger: Ledger connection
        signer: Wallet signer (read-only after startup)
        base_mint: Mint held initially (e.g. USDC)
        target_mint: Mint bought when the price rises above the SMA
        trade_amount: Trade size in the base mint's smallest unit
        window: Rolling price window
        position: Current position state
        base_symbol: Display name of the base token
        target_symbol: Display name of the target token
    """

    quotes: QuoteProvider
    ledger: LedgerConnection
    signer: TransactionSigner
    base_mint: str
    target_mint: str
    trade_amount: int
    window: PriceWindow = field(default_factory=lambda: PriceWindow(DEFAULT_WINDOW_SIZE))
    position: PositionState = field(default_factory=PositionState)
    base_symbol: str = "BASE"
    target_symbol: str = "TARGET"


class SmaTradingEngine:
    """Polling loop and position state machine.

    Cycles are strictly sequential: a cycle's price fetch and any swap
    complete before the inter-cycle wait starts.

    Attributes:
        session: Trading session context
        executor: Swap executor used for transitions
        poll_interval_sec: Seconds to wait between cycles
        result: Session counters and trade history
    """

    def __init__(
        self,
        session: TradingSession,
        executor: SwapExecutor | None = None,
        poll_interval_sec: float = DEFAULT_POLL_INTERVAL_SEC,
    ) -> None:
        self.session = session
        self.executor = executor or SwapExecutor(session.quotes, session.ledger, session.signer)
        self.poll_interval_sec = poll_interval_sec

        self.is_running = False
        self.result = TradingSessionResult()
        self._stop_event = threading.Event()

        logger.info(
            f"SmaTradingEngine initialized: pair={session.base_symbol}/{session.target_symbol}, "
            f"window={session.window.max_size}, poll_interval={poll_interval_sec}s"
        )

    def run_once(self) -> bool:
        """Execute one cycle: poll the price, update the window, maybe trade.

        Returns:
            True if a price was observed, False if the cycle was skipped
        """
        session = self.session
        self.result.cycles += 1

        price = session.quotes.get_price(session.base_mint, session.target_mint, session.trade_amount)
        if price is None:
            logger.warning("Failed to fetch price")
            self.result.skipped_cycles += 1
            return False

        session.window.append(price)
        current_sma = session.window.sma()

        logger.info(f"Current Price: {price}, SMA: {current_sma}")

        self._evaluate(price, current_sma)
        return True

    def run_forever(self) -> TradingSessionResult:
        """Run cycles until stop() is called.

        The engine is single-use: a stop() issued before this call ends the
        loop before its first cycle.

        Exceptions other than KeyboardInterrupt propagate to the caller
        after the session is marked as stopped.

        Returns:
            TradingSessionResult with session statistics
        """
        logger.info("Starting trading loop")
        self.is_running = True
        self.result.start_time = datetime.now(timezone.utc)

        try:
            while self.is_running and not self._stop_event.is_set():
                try:
                    self.run_once()
                except Exception as e:
                    self.result.errors.append(f"{type(e).__name__}: {e}")
                    raise
                # Skipped cycles wait too
                if self._stop_event.wait(self.poll_interval_sec):
                    break

        except KeyboardInterrupt:
            logger.info("Trading loop interrupted by user")

        finally:
            self.stop()

        return self.result

    def stop(self) -> None:
        """Stop the loop after the in-flight cycle and wake any pending wait."""
        self._stop_event.set()
        if not self.is_running:
            return

        logger.info("Stopping trading loop")
        self.is_running = False
        self.result.end_time = datetime.now(timezone.utc)

        duration = (
            (self.result.end_time - self.result.start_time).total_seconds()
            if self.result.start_time and self.result.end_time
            else 0
        )

        logger.info(
            f"Trading session ended: "
            f"duration={duration:.1f}s, "
            f"cycles={self.result.cycles}, "
            f"skipped={self.result.skipped_cycles}, "
            f"trades={len(self.result.trades)}, "
            f"failed_swaps={self.result.failed_swaps}"
        )

    def _evaluate(self, price: float, current_sma: float) -> None:
        """Apply the transition rules for the current holding."""
        position = self.session.position

        if math.isnan(current_sma):
            return

        if position.last_trade_price is not None and price == position.last_trade_price:
            logger.debug(f"Price {price} equals last trade price, no action")
            return

        if position.holding is Position.HOLDING_BASE and price > current_sma:
            self._buy(price, current_sma)
        elif position.holding is Position.HOLDING_TARGET and price < current_sma:
            self._sell(price, current_sma)

    def _buy(self, price: float, current_sma: float) -> None:
        session = self.session
        logger.info(f"Buying {session.target_symbol}")

        quote = session.quotes.get_quote(session.base_mint, session.target_mint, session.trade_amount)
        if quote is None:
            logger.error(f"Failed to buy {session.target_symbol}: no quote available")
            self.result.failed_swaps += 1
            return

        signature = self.executor.execute_swap(
            quote, session.base_mint, session.target_mint, session.trade_amount
        )
        if not signature:
            logger.error(f"Failed to buy {session.target_symbol}")
            self.result.failed_swaps += 1
            return

        self._record_transition(Position.HOLDING_TARGET, "buy", price, current_sma, session.trade_amount, signature)
        logger.info(f"Successfully bought {session.target_symbol}")

    def _sell(self, price: float, current_sma: float) -> None:
        session = self.session
        logger.info(f"Selling {session.target_symbol}")

        # Sized from the quote, not from the wallet's actual target balance
        quote = session.quotes.get_quote(session.target_mint, session.base_mint, session.trade_amount)
        if quote is None:
            logger.error(f"Failed to sell {session.target_symbol}: no quote available")
            self.result.failed_swaps += 1
            return

        out_amount = parse_amount(quote.get("outAmount"))
        if out_amount is None:
            logger.error(
                f"Failed to sell {session.target_symbol}: invalid quote outAmount {quote.get('outAmount')!r}"
            )
            self.result.failed_swaps += 1
            return

        amount = int(out_amount)
        signature = self.executor.execute_swap(quote, session.target_mint, session.base_mint, amount)
        if not signature:
            logger.error(f"Failed to sell {session.target_symbol}")
            self.result.failed_swaps += 1
            return

        self._record_transition(Position.HOLDING_BASE, "sell", price, current_sma, amount, signature)
        logger.info(f"Successfully sold {session.target_symbol}")

    def _record_transition(
        self,
        holding: Position,
        side: Literal["buy", "sell"],
        price: float,
        current_sma: float,
        amount: int,
        signature: str,
    ) -> None:
        position = self.session.position
        position.holding = holding
        position.last_trade_price = price
        self.result.trades.append(
            TradeRecord(
                timestamp=datetime.now(timezone.utc),
                side=side,
                price=price,
                sma=current_sma,
                amount=amount,
                signature=signature,
            )
        )


__all__ = [
    "Position",
    "PositionState",
    "TradeRecord",
    "TradingSession",
    "TradingSessionResult",
    "SmaTradingEngine",
    "DEFAULT_POLL_INTERVAL_SEC",
    "DEFAULT_WINDOW_SIZE",
]
