"""Engine utilities exposed for external use."""

from sma_swap_bot.engine.live_trading import (
    Position,
    PositionState,
    SmaTradingEngine,
    TradeRecord,
    TradingSession,
    TradingSessionResult,
)
from sma_swap_bot.engine.signal import PriceWindow, calculate_sma
from sma_swap_bot.engine.swap_executor import SwapExecutor

__all__ = [
    "SmaTradingEngine",
    "TradingSession",
    "TradingSessionResult",
    "TradeRecord",
    "Position",
    "PositionState",
    "PriceWindow",
    "calculate_sma",
    "SwapExecutor",
]
