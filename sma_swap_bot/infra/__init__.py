"""Infrastructure helpers shared across the bot."""

from sma_swap_bot.infra.retry import RetryExhaustedError, RetryPolicy

__all__ = [
    "RetryPolicy",
    "RetryExhaustedError",
]
