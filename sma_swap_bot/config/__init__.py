"""Configuration management package for the SMA Swap Bot.

Usage:
    from sma_swap_bot.config import load_config

    cfg = load_config()
    print(cfg.trading.target_mint)
    print(cfg.retry.max_attempts)
"""

from sma_swap_bot.config.models import (
    AppConfig,
    JupiterConfig,
    LoggingConfig,
    NetworkConfig,
    RetryConfig,
    TradingConfig,
)
from sma_swap_bot.config.service import (
    ConfigError,
    get_config_path,
    get_wallet_secret_key,
    load_config,
    reload_config,
    save_config,
)

__all__ = [
    # Models
    "NetworkConfig",
    "JupiterConfig",
    "TradingConfig",
    "RetryConfig",
    "LoggingConfig",
    "AppConfig",
    # Service functions
    "ConfigError",
    "get_config_path",
    "get_wallet_secret_key",
    "load_config",
    "save_config",
    "reload_config",
]
