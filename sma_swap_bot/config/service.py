"""Configuration service for loading and saving AppConfig."""
from __future__ import annotations

import json
import logging
import os
from pathlib import Path
from typing import Any, Dict

from dotenv import load_dotenv

from sma_swap_bot.config.models import AppConfig

# Global cache for config (loaded once per process)
_APP_CONFIG: AppConfig | None = None

logger = logging.getLogger(__name__)

WALLET_SECRET_KEY_ENV = "WALLET_SECRET_KEY"

# Environment variable -> (section, field)
ENV_OVERRIDES: dict[str, tuple[str, str]] = {
    "SOLANA_CLUSTER": ("network", "cluster"),
    "SOLANA_RPC_URL": ("network", "rpc_url"),
    "SOLANA_RPC_TIMEOUT_SECONDS": ("network", "rpc_timeout_seconds"),
    "JUPITER_QUOTE_URL": ("jupiter", "quote_url"),
    "JUPITER_SWAP_URL": ("jupiter", "swap_url"),
    "SLIPPAGE_BPS": ("jupiter", "slippage_bps"),
    "HTTP_TIMEOUT_SECONDS": ("jupiter", "timeout_seconds"),
    "BASE_MINT": ("trading", "base_mint"),
    "TARGET_MINT": ("trading", "target_mint"),
    "BASE_SYMBOL": ("trading", "base_symbol"),
    "TARGET_SYMBOL": ("trading", "target_symbol"),
    "BASE_DECIMALS": ("trading", "base_decimals"),
    "TRADE_AMOUNT": ("trading", "trade_amount"),
    "SMA_WINDOW_SIZE": ("trading", "sma_window_size"),
    "POLL_INTERVAL_SECONDS": ("trading", "poll_interval_seconds"),
    "SWAP_MAX_ATTEMPTS": ("retry", "max_attempts"),
    "SWAP_INITIAL_DELAY_SECONDS": ("retry", "initial_delay_seconds"),
    "SWAP_DELAY_MULTIPLIER": ("retry", "delay_multiplier"),
    "LOG_LEVEL": ("logging", "level"),
    "LOG_FILE": ("logging", "log_file"),
}


class ConfigError(ValueError):
    """Raised when required configuration is missing or invalid."""


def get_config_path() -> Path:
    """Get path to the configuration file.

    Returns:
        Path to ~/.sma_swap_bot/config.json (may not exist)
    """
    return Path.home() / ".sma_swap_bot" / "config.json"


def _apply_env_overrides(data: Dict[str, Any]) -> Dict[str, Any]:
    """Overlay environment variables onto a raw config dict.

    Empty values are ignored, except LOG_FILE="" which disables file logging.
    """
    merged: Dict[str, Any] = {
        section: dict(values) if isinstance(values, dict) else values
        for section, values in data.items()
    }

    for env_name, (section, field_name) in ENV_OVERRIDES.items():
        value = os.getenv(env_name)
        if value is None:
            continue
        if value == "":
            if env_name != "LOG_FILE":
                continue
            merged.setdefault(section, {})[field_name] = None
            continue
        merged.setdefault(section, {})[field_name] = value

    return merged


def load_config() -> AppConfig:
    """Load application configuration.

    Loading priority (highest first):
    1. Environment variables (including a local .env file)
    2. config.json, if it exists
    3. Model defaults

    The result is cached per process.

    Returns:
        AppConfig instance

    Raises:
        ConfigError: If config file is invalid JSON
        pydantic.ValidationError: If config data doesn't match schema
    """
    global _APP_CONFIG

    # Return cached config if available
    if _APP_CONFIG is not None:
        return _APP_CONFIG

    load_dotenv()

    data: Dict[str, Any] = {}
    config_path = get_config_path()

    if config_path.exists():
        try:
            logger.info("Loading configuration from %s", config_path)
            with open(config_path, encoding="utf-8") as f:
                data = json.load(f)
        except json.JSONDecodeError as exc:
            logger.error("Failed to parse config file %s: %s", config_path, exc)
            raise ConfigError(f"Invalid configuration file: {exc}") from exc

    _APP_CONFIG = AppConfig.model_validate(_apply_env_overrides(data))
    return _APP_CONFIG


def save_config(app_config: AppConfig) -> None:
    """Save configuration to file.

    The wallet secret key is not part of AppConfig and is never written.

    Args:
        app_config: AppConfig instance to save
    """
    global _APP_CONFIG

    config_path = get_config_path()
    config_path.parent.mkdir(parents=True, exist_ok=True)

    data = app_config.model_dump(mode="json")

    with open(config_path, "w", encoding="utf-8") as f:
        json.dump(data, f, indent=2, ensure_ascii=False)

    _APP_CONFIG = app_config

    logger.info("Configuration saved to %s", config_path)


def reload_config() -> AppConfig:
    """Clear the cache and load configuration again."""
    global _APP_CONFIG

    _APP_CONFIG = None
    return load_config()


def get_wallet_secret_key() -> str:
    """Read the wallet secret key from the environment.

    Returns:
        Comma-separated integer byte array

    Raises:
        ConfigError: If WALLET_SECRET_KEY is not set
    """
    load_dotenv()
    value = os.getenv(WALLET_SECRET_KEY_ENV, "").strip()
    if not value:
        raise ConfigError(
            f"{WALLET_SECRET_KEY_ENV} is not set. "
            "Provide the wallet secret key as a comma-separated byte array in the environment or .env"
        )
    return value
