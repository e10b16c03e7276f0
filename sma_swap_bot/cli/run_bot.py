"""Entry point for running the SMA swap bot.

Usage:
    sma-swap-bot
    python -m sma_swap_bot.cli.run_bot

All settings come from the environment (or a .env file) and the optional
~/.sma_swap_bot/config.json; see sma_swap_bot.config.service for the
variable names. WALLET_SECRET_KEY is required.
"""

from __future__ import annotations

import logging
import sys

from sma_swap_bot.config import AppConfig, get_wallet_secret_key, load_config
from sma_swap_bot.dex.base import SwapError
from sma_swap_bot.dex.jupiter import JupiterClient
from sma_swap_bot.dex.ledger import KeypairSigner, SolanaConnection, cluster_api_url, parse_secret_key
from sma_swap_bot.engine import PriceWindow, SmaTradingEngine, SwapExecutor, TradingSession
from sma_swap_bot.infra.retry import RetryPolicy

logger = logging.getLogger(__name__)

LOG_FORMAT = "%(asctime)s [%(levelname)s] %(name)s: %(message)s"
LOG_DATE_FORMAT = "%Y-%m-%d %H:%M:%S"


def setup_logging(level: str = "INFO", log_file: str | None = "bot.log") -> None:
    """Configure console and append-only file logging.

    Args:
        level: Logging level (DEBUG, INFO, WARNING, ERROR)
        log_file: Path of the log file, or None for console only
    """
    numeric_level = getattr(logging, level.upper(), logging.INFO)

    handlers: list[logging.Handler] = [logging.StreamHandler()]
    if log_file:
        handlers.append(logging.FileHandler(log_file, mode="a", encoding="utf-8"))

    logging.basicConfig(
        level=numeric_level,
        format=LOG_FORMAT,
        datefmt=LOG_DATE_FORMAT,
        handlers=handlers,
        force=True,
    )

    # Set specific levels for noisy libraries
    logging.getLogger("urllib3").setLevel(logging.WARNING)
    logging.getLogger("requests").setLevel(logging.WARNING)
    logging.getLogger("httpx").setLevel(logging.WARNING)
    logging.getLogger("httpcore").setLevel(logging.WARNING)


def build_engine(cfg: AppConfig, secret_key: str) -> SmaTradingEngine:
    """Create the trading session and engine from configuration.

    The RPC connection and HTTP session are created here, once, and
    reused for the lifetime of the process.

    Raises:
        ValueError: If the secret key or cluster is invalid
    """
    signer = KeypairSigner(parse_secret_key(secret_key))

    endpoint = cfg.network.rpc_url or cluster_api_url(cfg.network.cluster)
    ledger = SolanaConnection(endpoint, timeout=cfg.network.rpc_timeout_seconds)

    quotes = JupiterClient(
        quote_url=cfg.jupiter.quote_url,
        swap_url=cfg.jupiter.swap_url,
        slippage_bps=cfg.jupiter.slippage_bps,
        timeout=cfg.jupiter.timeout_seconds,
    )

    session = TradingSession(
        quotes=quotes,
        ledger=ledger,
        signer=signer,
        base_mint=cfg.trading.base_mint,
        target_mint=cfg.trading.target_mint,
        trade_amount=cfg.trading.trade_amount,
        window=PriceWindow(cfg.trading.sma_window_size),
        base_symbol=cfg.trading.base_symbol,
        target_symbol=cfg.trading.target_symbol,
    )

    executor = SwapExecutor(
        quotes,
        ledger,
        signer,
        retry_policy=RetryPolicy(
            max_attempts=cfg.retry.max_attempts,
            initial_delay=cfg.retry.initial_delay_seconds,
            multiplier=cfg.retry.delay_multiplier,
            retry_on=(SwapError,),
            label="execute swap",
        ),
    )

    logger.info(f"Wallet: {signer.public_key}, RPC endpoint: {endpoint}")
    return SmaTradingEngine(session, executor, poll_interval_sec=cfg.trading.poll_interval_seconds)


def main() -> int:
    """Main entry point.

    Returns:
        Exit code (0 for a clean stop, 1 for a fatal error)
    """
    try:
        cfg = load_config()
    except Exception as e:
        setup_logging()
        logger.error(f"Invalid configuration: {e}")
        return 1

    setup_logging(cfg.logging.level, cfg.logging.log_file)

    try:
        engine = build_engine(cfg, get_wallet_secret_key())
    except ValueError as e:
        logger.error(f"Startup failed: {e}")
        return 1

    initial = cfg.trading.trade_amount / 10 ** cfg.trading.base_decimals
    logger.info(f"Bot started with initial investment: {initial} {cfg.trading.base_symbol}")

    try:
        engine.run_forever()
    except Exception as e:
        logger.error(f"An unexpected error occurred: {e}", exc_info=True)
        return 1
    finally:
        engine.session.quotes.close()

    return 0


if __name__ == "__main__":
    sys.exit(main())
