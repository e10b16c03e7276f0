"""Configuration models for the SMA Swap Bot using Pydantic."""
from __future__ import annotations

from typing import Literal

from pydantic import BaseModel, ConfigDict, Field

USDC_MINT = "EPjFWdd5AufqSSqeM2qN1xzybapC8G4wEGGkZwyTDt1v"
SCF_MINT = "GiG7Hr61RVm4CSUxJmgiCoySFQtdiwxtqf64MsRppump"


class NetworkConfig(BaseModel):
    """Solana RPC connection configuration."""

    model_config = ConfigDict(extra="forbid")

    cluster: Literal["mainnet-beta", "devnet", "testnet"] = Field(
        default="mainnet-beta",
        description="Public Solana cluster used when rpc_url is not set"
    )
    rpc_url: str | None = Field(
        default=None,
        description="Explicit RPC endpoint, overrides cluster"
    )
    rpc_timeout_seconds: float = Field(
        default=30.0,
        gt=0.0,
        description="RPC request timeout in seconds"
    )


class JupiterConfig(BaseModel):
    """Jupiter aggregator endpoints and quote parameters."""

    model_config = ConfigDict(extra="forbid")

    quote_url: str = "https://quote-api.jup.ag/v6/quote"
    swap_url: str = "https://quote-api.jup.ag/v6/swap"

    slippage_bps: int = Field(
        default=50,
        ge=0,
        le=10_000,
        description="Slippage tolerance in basis points"
    )
    timeout_seconds: float = Field(
        default=10.0,
        gt=0.0,
        description="HTTP request timeout in seconds"
    )


class TradingConfig(BaseModel):
    """Traded pair, trade size and signal parameters."""

    model_config = ConfigDict(extra="forbid")

    base_mint: str = Field(default=USDC_MINT, description="Mint held initially")
    target_mint: str = Field(default=SCF_MINT, description="Mint bought on an upward cross")
    base_symbol: str = "USDC"
    target_symbol: str = "SCF"
    base_decimals: int = Field(
        default=6,
        ge=0,
        le=18,
        description="Decimals of the base mint, used for display only"
    )

    trade_amount: int = Field(
        default=200 * 1_000_000,
        gt=0,
        description="Trade size in the base mint's smallest unit"
    )
    sma_window_size: int = Field(
        default=216,
        ge=1,
        description="Number of price samples in the moving average"
    )
    poll_interval_seconds: float = Field(
        default=300.0,
        gt=0.0,
        description="Seconds between price polls"
    )


class RetryConfig(BaseModel):
    """Backoff parameters for swap execution."""

    model_config = ConfigDict(extra="forbid")

    max_attempts: int = Field(default=3, ge=1)
    initial_delay_seconds: float = Field(default=5.0, ge=0.0)
    delay_multiplier: float = Field(default=2.0, ge=1.0)


class LoggingConfig(BaseModel):
    """Console and file logging configuration."""

    model_config = ConfigDict(extra="forbid")

    level: str = Field(default="INFO", description="Root log level")
    log_file: str | None = Field(
        default="bot.log",
        description="Append-only log file, None to log to the console only"
    )


class AppConfig(BaseModel):
    """Root application configuration containing all sub-configs."""

    model_config = ConfigDict(extra="forbid")

    network: NetworkConfig = Field(default_factory=NetworkConfig)
    jupiter: JupiterConfig = Field(default_factory=JupiterConfig)
    trading: TradingConfig = Field(default_factory=TradingConfig)
    retry: RetryConfig = Field(default_factory=RetryConfig)
    logging: LoggingConfig = Field(default_factory=LoggingConfig)
