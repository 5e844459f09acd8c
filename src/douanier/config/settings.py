"""
Application settings with environment-based configuration.

Priority (highest to lowest):
1. Environment variables (from .env or system)
2. Environment-specific YAML config file (development.yaml, production.yaml)
3. Default YAML config file (default.yaml)
4. Pydantic defaults
"""

import os
from decimal import Decimal
from pathlib import Path
from typing import List, Optional

import yaml
from dotenv import load_dotenv
from pydantic import Field, field_validator
from pydantic_settings import BaseSettings, SettingsConfigDict


class Settings(BaseSettings):
    """
    Application settings with environment variable support.

    The receiver wallet and Redis password should come from environment
    variables, not from YAML files.
    """

    model_config = SettingsConfigDict(
        env_file=".env",
        env_file_encoding="utf-8",
        case_sensitive=True,
        extra="allow",
    )

    # Application
    APP_NAME: str = "Douanier"
    APP_VERSION: str = "0.1.0"
    ENV: str = Field(default="development", description="Environment name")
    DEBUG: bool = Field(default=False, description="Debug mode")

    # API Server
    API_HOST: str = Field(default="0.0.0.0")
    API_PORT: int = Field(default=3001, ge=1024, le=65535)
    API_RELOAD: bool = Field(default=False)

    # CORS Configuration
    CORS_ORIGINS: List[str] = Field(
        default=["http://localhost:3000"],
        description="Allowed CORS origins",
    )

    # Solana / Blockchain
    SOLANA_RPC_URL: str = Field(
        default="https://api.devnet.solana.com",
        description="Solana RPC URL",
    )
    SOLANA_NETWORK: str = Field(default="devnet")
    SOLANA_COMMITMENT: str = Field(default="confirmed")

    # Wallet verification (receiver REQUIRED at startup)
    RECEIVER_WALLET_ADDRESS: Optional[str] = Field(
        default=None,
        description="Wallet receiving verification payments",
    )
    VERIFICATION_AMOUNT: Decimal = Field(
        default=Decimal("0.00001"),
        gt=0,
        description="Base verification amount in SOL",
    )
    SESSION_EXPIRY_MINUTES: int = Field(
        default=15,
        ge=1,
        description="Lifetime of a pending session",
    )
    AMOUNT_BUCKET_SIZE: int = Field(
        default=1000,
        ge=1,
        description="Number of distinct correlation offsets (lamports)",
    )
    AMOUNT_PRECISION: int = Field(
        default=9,
        ge=0,
        le=9,
        description="Decimal places of expected amounts",
    )
    MATCH_TOLERANCE: Decimal = Field(
        default=Decimal("0.0000000005"),
        gt=0,
        description="Max amount difference for polling matches (SOL)",
    )
    SIGNATURE_TOLERANCE: Decimal = Field(
        default=Decimal("0.0001"),
        gt=0,
        description="Max amount difference for submitted signatures (SOL)",
    )
    LEDGER_SCAN_LIMIT: int = Field(
        default=20,
        ge=1,
        le=1000,
        description="Recent receiver signatures examined per poll",
    )
    SWEEP_INTERVAL_SECONDS: float = Field(
        default=300.0,
        gt=0,
        description="Interval between expired session sweeps",
    )
    VERIFIED_SESSION_TTL_MINUTES: Optional[int] = Field(
        default=None,
        ge=1,
        description="Sweep verified sessions older than this (unset keeps them)",
    )

    # Session store
    SESSION_STORE_BACKEND: str = Field(
        default="memory",
        description="Session store backend (memory or redis)",
    )
    REDIS_HOST: str = Field(default="localhost")
    REDIS_PORT: int = Field(default=6379, ge=1024, le=65535)
    REDIS_DB: int = Field(default=0, ge=0, le=15)
    REDIS_PASSWORD: Optional[str] = Field(default=None)
    REDIS_KEY_PREFIX: str = Field(default="douanier")

    # Resilience - Timeouts
    RPC_TOTAL_TIMEOUT: int = Field(
        default=10,
        ge=1,
        description="Solana RPC total request timeout in seconds",
    )
    RPC_CONNECT_TIMEOUT: int = Field(
        default=3,
        ge=1,
        description="Solana RPC connect timeout in seconds",
    )

    # Resilience - Retry
    RETRY_MAX_ATTEMPTS: int = Field(
        default=3,
        ge=1,
        description="Maximum retry attempts for transient failures",
    )

    # Resilience - Circuit Breaker
    CB_FAILURE_THRESHOLD: int = Field(
        default=5,
        ge=1,
        description="Circuit breaker failure threshold",
    )
    CB_TIMEOUT_SECONDS: int = Field(
        default=60,
        ge=1,
        description="Circuit breaker open state timeout",
    )

    # Logging
    LOG_LEVEL: str = Field(default="INFO")

    # Observability - Metrics
    METRICS_ENABLED: bool = Field(
        default=True,
        description="Expose Prometheus metrics at /metrics",
    )

    @field_validator("LOG_LEVEL")
    @classmethod
    def validate_log_level(cls, v: str) -> str:
        """Validate log level."""
        allowed = ["DEBUG", "INFO", "WARNING", "ERROR", "CRITICAL"]
        v_upper = v.upper()
        if v_upper not in allowed:
            raise ValueError(f"Invalid LOG_LEVEL. Must be one of: {allowed}")
        return v_upper

    @field_validator("SOLANA_NETWORK")
    @classmethod
    def validate_solana_network(cls, v: str) -> str:
        """Validate Solana network."""
        allowed = ["devnet", "testnet", "mainnet-beta"]
        v_lower = v.lower()
        if v_lower not in allowed:
            raise ValueError(f"Invalid SOLANA_NETWORK. Must be one of: {allowed}")
        return v_lower

    @field_validator("SESSION_STORE_BACKEND")
    @classmethod
    def validate_store_backend(cls, v: str) -> str:
        """Validate session store backend."""
        allowed = ["memory", "redis"]
        v_lower = v.lower()
        if v_lower not in allowed:
            raise ValueError(
                f"Invalid SESSION_STORE_BACKEND. Must be one of: {allowed}"
            )
        return v_lower

    @field_validator("RECEIVER_WALLET_ADDRESS")
    @classmethod
    def blank_receiver_is_unset(cls, v: Optional[str]) -> Optional[str]:
        """Treat an empty receiver address as not configured."""
        if v is None:
            return None
        return v.strip() or None


def load_config(
    config_file: Optional[str] = None,
    env_file: Optional[str] = None,
    env: Optional[str] = None,
) -> Settings:
    """
    Load configuration from YAML files and environment variables.

    Priority: ENV vars > environment-specific YAML > default YAML > defaults

    Args:
        config_file: Optional YAML config filename override
        env_file: Optional .env filename (e.g., ".env.development")
        env: Optional environment name override (e.g., "development", "test")

    Returns:
        Settings instance

    Raises:
        ValidationError: If a value fails validation
    """
    current_file = Path(__file__).resolve()
    project_root = current_file.parent.parent.parent.parent
    config_dir = project_root / "config"

    environment = env or os.getenv("ENV", "production")

    env_map = {
        "production": (".env.production", "production.yaml"),
        "development": (".env.development", "development.yaml"),
        "test": (".env.test", "test.yaml"),
    }

    if env_file is None:
        default_env_file, default_config_file = env_map.get(
            environment, (".env.production", "production.yaml")
        )
        env_file = default_env_file
        if config_file is None:
            config_file = default_config_file

    env_file_path = project_root / env_file
    if env_file_path.exists():
        load_dotenv(env_file_path, override=True)

    default_config_path = config_dir / "default.yaml"
    merged_config = {}

    if default_config_path.exists():
        with open(default_config_path, "r") as f:
            loaded = yaml.safe_load(f)
            if loaded:
                merged_config = loaded

    if config_file:
        env_config_path = config_dir / config_file
        if env_config_path.exists():
            with open(env_config_path, "r") as f:
                loaded = yaml.safe_load(f)
                if loaded:
                    merged_config.update(loaded)

    # Init kwargs outrank the environment in pydantic-settings, so drop
    # YAML keys that the environment already sets
    yaml_values = {
        key: value for key, value in merged_config.items() if key not in os.environ
    }

    return Settings(**yaml_values)


_settings: Optional[Settings] = None


def get_settings() -> Settings:
    """Get or initialize global settings singleton."""
    global _settings
    if _settings is None:
        _settings = load_config()
    return _settings


def override_settings(new_settings: Settings) -> None:
    """Override global settings (for testing)."""
    global _settings
    _settings = new_settings


def reset_settings() -> None:
    """Reset settings to force re-initialization (for testing)."""
    global _settings
    _settings = None
