"""Configuration for tokenmint.

Configuration is stored at ~/.tokenmint/config.toml and organized into sections.

Configuration loading priority:
1. Environment variables (highest)
2. Config file (~/.tokenmint/config.toml, or $TOKENMINT_CONFIG)
3. Defaults (lowest)

Sections:
    [network]  - Cluster and RPC endpoint
    [fees]     - Compute unit price and retry settings
    [token]    - Token defaults and output file names
    [ui]       - Logging

Example:
    from tokenmint.config import get_config

    config = get_config()
    print(config.fees.max_retries)
"""

from __future__ import annotations

import logging
import os
import tomllib
from dataclasses import dataclass, field, fields
from datetime import datetime
from pathlib import Path
from typing import Any

import tomli_w

from .retry.executor import DEFAULT_INITIAL_PRICE, DEFAULT_MAX_RETRIES, DEFAULT_PRICE_STEP
from .rpc import DEFAULT_RPC_URL
from .spl_commands import TOKEN_2022_PROGRAM_ID

logger = logging.getLogger(__name__)

# Default config location
DEFAULT_CONFIG_DIR = Path.home() / ".tokenmint"
DEFAULT_CONFIG_FILE = "config.toml"

# Singleton instance
_config: TokenMintConfig | None = None


# =============================================================================
# Configuration Sections
# =============================================================================


@dataclass
class NetworkConfig:
    """Cluster settings.

    Attributes:
        cluster: Value passed to ``solana config set --url``.
        rpc_url: JSON-RPC endpoint used for balance checks.
        commitment: Commitment level for RPC reads.
    """

    cluster: str = "mainnet-beta"
    rpc_url: str = DEFAULT_RPC_URL
    commitment: str = "confirmed"

    @classmethod
    def from_dict(cls, data: dict[str, Any]) -> NetworkConfig:
        """Create from dictionary."""
        return cls(
            cluster=data.get("cluster", "mainnet-beta"),
            rpc_url=data.get("rpc_url", DEFAULT_RPC_URL),
            commitment=data.get("commitment", "confirmed"),
        )

    def to_dict(self) -> dict[str, Any]:
        """Convert to dictionary."""
        return {
            "cluster": self.cluster,
            "rpc_url": self.rpc_url,
            "commitment": self.commitment,
        }


@dataclass
class FeeConfig:
    """Compute unit price settings.

    Attributes:
        initial_compute_price: Price used on the first attempt.
        compute_price_step: Increment applied when the operator answers "yes".
        max_retries: Retries allowed per command after transient failures.
    """

    initial_compute_price: int = DEFAULT_INITIAL_PRICE
    compute_price_step: int = DEFAULT_PRICE_STEP
    max_retries: int = DEFAULT_MAX_RETRIES

    @classmethod
    def from_dict(cls, data: dict[str, Any]) -> FeeConfig:
        """Create from dictionary."""
        return cls(
            initial_compute_price=int(data.get("initial_compute_price", DEFAULT_INITIAL_PRICE)),
            compute_price_step=int(data.get("compute_price_step", DEFAULT_PRICE_STEP)),
            max_retries=int(data.get("max_retries", DEFAULT_MAX_RETRIES)),
        )

    def to_dict(self) -> dict[str, Any]:
        """Convert to dictionary."""
        return {
            "initial_compute_price": self.initial_compute_price,
            "compute_price_step": self.compute_price_step,
            "max_retries": self.max_retries,
        }


@dataclass
class TokenConfig:
    """Token defaults and output files.

    Attributes:
        program_id: Token program (Token-2022 by default).
        default_decimals: Suggested decimals.
        default_supply: Suggested supply to mint.
        project_dir: Suggested project directory.
        wallet_file: CSV of wallet records.
        token_file: CSV of token records.
        metadata_template: JSON metadata template file.
    """

    program_id: str = TOKEN_2022_PROGRAM_ID
    default_decimals: int = 9
    default_supply: str = "1000000000"
    project_dir: str = "new-token"
    wallet_file: str = "wallet-info.csv"
    token_file: str = "token-info.csv"
    metadata_template: str = "metadata-template.json"

    @classmethod
    def from_dict(cls, data: dict[str, Any]) -> TokenConfig:
        """Create from dictionary."""
        defaults = cls()
        return cls(
            program_id=data.get("program_id", defaults.program_id),
            default_decimals=int(data.get("default_decimals", defaults.default_decimals)),
            default_supply=str(data.get("default_supply", defaults.default_supply)),
            project_dir=data.get("project_dir", defaults.project_dir),
            wallet_file=data.get("wallet_file", defaults.wallet_file),
            token_file=data.get("token_file", defaults.token_file),
            metadata_template=data.get("metadata_template", defaults.metadata_template),
        )

    def to_dict(self) -> dict[str, Any]:
        """Convert to dictionary."""
        return {f.name: getattr(self, f.name) for f in fields(self)}


@dataclass
class UIConfig:
    """Output settings.

    Attributes:
        log_level: Logging level (debug, info, warning, error).
    """

    log_level: str = "info"

    @classmethod
    def from_dict(cls, data: dict[str, Any]) -> UIConfig:
        """Create from dictionary."""
        return cls(log_level=data.get("log_level", "info"))

    def to_dict(self) -> dict[str, Any]:
        """Convert to dictionary."""
        return {"log_level": self.log_level}


# =============================================================================
# Main Configuration Class
# =============================================================================


@dataclass
class TokenMintConfig:
    """Main tokenmint configuration container.

    Use get_config() to get the singleton instance.
    """

    network: NetworkConfig = field(default_factory=NetworkConfig)
    fees: FeeConfig = field(default_factory=FeeConfig)
    token: TokenConfig = field(default_factory=TokenConfig)
    ui: UIConfig = field(default_factory=UIConfig)

    # Metadata
    config_version: str = "1.0"
    config_path: Path | None = None
    last_modified: datetime | None = None

    @classmethod
    def from_dict(cls, data: dict[str, Any]) -> TokenMintConfig:
        """Create configuration from dictionary."""
        return cls(
            network=NetworkConfig.from_dict(data.get("network", {})),
            fees=FeeConfig.from_dict(data.get("fees", {})),
            token=TokenConfig.from_dict(data.get("token", {})),
            ui=UIConfig.from_dict(data.get("ui", {})),
            config_version=data.get("config", {}).get("version", "1.0"),
        )

    def to_dict(self) -> dict[str, Any]:
        """Convert configuration to dictionary."""
        return {
            "config": {
                "version": self.config_version,
            },
            "network": self.network.to_dict(),
            "fees": self.fees.to_dict(),
            "token": self.token.to_dict(),
            "ui": self.ui.to_dict(),
        }

    def apply_env_overrides(self) -> None:
        """Apply environment variable overrides to configuration."""
        if cluster := os.environ.get("TOKENMINT_CLUSTER"):
            self.network.cluster = cluster
        if rpc_url := os.environ.get("TOKENMINT_RPC_URL"):
            self.network.rpc_url = rpc_url

        for env_name, attr in (
            ("TOKENMINT_INITIAL_PRICE", "initial_compute_price"),
            ("TOKENMINT_MAX_RETRIES", "max_retries"),
        ):
            raw = os.environ.get(env_name)
            if not raw:
                continue
            try:
                setattr(self.fees, attr, int(raw))
            except ValueError:
                logger.warning(f"Ignoring {env_name}={raw!r}: not an integer")

        if log_level := os.environ.get("LOG_LEVEL"):
            self.ui.log_level = log_level

    def get(self, key: str, default: Any = None) -> Any:
        """Get a configuration value by dotted key path.

        Example:
            config.get('fees.max_retries')  # Returns 5
        """
        parts = key.split(".")
        obj: Any = self

        for part in parts:
            if hasattr(obj, part):
                obj = getattr(obj, part)
            else:
                return default

        return obj

    def set(self, key: str, value: Any) -> bool:
        """Set a configuration value by dotted key path.

        Returns:
            True if set successfully, False otherwise.
        """
        parts = key.split(".")
        if len(parts) != 2:
            return False

        section_name, field_name = parts
        if section_name not in SECTIONS:
            return False

        section = getattr(self, section_name)
        if not hasattr(section, field_name):
            return False

        setattr(section, field_name, value)
        return True


SECTIONS: dict[str, type] = {
    "network": NetworkConfig,
    "fees": FeeConfig,
    "token": TokenConfig,
    "ui": UIConfig,
}


# =============================================================================
# Configuration Loading/Saving
# =============================================================================


def get_config_path() -> Path:
    """Get the path to the configuration file."""
    if custom_path := os.environ.get("TOKENMINT_CONFIG"):
        return Path(custom_path)

    return DEFAULT_CONFIG_DIR / DEFAULT_CONFIG_FILE


def load_config(config_path: Path | None = None) -> TokenMintConfig:
    """Load configuration from TOML file.

    An unreadable file is logged and replaced by defaults.
    """
    path = config_path or get_config_path()

    config = TokenMintConfig()
    config.config_path = path

    if path.exists():
        try:
            with open(path, "rb") as f:
                data = tomllib.load(f)

            config = TokenMintConfig.from_dict(data)
            config.config_path = path
            config.last_modified = datetime.fromtimestamp(path.stat().st_mtime)

        except (OSError, tomllib.TOMLDecodeError, ValueError) as e:
            logger.error(f"Failed to load config from {path}: {e}")
            config = TokenMintConfig()
            config.config_path = path

    config.apply_env_overrides()

    return config


def save_config(config: TokenMintConfig, config_path: Path | None = None) -> bool:
    """Save configuration to TOML file.

    Returns:
        True if saved successfully, False otherwise.
    """
    path = config_path or config.config_path or get_config_path()

    try:
        path.parent.mkdir(parents=True, exist_ok=True)
        with open(path, "wb") as f:
            tomli_w.dump(config.to_dict(), f)
    except OSError as e:
        logger.error(f"Failed to save config: {e}")
        return False

    config.config_path = path
    config.last_modified = datetime.now()
    logger.info(f"Saved config to {path}")
    return True


def get_config() -> TokenMintConfig:
    """Get the singleton configuration instance.

    Loads from file on first call, returns cached instance after.
    """
    global _config
    if _config is None:
        _config = load_config()
    return _config


def reload_config() -> TokenMintConfig:
    """Force reload configuration from file."""
    global _config
    _config = load_config()
    return _config


def reset_config() -> None:
    """Reset singleton to force reload on next access."""
    global _config
    _config = None


# =============================================================================
# CLI Helpers
# =============================================================================


def format_config_for_display(config: TokenMintConfig) -> str:
    """Format configuration for CLI display."""
    lines = []
    lines.append("tokenmint Configuration")
    lines.append("=" * 50)
    lines.append("")

    if config.config_path:
        lines.append(f"Config file: {config.config_path}")
        if config.last_modified:
            lines.append(f"Last modified: {config.last_modified.strftime('%Y-%m-%d %H:%M:%S')}")
        lines.append("")

    for name in SECTIONS:
        lines.append(f"[{name}]")
        for k, v in getattr(config, name).to_dict().items():
            lines.append(f"  {k} = {v}")
        lines.append("")

    return "\n".join(lines).rstrip() + "\n"


def list_config_keys() -> list[str]:
    """List all available configuration keys as dotted paths."""
    keys = []
    for name, section_cls in SECTIONS.items():
        keys.extend(f"{name}.{f.name}" for f in fields(section_cls))
    return keys
