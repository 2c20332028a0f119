"""Keypair file handling.

Keypair files are the JSON byte arrays written by solana-keygen. Decoding is
left to solders; this module only locates and reads the files.
"""

from __future__ import annotations

import json
import logging
from pathlib import Path

from solders.keypair import Keypair

from .errors import WalletError
from .models import WalletInfo

logger = logging.getLogger(__name__)

# Relative keypair paths in the CLI config are resolved against this directory
SOLANA_CLI_CONFIG_DIR = Path(".config") / "solana" / "cli"


def resolve_keypair_path(path: str, home: Path | None = None) -> Path:
    """Turn a configured keypair path into an absolute path."""
    keypair_path = Path(path).expanduser()
    if keypair_path.is_absolute():
        return keypair_path

    base = (home or Path.home()) / SOLANA_CLI_CONFIG_DIR
    return (base / keypair_path).resolve()


def load_keypair(path: Path) -> Keypair:
    """Read a solana-keygen JSON keypair file.

    Raises:
        WalletError: If the file is missing or not a valid keypair.
    """
    if not path.exists():
        raise WalletError(f"Keypair file not found at: {path}")

    try:
        data = json.loads(path.read_text(encoding="utf-8"))
        return Keypair.from_bytes(bytes(data))
    except (json.JSONDecodeError, TypeError, ValueError) as e:
        raise WalletError(f"Invalid keypair file {path}: {e}") from e


def load_wallet(path: Path | str, seed_phrase: str = "") -> WalletInfo:
    """Load a keypair file into a WalletInfo record."""
    keypair_path = Path(path)
    keypair = load_keypair(keypair_path)

    wallet = WalletInfo(
        public_key=str(keypair.pubkey()),
        private_key=str(keypair),
        seed_phrase=seed_phrase,
        outfile=str(keypair_path),
    )
    logger.debug(f"Loaded wallet {wallet.public_key} from {keypair_path}")
    return wallet
