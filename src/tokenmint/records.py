"""CSV records of created wallets and tokens.

Both files are rewritten in full on every save.
"""

from __future__ import annotations

import csv
import logging
from pathlib import Path

from .models import NOT_CREATED, TokenInfo, WalletInfo

logger = logging.getLogger(__name__)

WALLET_FILE = "wallet-info.csv"
TOKEN_FILE = "token-info.csv"

WALLET_HEADER = [
    "WALLET_TYPE",
    "PUBLIC_KEY",
    "PRIVATE_KEY",
    "SEED_PHRASE",
    "ASSOCIATED_TOKEN_ACCOUNT",
]
TOKEN_HEADER = ["TYPE", "ADDRESS", "DETAILS"]


def save_wallet_info(wallets: dict[str, WalletInfo], path: Path | str = WALLET_FILE) -> Path:
    """Write one row per wallet, keyed by wallet type (e.g. "provider")."""
    csv_path = Path(path)
    with open(csv_path, "w", newline="", encoding="utf-8") as f:
        writer = csv.writer(f)
        writer.writerow(WALLET_HEADER)
        for wallet_type, info in wallets.items():
            writer.writerow(
                [
                    wallet_type,
                    info.public_key,
                    info.private_key,
                    info.seed_phrase or "",
                    info.ata_address or NOT_CREATED,
                ]
            )
    logger.info(f"Saved {len(wallets)} wallet record(s) to {csv_path}")
    return csv_path


def save_token_info(token: TokenInfo, path: Path | str = TOKEN_FILE) -> Path:
    """Write the mint row, plus the vanity keypair row when one was used."""
    rows = [["Token Mint", token.address or "", token.details]]
    if token.mint_keypair:
        rows.append(["Token Mint Keypair", token.mint_keypair, "Vanity address keypair file"])

    csv_path = Path(path)
    with open(csv_path, "w", newline="", encoding="utf-8") as f:
        writer = csv.writer(f)
        writer.writerow(TOKEN_HEADER)
        writer.writerows(rows)
    logger.info(f"Saved token record to {csv_path}")
    return csv_path


def read_records(path: Path | str) -> list[dict[str, str]]:
    """Read a saved CSV back as dicts keyed by header."""
    with open(path, newline="", encoding="utf-8") as f:
        return list(csv.DictReader(f))
