"""Extract values from solana / spl-token CLI output."""

from __future__ import annotations

import re

KEYPAIR_PATH_PATTERN = re.compile(r"Keypair Path: (.+)")
KEYGEN_OUTFILE_PATTERN = re.compile(r"Wrote keypair to (.+\.json)")
SEED_PHRASE_PATTERN = re.compile(r"recovery seed phrase: (.*)")
TOKEN_ADDRESS_PATTERN = re.compile(r"Creating token ([a-zA-Z0-9]+)")
ACCOUNT_ADDRESS_PATTERN = re.compile(r"Creating account ([a-zA-Z0-9]+)")


def _search(pattern: re.Pattern[str], output: str) -> str | None:
    match = pattern.search(output or "")
    if not match:
        return None
    return match.group(1).strip()


def parse_keypair_path(config_output: str) -> str | None:
    """Keypair path from ``solana config get`` output."""
    return _search(KEYPAIR_PATH_PATTERN, config_output)


def parse_keygen_outfile(output: str) -> str | None:
    """Keypair file written by ``solana-keygen grind``."""
    return _search(KEYGEN_OUTFILE_PATTERN, output)


def parse_seed_phrase(output: str) -> str:
    """Recovery seed phrase printed by solana-keygen, or empty string.

    ``grind`` does not print one unless run with ``--use-mnemonic``.
    """
    return _search(SEED_PHRASE_PATTERN, output) or ""


def parse_token_address(output: str) -> str | None:
    """Mint address from ``spl-token create-token`` output."""
    return _search(TOKEN_ADDRESS_PATTERN, output)


def parse_account_address(output: str) -> str | None:
    """Associated token account from ``spl-token create-account`` output."""
    return _search(ACCOUNT_ADDRESS_PATTERN, output)


def first_line(text: str) -> str:
    """First non-blank line of text."""
    for line in (text or "").splitlines():
        if line.strip():
            return line.strip()
    return ""
