"""Command templates for the solana, solana-keygen and spl-token CLIs.

Transaction commands carry a single ``{{COMPUTE_PRICE}}`` placeholder that
the retry executor fills in on each attempt.
"""

from __future__ import annotations

import shlex

from .retry.executor import COMPUTE_PRICE_PLACEHOLDER

TOKEN_2022_PROGRAM_ID = "TokenzQdBNbLqP5VEhdkAS6EPFLC1PHnBqCXEpPxuEb"

# Disabled in this order when making a token immutable
REVOCABLE_AUTHORITIES = ("mint", "metadata", "metadata-pointer")

_PRICE_FLAG = f"--with-compute-unit-price {COMPUTE_PRICE_PLACEHOLDER}"


def _quote(value: str) -> str:
    """Shell-quote an operator-supplied value.

    Raises:
        ValueError: If the value contains the compute price placeholder.
    """
    value = str(value)
    if COMPUTE_PRICE_PLACEHOLDER in value:
        raise ValueError(f"Value may not contain {COMPUTE_PRICE_PLACEHOLDER}: {value!r}")
    return shlex.quote(value)


def set_cluster(url: str) -> str:
    return f"solana config set --url {_quote(url)}"


def get_config() -> str:
    return "solana config get"


def set_keypair(path: str) -> str:
    return f"solana config set --keypair {_quote(path)}"


def grind_keypair(prefix: str) -> str:
    """Grind one keypair whose address starts with prefix."""
    return f"solana-keygen grind --starts-with {_quote(f'{prefix}:1')}"


def create_token(
    decimals: int,
    mint_keypair: str | None = None,
    program_id: str = TOKEN_2022_PROGRAM_ID,
) -> str:
    """Create a metadata-enabled mint.

    Without mint_keypair, spl-token generates a fresh mint address.
    """
    parts = [
        "spl-token create-token",
        f"--program-id {_quote(program_id)}",
        "--enable-metadata",
        f"--decimals {int(decimals)}",
        _PRICE_FLAG,
    ]
    if mint_keypair:
        parts.append(_quote(mint_keypair))
    return " ".join(parts)


def create_account(token_address: str, owner: str, fee_payer: str) -> str:
    return " ".join(
        [
            f"spl-token create-account {_quote(token_address)}",
            f"--owner {_quote(owner)}",
            f"--fee-payer {_quote(fee_payer)}",
            _PRICE_FLAG,
        ]
    )


def initialize_metadata(token_address: str, name: str, symbol: str, uri: str) -> str:
    return " ".join(
        [
            f"spl-token initialize-metadata {_quote(token_address)}",
            _quote(name),
            _quote(symbol),
            _quote(uri),
            _PRICE_FLAG,
        ]
    )


def mint(token_address: str, amount: str, recipient: str) -> str:
    return " ".join(
        [
            f"spl-token mint {_quote(token_address)}",
            _quote(amount),
            _quote(recipient),
            _PRICE_FLAG,
        ]
    )


def authorize_disable(token_address: str, authority_type: str) -> str:
    """Permanently disable one authority on the mint."""
    if authority_type not in REVOCABLE_AUTHORITIES:
        raise ValueError(f"Unknown authority type: {authority_type}")
    return (
        f"spl-token authorize {_quote(token_address)} {authority_type} "
        f"--disable {_PRICE_FLAG}"
    )
