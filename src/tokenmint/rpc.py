"""SOL balance lookups over JSON-RPC."""

from __future__ import annotations

import logging

from solana.rpc.api import Client
from solana.rpc.commitment import Commitment
from solders.pubkey import Pubkey

from .errors import BalanceError

logger = logging.getLogger(__name__)

LAMPORTS_PER_SOL = 1_000_000_000
DEFAULT_RPC_URL = "https://api.mainnet-beta.solana.com"


def lamports_to_sol(lamports: int) -> float:
    return lamports / LAMPORTS_PER_SOL


class BalanceClient:
    """Reads wallet balances from an RPC node."""

    def __init__(
        self,
        rpc_url: str = DEFAULT_RPC_URL,
        commitment: str = "confirmed",
        client: Client | None = None,
    ):
        self.rpc_url = rpc_url
        self.client = client or Client(rpc_url, commitment=Commitment(commitment))

    def get_balance_lamports(self, public_key: str) -> int:
        """Balance of public_key in lamports.

        Raises:
            BalanceError: If the address is invalid or the RPC call fails.
        """
        try:
            pubkey = Pubkey.from_string(public_key)
        except ValueError as e:
            raise BalanceError(f"Invalid public key {public_key}: {e}") from e

        try:
            response = self.client.get_balance(pubkey)
        except Exception as e:
            raise BalanceError(f"Balance lookup via {self.rpc_url} failed: {e}") from e

        logger.debug(f"Balance of {public_key}: {response.value} lamports")
        return response.value

    def get_balance_sol(self, public_key: str) -> float:
        return lamports_to_sol(self.get_balance_lamports(public_key))
