"""Tests for balance lookups."""

from __future__ import annotations

from unittest.mock import MagicMock

import pytest
from solders.pubkey import Pubkey

from tokenmint.errors import BalanceError
from tokenmint.rpc import LAMPORTS_PER_SOL, BalanceClient, lamports_to_sol

SYSTEM_PROGRAM = "11111111111111111111111111111111"


def make_client(lamports: int = 0) -> MagicMock:
    client = MagicMock()
    client.get_balance.return_value.value = lamports
    return client


class TestBalanceClient:
    def test_balance_lamports(self) -> None:
        client = make_client(2_500_000)
        balance = BalanceClient("http://rpc", client=client)

        assert balance.get_balance_lamports(SYSTEM_PROGRAM) == 2_500_000
        client.get_balance.assert_called_once_with(Pubkey.from_string(SYSTEM_PROGRAM))

    def test_balance_sol(self) -> None:
        balance = BalanceClient("http://rpc", client=make_client(LAMPORTS_PER_SOL // 2))
        assert balance.get_balance_sol(SYSTEM_PROGRAM) == 0.5

    def test_invalid_public_key(self) -> None:
        client = make_client()
        balance = BalanceClient("http://rpc", client=client)

        with pytest.raises(BalanceError, match="Invalid public key"):
            balance.get_balance_lamports("not-a-key")
        client.get_balance.assert_not_called()

    def test_rpc_failure_is_wrapped(self) -> None:
        client = MagicMock()
        client.get_balance.side_effect = RuntimeError("connection refused")
        balance = BalanceClient("http://rpc", client=client)

        with pytest.raises(BalanceError, match="connection refused"):
            balance.get_balance_lamports(SYSTEM_PROGRAM)


def test_lamports_to_sol() -> None:
    assert lamports_to_sol(1_500_000_000) == 1.5
