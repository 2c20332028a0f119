"""Tests for the tokenmint command line."""

from __future__ import annotations

from unittest.mock import patch

import pytest
from click.testing import CliRunner

from fakes import failure
from tokenmint import __version__
from tokenmint.cli import main
from tokenmint.config import get_config, load_config
from tokenmint.models import TokenInfo, WalletInfo
from tokenmint.records import save_token_info, save_wallet_info
from tokenmint.runner import CommandResult


@pytest.fixture
def cli() -> CliRunner:
    return CliRunner()


class TestBasics:
    def test_version_command(self, cli) -> None:
        result = cli.invoke(main, ["version"])
        assert result.exit_code == 0
        assert f"tokenmint version {__version__}" in result.output

    def test_version_flag(self, cli) -> None:
        result = cli.invoke(main, ["--version"])
        assert result.exit_code == 0
        assert __version__ in result.output

    def test_help_without_command(self, cli) -> None:
        result = cli.invoke(main, [])
        assert result.exit_code == 0
        assert "create" in result.output
        assert "exec" in result.output


class TestClassify:
    def test_transient(self, cli) -> None:
        result = cli.invoke(main, ["classify", "Error: BlockhashNotFound"])
        assert result.exit_code == 0
        assert "transient" in result.output
        assert "blockhashnotfound" in result.output

    def test_fatal(self, cli) -> None:
        result = cli.invoke(main, ["classify", "insufficient funds for rent"])
        assert "fatal" in result.output


class TestExec:
    TEMPLATE = "spl-token mint Tok 1 Ata --with-compute-unit-price {{COMPUTE_PRICE}}"

    def test_retries_on_yes(self, cli) -> None:
        with patch("tokenmint.cli.ShellCommandRunner") as runner_cls:
            run = runner_cls.return_value.run
            run.side_effect = [
                failure("Error: BlockhashNotFound"),
                CommandResult(command="cmd", stdout="Signature: 5sig\n"),
            ]
            result = cli.invoke(main, ["exec", self.TEMPLATE], input="yes\n")

        assert result.exit_code == 0
        assert "Signature: 5sig" in result.output
        commands = [c.args[0] for c in run.call_args_list]
        assert commands[0].endswith("--with-compute-unit-price 1000")
        assert commands[1].endswith("--with-compute-unit-price 2000")

    def test_price_options(self, cli) -> None:
        with patch("tokenmint.cli.ShellCommandRunner") as runner_cls:
            run = runner_cls.return_value.run
            run.side_effect = [failure("rpc error"), CommandResult(command="cmd", stdout="ok")]
            result = cli.invoke(
                main,
                ["exec", self.TEMPLATE, "--initial-price", "100", "--price-step", "50"],
                input="yes\n",
            )

        assert result.exit_code == 0
        assert run.call_args_list[1].args[0].endswith("--with-compute-unit-price 150")

    def test_fatal_failure_exits_nonzero(self, cli) -> None:
        with patch("tokenmint.cli.ShellCommandRunner") as runner_cls:
            runner_cls.return_value.run.side_effect = failure("insufficient funds for rent")
            result = cli.invoke(main, ["exec", self.TEMPLATE])

        assert result.exit_code == 1
        assert "Command failed" in result.output

    def test_retry_limit_exits_nonzero(self, cli) -> None:
        with patch("tokenmint.cli.ShellCommandRunner") as runner_cls:
            runner_cls.return_value.run.side_effect = failure("gas")
            result = cli.invoke(main, ["exec", self.TEMPLATE, "--max-retries", "0"])

        assert result.exit_code == 1
        assert "gave up after 0 retries" in result.output


class TestShow:
    def test_hides_secrets(self, cli, tmp_path) -> None:
        save_wallet_info(
            {"provider": WalletInfo(public_key="Pub1", private_key="Priv1", outfile="id.json")},
            tmp_path / "wallet-info.csv",
        )
        save_token_info(TokenInfo(address="Tok1", decimals=9, total_supply="5"), tmp_path / "token-info.csv")

        result = cli.invoke(main, ["show", "--dir", str(tmp_path)])

        assert result.exit_code == 0
        assert "Pub1" in result.output
        assert "Tok1" in result.output
        assert "Priv1" not in result.output

    def test_secrets_flag(self, cli, tmp_path) -> None:
        save_wallet_info(
            {"provider": WalletInfo(public_key="Pub1", private_key="Priv1", outfile="id.json")},
            tmp_path / "wallet-info.csv",
        )

        result = cli.invoke(main, ["show", "--dir", str(tmp_path), "--secrets"])

        assert "Priv1" in result.output

    def test_no_records(self, cli, tmp_path) -> None:
        result = cli.invoke(main, ["show", "--dir", str(tmp_path)])
        assert "No records found" in result.output


class TestConfigCommands:
    def test_keys(self, cli) -> None:
        result = cli.invoke(main, ["config", "keys", "--section", "fees"])
        assert result.output.split() == [
            "fees.initial_compute_price",
            "fees.compute_price_step",
            "fees.max_retries",
        ]

    def test_set_and_get(self, cli, isolated_config) -> None:
        result = cli.invoke(main, ["config", "set", "fees.max_retries", "8"])
        assert result.exit_code == 0
        assert "Set fees.max_retries = 8" in result.output
        assert load_config(isolated_config).fees.max_retries == 8

        result = cli.invoke(main, ["config", "get", "fees.max_retries"])
        assert "fees.max_retries = 8" in result.output

    def test_set_rejects_non_integer(self, cli, isolated_config) -> None:
        result = cli.invoke(main, ["config", "set", "fees.max_retries", "many"])
        assert "expects a whole number" in result.output
        assert not isolated_config.exists()

    def test_get_unknown(self, cli) -> None:
        result = cli.invoke(main, ["config", "get", "fees.nope"])
        assert "Key not found" in result.output

    def test_show_json(self, cli) -> None:
        result = cli.invoke(main, ["config", "show", "--json", "--section", "network"])
        assert '"cluster": "mainnet-beta"' in result.output

    def test_path(self, cli, isolated_config) -> None:
        result = cli.invoke(main, ["config", "path"])
        assert result.output.strip() == str(isolated_config)

    def test_reset_backs_up(self, cli, isolated_config) -> None:
        cli.invoke(main, ["config", "set", "network.cluster", "devnet"])
        assert get_config().network.cluster == "devnet"

        result = cli.invoke(main, ["config", "reset", "--yes"])

        assert result.exit_code == 0
        assert load_config(isolated_config).network.cluster == "mainnet-beta"
        assert get_config().network.cluster == "mainnet-beta"
        assert list(isolated_config.parent.glob("*.bak"))
