"""Shared fixtures for tokenmint tests."""

from __future__ import annotations

from pathlib import Path

import pytest
from solders.keypair import Keypair

from fakes import write_keypair
from tokenmint.config import reset_config


@pytest.fixture(autouse=True)
def isolated_config(tmp_path, monkeypatch):
    """Point configuration at a temp file and clear env overrides."""
    config_file = tmp_path / "tokenmint-config" / "config.toml"
    monkeypatch.setenv("TOKENMINT_CONFIG", str(config_file))
    for name in (
        "TOKENMINT_CLUSTER",
        "TOKENMINT_RPC_URL",
        "TOKENMINT_INITIAL_PRICE",
        "TOKENMINT_MAX_RETRIES",
        "LOG_LEVEL",
    ):
        monkeypatch.delenv(name, raising=False)

    reset_config()
    yield config_file
    reset_config()


@pytest.fixture
def keypair_file(tmp_path) -> tuple[Path, Keypair]:
    path = tmp_path / "id.json"
    keypair = write_keypair(path)
    return path, keypair
