"""tokenmint CLI - interactive Token-2022 launcher.

Main entry point for the tokenmint command.
"""

from __future__ import annotations

import json
import logging
import os
from dataclasses import replace
from pathlib import Path

import click
from rich.console import Console
from rich.logging import RichHandler
from rich.table import Table

from . import __version__
from .errors import TokenMintError
from .prompt import ConsolePrompter
from .retry import AdaptiveRetryExecutor, classify_failure
from .runner import ShellCommandRunner
from .utils.errors import handle_exception, set_debug_mode

console = Console()

LOG_LEVELS = ["debug", "info", "warning", "error"]


def configure_logging(level: str) -> None:
    """Route log records through rich, timestamped like the CLI's other output."""
    logging.basicConfig(
        level=level.upper(),
        format="%(message)s",
        datefmt="[%Y-%m-%d %H:%M:%S]",
        handlers=[RichHandler(console=console, show_path=False)],
        force=True,
    )


@click.group(invoke_without_command=True)
@click.option("--version", "-v", is_flag=True, help="Show version and exit")
@click.option("--debug", "-d", is_flag=True, help="Enable debug mode with verbose error output")
@click.option(
    "--log-level",
    type=click.Choice(LOG_LEVELS, case_sensitive=False),
    default=None,
    help="Logging level (default: LOG_LEVEL or ui.log_level)",
)
@click.pass_context
def main(ctx: click.Context, version: bool, debug: bool, log_level: str | None) -> None:
    """tokenmint - create a Token-2022 token from the terminal.

    Drives solana, solana-keygen and spl-token, retrying congested
    transactions with a higher compute unit price.
    """
    from .config import get_config

    if debug:
        set_debug_mode(True)

    level = log_level or ("debug" if debug else get_config().ui.log_level)
    configure_logging(level)

    if version:
        console.print(f"tokenmint version {__version__}")
        return

    if ctx.invoked_subcommand is None:
        click.echo(ctx.get_help())


@main.command()
@click.option("--project-dir", "-p", type=str, help="Project directory (skips the prompt)")
@click.option("--initial-price", type=click.IntRange(min=0), help="Starting compute unit price")
@click.option("--max-retries", type=click.IntRange(min=0), help="Retries per transaction")
@click.option("--rpc-url", type=str, help="RPC endpoint for balance checks")
def create(
    project_dir: str | None,
    initial_price: int | None,
    max_retries: int | None,
    rpc_url: str | None,
) -> None:
    """Create a new token interactively.

    \\b
    Examples:
        tokenmint create
        tokenmint create --project-dir my-token --initial-price 5000
    """
    from .config import get_config
    from .workflow import TokenCreator

    config = get_config()
    if initial_price is not None:
        config.fees = replace(config.fees, initial_compute_price=initial_price)
    if max_retries is not None:
        config.fees = replace(config.fees, max_retries=max_retries)
    if rpc_url:
        config.network = replace(config.network, rpc_url=rpc_url)

    creator = TokenCreator(config=config, console=console, project_dir=project_dir)
    try:
        creator.run()
    except (TokenMintError, OSError) as e:
        handle_exception(console, e, context="token creation")


@main.command("exec")
@click.argument("template")
@click.option("--initial-price", type=click.IntRange(min=0), help="Starting compute unit price")
@click.option("--price-step", type=click.IntRange(min=0), help="Increase applied on 'yes'")
@click.option("--max-retries", type=click.IntRange(min=0), help="Retries before giving up")
def exec_cmd(
    template: str,
    initial_price: int | None,
    price_step: int | None,
    max_retries: int | None,
) -> None:
    """Run one command with compute price retries.

    TEMPLATE must contain {{COMPUTE_PRICE}} where the price goes.

    \\b
    Examples:
        tokenmint exec "spl-token mint <TOKEN> 100 --with-compute-unit-price {{COMPUTE_PRICE}}"
    """
    from .config import get_config

    fees = get_config().fees

    def report(price: int, retries: int) -> None:
        console.print(f"[dim]Retrying with compute unit price: {price} (retry {retries})[/dim]")

    executor = AdaptiveRetryExecutor(
        ShellCommandRunner(cwd=Path.cwd()),
        ConsolePrompter(),
        initial_price=fees.initial_compute_price if initial_price is None else initial_price,
        price_step=fees.compute_price_step if price_step is None else price_step,
        max_retries=fees.max_retries if max_retries is None else max_retries,
        on_retry=report,
    )

    try:
        result = executor.execute(template)
    except TokenMintError as e:
        handle_exception(console, e, context="command")
        return

    click.echo(result.stdout, nl=False)


@main.command()
@click.argument("text")
def classify(text: str) -> None:
    """Show whether a failure message would be retried.

    \\b
    Examples:
        tokenmint classify "Error: BlockhashNotFound"
    """
    result = classify_failure(text)
    if result.marker:
        console.print(f"[yellow]{result.failure_class.value}[/yellow]: {result.reason} (matched '{result.marker}')")
    else:
        console.print(f"[red]{result.failure_class.value}[/red]: {result.reason}")


@main.command()
@click.option(
    "--dir",
    "directory",
    type=click.Path(exists=True, file_okay=False, path_type=Path),
    default=Path("."),
    help="Project directory holding the CSV files",
)
@click.option("--secrets", "-s", is_flag=True, help="Show private keys and seed phrases")
def show(directory: Path, secrets: bool) -> None:
    """Show saved wallet and token records."""
    from .config import get_config
    from .records import read_records

    token_config = get_config().token
    hidden = {"PRIVATE_KEY", "SEED_PHRASE"}
    found = False

    for filename in (token_config.token_file, token_config.wallet_file):
        path = directory / filename
        if not path.exists():
            continue
        found = True

        rows = read_records(path)
        table = Table(title=filename)
        columns = [c for c in (rows[0].keys() if rows else []) if secrets or c not in hidden]
        for column in columns:
            table.add_column(column)
        for row in rows:
            table.add_row(*(row.get(c, "") for c in columns))
        console.print(table)

    if not found:
        console.print(f"[yellow]No records found in {directory}[/yellow]")


@main.command("version")
def version_cmd() -> None:
    """Show version information."""
    console.print(f"tokenmint version {__version__}")


# =============================================================================
# Config Commands
# =============================================================================


@main.group()
def config() -> None:
    """Manage tokenmint configuration.

    \\b
    Examples:
        tokenmint config show
        tokenmint config set fees.max_retries 8
    """


@config.command("show")
@click.option("--json", "-j", "as_json", is_flag=True, help="Output as JSON")
@click.option("--section", type=str, help="Show only a specific section")
def config_show(as_json: bool, section: str | None) -> None:
    """Show current configuration."""
    from .config import SECTIONS, format_config_for_display, get_config

    cfg = get_config()

    if section and section not in SECTIONS:
        console.print(f"[red]Unknown section: {section}[/red]")
        console.print(f"[dim]Available: {', '.join(SECTIONS)}[/dim]")
        return

    if as_json:
        data = cfg.to_dict()
        if section:
            data = {section: data[section]}
        click.echo(json.dumps(data, indent=2, default=str))
        return

    if section:
        console.print(f"[bold]\\[{section}][/bold]")
        for k, v in getattr(cfg, section).to_dict().items():
            console.print(f"  {k} = {v}", highlight=False)
        return

    console.print(format_config_for_display(cfg), highlight=False, markup=False)


@config.command("get")
@click.argument("key")
def config_get(key: str) -> None:
    """Get a specific configuration value."""
    from .config import get_config

    value = get_config().get(key)

    if value is None:
        console.print(f"[yellow]Key not found: {key}[/yellow]")
        console.print("[dim]Use 'tokenmint config keys' to list available keys[/dim]")
        return

    console.print(f"{key} = {value}", highlight=False)


@config.command("set")
@click.argument("key")
@click.argument("value")
def config_set(key: str, value: str) -> None:
    """Set a configuration value and save it."""
    from .config import get_config, save_config

    cfg = get_config()

    current = cfg.get(key)
    parsed_value: str | int = value
    if isinstance(current, int):
        try:
            parsed_value = int(value)
        except ValueError:
            console.print(f"[red]{key} expects a whole number, got {value!r}[/red]")
            return

    if cfg.set(key, parsed_value):
        if save_config(cfg):
            console.print(f"[green]✓ Set {key} = {parsed_value}[/green]")
        else:
            console.print("[red]Failed to save config[/red]")
    else:
        console.print(f"[red]Failed to set {key}[/red]")
        console.print("[dim]Use 'tokenmint config keys' to list available keys[/dim]")


@config.command("keys")
@click.option("--section", type=str, help="Filter by section")
def config_keys(section: str | None) -> None:
    """List all available configuration keys."""
    from .config import list_config_keys

    keys = list_config_keys()
    if section:
        keys = [k for k in keys if k.startswith(f"{section}.")]
        if not keys:
            console.print(f"[yellow]No keys found in section: {section}[/yellow]")
            return

    for key in keys:
        click.echo(key)


@config.command("path")
def config_path_cmd() -> None:
    """Show configuration file path."""
    from .config import get_config_path

    click.echo(str(get_config_path()))


@config.command("reset")
@click.option("--yes", "-y", is_flag=True, help="Skip confirmation")
@click.option("--section", type=str, help="Reset only a specific section")
def config_reset(yes: bool, section: str | None) -> None:
    """Reset configuration to defaults."""
    from datetime import datetime as dt

    from .config import (
        SECTIONS,
        TokenMintConfig,
        get_config,
        get_config_path,
        reset_config,
        save_config,
    )

    config_path = get_config_path()

    if section:
        if section not in SECTIONS:
            console.print(f"[red]Cannot reset section: {section}[/red]")
            console.print(f"[dim]Resettable sections: {', '.join(SECTIONS)}[/dim]")
            return

        if not yes and not click.confirm(f"Reset [{section}] to defaults?"):
            console.print("[dim]Cancelled[/dim]")
            return

        cfg = get_config()
        setattr(cfg, section, SECTIONS[section]())
        save_config(cfg)
        console.print(f"[green]✓ Reset \\[{section}] to defaults[/green]")
        return

    if not yes and not click.confirm("Reset ALL configuration to defaults?"):
        console.print("[dim]Cancelled[/dim]")
        return

    if config_path.exists():
        backup_path = config_path.with_suffix(f".{dt.now().strftime('%Y%m%d_%H%M%S')}.bak")
        os.replace(config_path, backup_path)
        console.print(f"[dim]Backed up to: {backup_path}[/dim]")

    save_config(TokenMintConfig(), config_path)
    reset_config()
    console.print("[green]✓ Configuration reset to defaults[/green]")


if __name__ == "__main__":
    main()
