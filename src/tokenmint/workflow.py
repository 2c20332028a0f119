"""Interactive Token-2022 creation workflow.

Walks the operator through launching a token, one step at a time:

    1. Project folder          7. Metadata template
    2. Network                 8. Initialize metadata
    3. Provider wallet         9. Token accounts
    4. Funding check          10. Mint supply
    5. Mint keypair           11. Revoke authorities (optional)
    6. Create token           12. Save token info

Every transaction goes through AdaptiveRetryExecutor so the operator can
re-price it when the network is congested.

Example usage:
    from tokenmint.workflow import TokenCreator

    TokenCreator().run()
"""

from __future__ import annotations

import logging
import os
from pathlib import Path

from rich.console import Console

from . import spl_commands
from .config import TokenMintConfig, get_config
from .errors import BalanceError, WalletError, WorkflowError
from .metadata import build_metadata, upload_steps, write_metadata_template
from .models import TokenInfo, TokenMetadata, WalletInfo
from .parsing import (
    parse_account_address,
    parse_keygen_outfile,
    parse_keypair_path,
    parse_seed_phrase,
    parse_token_address,
)
from .prompt import ConsolePrompter, Prompter
from .records import save_token_info, save_wallet_info
from .retry.executor import COMPUTE_PRICE_PLACEHOLDER, AdaptiveRetryExecutor
from .rpc import BalanceClient, lamports_to_sol
from .runner import CommandRunner, ShellCommandRunner
from .wallet import load_wallet, resolve_keypair_path

logger = logging.getLogger(__name__)

PROVIDER = "provider"


class TokenCreator:
    """Runs the token launch steps against the Solana CLIs."""

    def __init__(
        self,
        config: TokenMintConfig | None = None,
        runner: CommandRunner | None = None,
        prompter: Prompter | None = None,
        balance_client: BalanceClient | None = None,
        console: Console | None = None,
        project_dir: str | None = None,
    ):
        self.config = config or get_config()
        self.runner = runner or ShellCommandRunner()
        self.prompter = prompter or ConsolePrompter()
        self.console = console or Console()
        self.project_dir = project_dir
        self._balance_client = balance_client

        fees = self.config.fees
        self.executor = AdaptiveRetryExecutor(
            self.runner,
            self.prompter,
            initial_price=fees.initial_compute_price,
            price_step=fees.compute_price_step,
            max_retries=fees.max_retries,
            on_retry=self._report_retry,
        )

        self.wallets: dict[str, WalletInfo] = {}
        self.token = TokenInfo()
        self.use_existing_wallet = False

    @property
    def balance_client(self) -> BalanceClient:
        if self._balance_client is None:
            network = self.config.network
            self._balance_client = BalanceClient(network.rpc_url, network.commitment)
        return self._balance_client

    @property
    def provider(self) -> WalletInfo:
        if PROVIDER not in self.wallets:
            raise WorkflowError("Provider wallet has not been set up")
        return self.wallets[PROVIDER]

    # -------------------------------------------------------------------------
    # Helpers
    # -------------------------------------------------------------------------

    def _say(self, message: str) -> None:
        self.console.print(message, highlight=False)

    def _run(self, command: str) -> str:
        return self.runner.run(command).stdout

    def _report_retry(self, price: int, retries: int) -> None:
        self._say(f"Retrying with compute unit price: {price} (retry {retries})")

    def _grind(self, prefix: str) -> tuple[str, str]:
        """Grind a vanity keypair, returning (outfile, raw output)."""
        self._say(f"Generating address starting with '{prefix}'...")
        output = self._run(spl_commands.grind_keypair(prefix))
        outfile = parse_keygen_outfile(output)
        if not outfile:
            raise WorkflowError("solana-keygen did not report a keypair file")
        return outfile, output

    # -------------------------------------------------------------------------
    # Steps
    # -------------------------------------------------------------------------

    def create_project_folder(self) -> Path:
        """Create (if needed) and enter the project directory."""
        self._say("\n📁 Creating project folder...")
        folder = self.project_dir
        if folder is None:
            default = self.config.token.project_dir
            folder = self.prompter.ask(
                f"Enter project directory name (default: {default}):"
            ).strip() or default

        path = Path(folder)
        existed = path.exists()
        path.mkdir(parents=True, exist_ok=True)
        os.chdir(path)

        if existed:
            self._say(f"✅ Moved to existing {folder} folder")
        else:
            self._say(f"✅ Created and moved to {folder} folder")
        return path

    def setup_network(self) -> str:
        self._say("\n🌐 Network Setup")
        self._run(spl_commands.set_cluster(self.config.network.cluster))
        config_output = self._run(spl_commands.get_config())
        self._say(f"Network configuration:\n{config_output}")
        return config_output

    def setup_wallet(self) -> WalletInfo:
        """Use the CLI's configured wallet or grind a new vanity wallet."""
        self._say("\n👛 Wallet Setup")

        while True:
            choice = self.prompter.ask(
                "Would you like to:\n"
                "1. Use your currently configured CLI wallet\n"
                "2. Generate a new vanity wallet\n"
                "Enter choice (1 or 2):"
            ).strip()

            if choice != "1":
                wallet = self._create_vanity_wallet()
                self.use_existing_wallet = False
                break

            try:
                wallet = self._load_configured_wallet()
            except WalletError as e:
                logger.error(f"Error accessing keypair file: {e}")
                self._say(
                    "\n⚠️  Failed to access existing wallet. "
                    "Would you like to try again or create a new one?"
                )
                continue

            self.use_existing_wallet = True
            self._say(f"✅ Using existing wallet: {wallet.public_key}")
            self._say(f"📂 Keypair path: {wallet.outfile}")
            break

        self.wallets[PROVIDER] = wallet
        self.save_wallet_info()
        return wallet

    def _load_configured_wallet(self) -> WalletInfo:
        config_output = self._run(spl_commands.get_config())
        keypair_path = parse_keypair_path(config_output)
        if not keypair_path:
            raise WorkflowError("Could not find keypair path in Solana config")
        return load_wallet(resolve_keypair_path(keypair_path))

    def _create_vanity_wallet(self) -> WalletInfo:
        prefix = self.prompter.ask(
            'Enter characters you want your wallet to start with (e.g. "key"):'
        ).strip()
        outfile, output = self._grind(prefix)
        self._run(spl_commands.set_keypair(outfile))

        wallet = load_wallet(outfile, seed_phrase=parse_seed_phrase(output))
        self._say(f"✅ Created new wallet: {wallet.public_key}")
        return wallet

    def save_wallet_info(self) -> Path:
        self._say("\n💾 Saving wallet information...")
        path = save_wallet_info(self.wallets, self.config.token.wallet_file)
        self._say(f"✅ Wallet information saved to {path}")
        return path

    def check_wallet_funding(self) -> None:
        """Wait until the operator has funded a freshly created wallet."""
        if self.use_existing_wallet:
            self._say("\n💰 Using existing wallet - skipping funding check")
            return

        public_key = self.provider.public_key
        while True:
            self._say("\n💰 Wallet Funding Required")
            self._say(f"Provider Wallet Address: {public_key}")
            self._say("\n📋 Steps to follow:")
            self._say("1. Copy the provider wallet address above")
            self._say("2. Send SOL to this address (recommended: at least 1 SOL)")
            self._say("3. Wait for the transaction to confirm")

            try:
                balance = self.balance_client.get_balance_sol(public_key)
                self._say(f"\nCurrent balance: {balance} SOL")
            except BalanceError as e:
                logger.debug(f"Balance check failed: {e}")
                self._say("\nCould not check balance. Please verify funding manually.")

            if not self.prompter.confirm("\nHave you funded the wallet?"):
                self._say("Please fund the wallet before continuing.")
                continue

            try:
                lamports = self.balance_client.get_balance_lamports(public_key)
            except BalanceError as e:
                logger.warning(f"Could not verify balance: {e}")
                self._say("\n⚠️  Could not verify balance. Proceeding based on your confirmation...")
                return

            if lamports == 0:
                self._say("\n⚠️  Warning: Wallet still shows 0 balance. Are you sure it's funded?")
                continue

            self._say(f"\n✅ Wallet funded successfully! Balance: {lamports_to_sol(lamports)} SOL")
            return

    def create_mint_keypair(self) -> str | None:
        """Optionally grind a vanity address for the mint."""
        self._say("\n🔑 Token Mint Account Setup")
        if not self.prompter.confirm("Would you like to create a vanity address for your token?"):
            return None

        prefix = self.prompter.ask(
            'Enter characters you want your token address to start with (e.g. "test"):'
        ).strip()
        outfile, _ = self._grind(prefix)
        self.token.mint_keypair = outfile

        # Grinding must not leave the mint keypair as the default signer
        self._run(spl_commands.set_keypair(self.provider.outfile))
        config_output = self._run(spl_commands.get_config())
        self._say(f"Current Solana config:\n{config_output}")

        self._say(f"✅ Created token mint keypair: {outfile}")
        return outfile

    def _ask_command_value(self, question: str) -> str:
        """Ask for a value that ends up inside a transaction command."""
        while True:
            reply = self.prompter.ask(question)
            if COMPUTE_PRICE_PLACEHOLDER not in reply:
                return reply
            self._say(f"Value may not contain {COMPUTE_PRICE_PLACEHOLDER}")

    def _ask_decimals(self) -> int:
        default = str(self.config.token.default_decimals)
        while True:
            reply = self.prompter.ask(
                f"Enter token decimals (usually {default}):", default=default
            ).strip() or default
            if reply.isdigit():
                return int(reply)
            self._say(f"Decimals must be a whole number, got {reply!r}")

    def create_token(self) -> str:
        self._say("\n🪙 Creating token...")
        decimals = self._ask_decimals()

        command = spl_commands.create_token(
            decimals,
            mint_keypair=self.token.mint_keypair,
            program_id=self.config.token.program_id,
        )
        result = self.executor.execute(command)

        address = parse_token_address(result.stdout)
        if not address:
            raise WorkflowError("spl-token did not report the new token address")

        self.token.address = address
        self.token.decimals = decimals
        self._say(f"✅ Token created successfully: {address}")
        return address

    def collect_metadata(self) -> tuple[TokenMetadata, str]:
        """Gather metadata, write the template and wait for its uploaded URL."""
        self._say("\n🖼️  Manual Metadata Upload Process:")
        self._say("1. First, you need to upload your image to Web3.Storage")
        self._say("2. Then create and upload the metadata.json file")

        metadata = build_metadata(
            name=self._ask_command_value("Enter token name:"),
            symbol=self._ask_command_value("Enter token symbol:"),
            description=self.prompter.ask("Enter token description:"),
            external_url=self.prompter.ask("Enter external URL:"),
            category=self.prompter.ask("Enter token category (e.g., Utility Token):"),
        )
        template = write_metadata_template(metadata, self.config.token.metadata_template)

        self._say("\n📋 Steps to follow:")
        for step in upload_steps(template):
            self._say(step)

        metadata_url = self._ask_command_value("\nPaste the final metadata.json IPFS URL here:").strip()
        return metadata, metadata_url

    def initialize_metadata(self, token_address: str, metadata: TokenMetadata, metadata_url: str) -> None:
        self._say("\n📝 Initializing metadata...")
        self.executor.execute(
            spl_commands.initialize_metadata(
                token_address, metadata.name, metadata.symbol, metadata_url
            )
        )
        self._say("✅ Metadata initialized successfully")

    def create_token_accounts(self, token_address: str) -> None:
        """Create an associated token account for every recorded wallet."""
        self._say("\n💳 Creating token accounts...")
        provider = self.provider
        if not provider.public_key or not provider.private_key:
            raise WorkflowError("Critical wallet information missing before ATA creation")

        for wallet_type, info in self.wallets.items():
            self._say(f"Creating token account for {wallet_type}...")
            result = self.executor.execute(
                spl_commands.create_account(token_address, info.public_key, provider.outfile)
            )

            ata_address = parse_account_address(result.stdout)
            if not ata_address:
                logger.warning(f"No account address in create-account output for {wallet_type}")
            info.ata_address = ata_address
            self._say(f"✅ Created token account for {wallet_type}: {ata_address}")

        self.save_wallet_info()

    def mint_tokens(self, token_address: str) -> str:
        self._say("\n💰 Minting tokens...")
        default = self.config.token.default_supply
        supply = self._ask_command_value(
            f"Enter token supply to mint (default: {default}):"
        ).strip() or default

        provider_ata = self.provider.ata_address
        if not provider_ata:
            raise WorkflowError("Provider has no token account to mint into")

        self.executor.execute(spl_commands.mint(token_address, supply, provider_ata))

        self.token.total_supply = supply
        self._say(f"✅ {supply} tokens minted successfully to provider account: {provider_ata}")
        return supply

    def revoke_authorities(self, token_address: str) -> bool:
        """Optionally make the token immutable. Returns True if revoked."""
        self._say("\n🔒 Revoking authorities...")
        if not self.prompter.confirm(
            "Would you like to revoke all authorities making the token immutable?"
        ):
            self._say("Skipping authority revocation...")
            return False

        for authority in spl_commands.REVOCABLE_AUTHORITIES:
            self._say(f"\nRevoking {authority} authority...")
            self.executor.execute(spl_commands.authorize_disable(token_address, authority))
            self._say(f"✅ {authority.capitalize()} authority revoked")

        self._say("\n✅ All authorities have been successfully revoked")
        self._say("⚠️  Warning: These actions cannot be undone. The token is now immutable.")
        return True

    def save_token_info(self) -> Path:
        self._say("\n💾 Saving token information...")
        path = save_token_info(self.token, self.config.token.token_file)
        self._say(f"✅ Token information saved to {path}")
        return path

    # -------------------------------------------------------------------------
    # Orchestration
    # -------------------------------------------------------------------------

    def run(self) -> TokenInfo:
        """Run every step in order."""
        try:
            self.create_project_folder()
            self.setup_network()
            self.setup_wallet()
            self.check_wallet_funding()
            self.create_mint_keypair()

            token_address = self.create_token()
            metadata, metadata_url = self.collect_metadata()
            self.initialize_metadata(token_address, metadata, metadata_url)
            self.create_token_accounts(token_address)
            self.mint_tokens(token_address)
            self.revoke_authorities(token_address)
            self.save_token_info()
        except Exception as e:
            logger.error(f"Error creating token: {e}")
            raise

        self._print_summary()
        return self.token

    def _print_summary(self) -> None:
        self._say("\n🎉 Token creation completed successfully!")
        self._say(f"Token Address: {self.token.address}")
        self._say(f"Provider Token Account: {self.provider.ata_address}")
        if self.token.mint_keypair:
            self._say(f"Token Mint Keypair: {self.token.mint_keypair}")

        token_file = self.config.token.token_file
        wallet_file = self.config.token.wallet_file
        self._say(f"\n✅ Check {wallet_file} and {token_file} for all details")

        self._say("\n📋 To verify your token:")
        self._say("1. Check token balance: spl-token accounts")
        self._say(f"2. View token metadata: spl-token display {self.token.address}")
        self._say("3. View transaction history on Solana Explorer")
