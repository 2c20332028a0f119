"""tokenmint - interactive Token-2022 creation on Solana.

Drives the solana, solana-keygen and spl-token CLIs through the steps needed
to launch a fungible token, retrying fee-sensitive transactions with an
adjustable compute unit price.
"""

__version__ = "0.3.0"
