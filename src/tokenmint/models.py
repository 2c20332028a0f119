"""Data models for wallets, tokens and metadata."""

from __future__ import annotations

from pydantic import BaseModel, Field

NOT_CREATED = "Not created yet"


class WalletInfo(BaseModel):
    """A wallet taking part in the launch."""

    public_key: str
    private_key: str
    outfile: str
    seed_phrase: str = ""
    ata_address: str | None = None


class TokenInfo(BaseModel):
    """The mint being created."""

    address: str | None = None
    decimals: int | None = None
    total_supply: str | None = None
    mint_keypair: str | None = None

    @property
    def details(self) -> str:
        return f"Decimals: {self.decimals}, Supply: {self.total_supply}"


class MetadataAttribute(BaseModel):
    trait_type: str
    value: str


class TokenMetadata(BaseModel):
    """Off-chain metadata JSON, uploaded by the operator."""

    name: str
    symbol: str
    description: str = ""
    external_url: str = ""
    image: str | None = None
    attributes: list[MetadataAttribute] = Field(default_factory=list)
