"""Token metadata template handling.

Metadata is uploaded by hand: tokenmint writes a template JSON file, the
operator adds the image URL, uploads it, and pastes the final URL back.
"""

from __future__ import annotations

import logging
from pathlib import Path

from .models import MetadataAttribute, TokenMetadata

logger = logging.getLogger(__name__)

DEFAULT_TEMPLATE_FILE = "metadata-template.json"

UPLOAD_STEPS = [
    "Go to https://web3.storage/",
    "Upload your token image",
    "Copy the IPFS URL for your image",
    "Open {template} that was just created",
    "Add the image IPFS URL to the metadata file",
    "Upload the complete metadata.json to Web3.Storage",
    "Copy the metadata IPFS URL",
]


def build_metadata(
    name: str,
    symbol: str,
    description: str = "",
    external_url: str = "",
    category: str = "",
) -> TokenMetadata:
    """Metadata with a Category attribute, present even when category is empty."""
    return TokenMetadata(
        name=name,
        symbol=symbol,
        description=description,
        external_url=external_url,
        attributes=[MetadataAttribute(trait_type="Category", value=category)],
    )


def write_metadata_template(metadata: TokenMetadata, path: Path | str = DEFAULT_TEMPLATE_FILE) -> Path:
    """Write metadata as indented JSON for the operator to complete."""
    template_path = Path(path)
    template_path.write_text(
        metadata.model_dump_json(indent=2, exclude_none=True) + "\n",
        encoding="utf-8",
    )
    logger.info(f"Wrote metadata template to {template_path}")
    return template_path


def upload_steps(template: Path | str = DEFAULT_TEMPLATE_FILE) -> list[str]:
    """Numbered manual upload instructions."""
    name = Path(template).name
    return [f"{i}. {step.format(template=name)}" for i, step in enumerate(UPLOAD_STEPS, 1)]
