from enum import Enum
from typing import Dict, Optional

from pydantic import BaseModel, ConfigDict, Field

USDC_MINT = "EPjFWdd5AufqSSqeM2qN1xzybapC8G4wEGGkZwyTDt1v"
FEE_DESTINATION = "GqkJ3UoKTScvXiaJUxrGJ9QD847LAj2DTvMzqjaT2tJm"
BLINK_TREE = "FbdosWezrACU94Vuw9ZL8UJaj4wzthXxB3ZgiKf7F5N8"


class AssetStrategy(str, Enum):
    PROMPT = "prompt"  # generate an image from a text prompt
    HANDLE = "handle"  # fetch the profile photo of a social handle


class ProductConfig(BaseModel):
    """Static description of one mint action variant"""

    model_config = ConfigDict(frozen=True)

    key: str
    title: str
    description: str
    label: str
    icon_path: str

    # Discovery form
    action_label: str
    parameter_name: str
    parameter_label: str

    # Asset
    asset_strategy: AssetStrategy
    default_subject: str
    profile_photo_url: str = "https://unavatar.io/x/{handle}"
    asset_filename: str = "image.png"

    # Metadata
    symbol: str
    seller_fee_basis_points: int = Field(500, ge=0, le=10_000)

    # Compressed mint
    merkle_tree: str = BLINK_TREE
    collection_address: Optional[str] = None
    max_supply: int = 1
    priority_fee: int = 100
    is_mutable: bool = True

    # Fee transfer appended after the mint instructions
    fee_mint: str = USDC_MINT
    fee_amount: int = Field(1_000_000, ge=0)
    fee_destination: str = FEE_DESTINATION


PRODUCTS: Dict[str, ProductConfig] = {
    "blinkpic": ProductConfig(
        key="blinkpic",
        title="BlinkPic",
        description="Generate a BlinkPic from your X PFP",
        label="Generate BlinkPic",
        icon_path="/static/blink.png",
        action_label="Enter your X username",
        parameter_name="username",
        parameter_label="X Username",
        asset_strategy=AssetStrategy.HANDLE,
        default_subject="vrajdesai78",
        asset_filename="blinkpic.png",
        symbol="BLP",
    ),
    "pixlink": ProductConfig(
        key="pixlink",
        title="PixLink",
        description="Generate a PixLink NFT from your own prompt",
        label="Generate PixLink",
        icon_path="/static/pixlink.png",
        action_label="Describe your image",
        parameter_name="prompt",
        parameter_label="Prompt",
        asset_strategy=AssetStrategy.PROMPT,
        default_subject="A pixel art portrait of a friendly robot waving hello",
        asset_filename="pixlink.png",
        symbol="PXL",
    ),
    "blinkart": ProductConfig(
        key="blinkart",
        title="BlinkArt",
        description="Turn a line of text into a one-of-one BlinkArt NFT",
        label="Generate BlinkArt",
        icon_path="/static/blinkart.png",
        action_label="What should we paint?",
        parameter_name="prompt",
        parameter_label="Prompt",
        asset_strategy=AssetStrategy.PROMPT,
        default_subject="An impressionist painting of a lighthouse at dawn",
        asset_filename="blinkart.png",
        symbol="BLA",
    ),
}


def get_product_config(key: str) -> ProductConfig:
    try:
        return PRODUCTS[key.lower()]
    except KeyError:
        raise ValueError(
            f"Unknown product '{key}', expected one of: {', '.join(sorted(PRODUCTS))}"
        ) from None
