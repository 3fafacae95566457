import logging
from dataclasses import dataclass
from typing import Any, Dict, Optional

import httpx
from pydantic import ValidationError

from blinkmint.core.errors import PinningFailure
from blinkmint.core.products import ProductConfig
from blinkmint.shared.pinata_client import PinataClient

from .generation import AssetRecord
from .schemas import Creator, MetadataDocument, MetadataFile, MetadataProperties

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class PinnedContent:
    image_uri: str
    metadata_uri: str
    metadata: MetadataDocument


def _ipfs_hash(result: Optional[Dict[str, Any]], what: str) -> str:
    cid = (result or {}).get("IpfsHash")
    if not cid or not isinstance(cid, str):
        raise PinningFailure(f"pinning {what} returned no IpfsHash: {result}")
    return cid


def build_metadata(product: ProductConfig, image_uri: str, content_type: str, creator: str) -> MetadataDocument:
    try:
        return MetadataDocument(
            name=product.title,
            description=f"{product.title} NFT",
            symbol=product.symbol,
            image=image_uri,
            seller_fee_basis_points=product.seller_fee_basis_points,
            properties=MetadataProperties(
                files=[MetadataFile(uri=image_uri, type=content_type)],
                creators=[Creator(address=creator, share=100)],
            ),
        )
    except ValidationError as exc:
        raise PinningFailure(f"invalid metadata document: {exc}") from exc


class ContentPinner:
    """
    Pins the asset, then the metadata document that points at it.

    When ``relay_base_url`` is set the asset goes through the relay endpoint
    (``POST {relay_base_url}/files``) instead of straight to Pinata.
    """

    def __init__(
        self,
        pinata: PinataClient,
        gateway: str,
        http_client: Optional[httpx.AsyncClient] = None,
        relay_base_url: Optional[str] = None,
    ):
        self.pinata = pinata
        self.gateway = gateway.rstrip("/")
        self.http_client = http_client
        self.relay_base_url = relay_base_url.rstrip("/") if relay_base_url else None

    def gateway_uri(self, cid: str) -> str:
        return f"{self.gateway}/{cid}"

    async def _pin_via_relay(self, asset: AssetRecord) -> Dict[str, Any]:
        files = {"file": (asset.filename, asset.content, asset.content_type)}
        resp = await self.http_client.post(f"{self.relay_base_url}/files", files=files)
        resp.raise_for_status()
        return resp.json()

    async def pin_asset(self, asset: AssetRecord) -> str:
        try:
            if self.relay_base_url and self.http_client is not None:
                result = await self._pin_via_relay(asset)
            else:
                result = await self.pinata.pin_file_to_ipfs(
                    asset.content,
                    asset.filename,
                    content_type=asset.content_type,
                    metadata={"name": asset.filename},
                )
        except (httpx.HTTPError, ValueError) as exc:
            raise PinningFailure(f"pinning asset failed: {exc}") from exc
        return self.gateway_uri(_ipfs_hash(result, "asset"))

    async def pin_metadata(self, document: MetadataDocument) -> str:
        try:
            result = await self.pinata.pin_json_to_ipfs(document.model_dump(), name=document.name)
        except (httpx.HTTPError, ValueError) as exc:
            raise PinningFailure(f"pinning metadata failed: {exc}") from exc
        return self.gateway_uri(_ipfs_hash(result, "metadata"))

    async def pin(self, asset: AssetRecord, product: ProductConfig, creator: str) -> PinnedContent:
        image_uri = await self.pin_asset(asset)
        logger.info("Pinned asset at %s", image_uri)

        metadata = build_metadata(product, image_uri, asset.content_type, creator)
        metadata_uri = await self.pin_metadata(metadata)
        logger.info("Pinned metadata at %s", metadata_uri)

        return PinnedContent(image_uri=image_uri, metadata_uri=metadata_uri, metadata=metadata)
