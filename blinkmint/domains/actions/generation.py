import logging
from dataclasses import dataclass
from typing import Protocol

import httpx
from openai import AsyncOpenAI, OpenAIError

from blinkmint.core.errors import GenerationFailure
from blinkmint.core.products import AssetStrategy, ProductConfig

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class AssetRecord:
    content: bytes
    content_type: str
    filename: str


class AssetGenerator(Protocol):
    async def generate(self, source: str) -> AssetRecord: ...


async def fetch_asset(http_client: httpx.AsyncClient, url: str, filename: str) -> AssetRecord:
    """Download ``url`` into memory so nothing downstream depends on it"""
    try:
        resp = await http_client.get(url, follow_redirects=True)
    except httpx.HTTPError as exc:
        raise GenerationFailure(f"fetching {url} failed: {exc}") from exc

    if not resp.is_success:
        raise GenerationFailure(f"fetching {url} returned HTTP {resp.status_code}")
    if not resp.content:
        raise GenerationFailure(f"fetching {url} returned an empty body")

    content_type = resp.headers.get("content-type", "image/png").split(";")[0].strip()
    return AssetRecord(content=resp.content, content_type=content_type, filename=filename)


class PromptImageGenerator:
    def __init__(
        self,
        openai_client: AsyncOpenAI,
        http_client: httpx.AsyncClient,
        filename: str = "image.png",
        model: str = "dall-e-3",
        size: str = "1024x1024",
    ):
        self.openai_client = openai_client
        self.http_client = http_client
        self.filename = filename
        self.model = model
        self.size = size

    async def generate(self, source: str) -> AssetRecord:
        if not source:
            raise GenerationFailure("empty prompt")

        try:
            response = await self.openai_client.images.generate(
                model=self.model,
                prompt=source,
                n=1,
                size=self.size,
            )
        except OpenAIError as exc:
            raise GenerationFailure(f"image generation failed: {exc}") from exc

        image_url = response.data[0].url if response.data else None
        if not image_url:
            raise GenerationFailure("image generation returned no url")
        logger.debug("Generated image with %s", self.model)

        # The generated URL expires quickly, so it is only read here
        return await fetch_asset(self.http_client, image_url, self.filename)


class ProfilePhotoFetcher:
    def __init__(self, http_client: httpx.AsyncClient, filename: str = "image.png"):
        self.http_client = http_client
        self.filename = filename

    async def generate(self, source: str) -> AssetRecord:
        return await fetch_asset(self.http_client, source, self.filename)


def build_asset_generator(
    product: ProductConfig,
    http_client: httpx.AsyncClient,
    openai_client: AsyncOpenAI,
    model: str = "dall-e-3",
    size: str = "1024x1024",
) -> AssetGenerator:
    if product.asset_strategy == AssetStrategy.HANDLE:
        return ProfilePhotoFetcher(http_client, filename=product.asset_filename)
    return PromptImageGenerator(
        openai_client,
        http_client,
        filename=product.asset_filename,
        model=model,
        size=size,
    )
