import logging
from dataclasses import dataclass
from typing import Dict

import httpx
from fastapi import Request
from openai import AsyncOpenAI

from blinkmint.core.config import Settings
from blinkmint.core.products import ProductConfig
from blinkmint.core.secrets import load_custodial_keypair
from blinkmint.domains.actions.assembly import TransactionAssembler
from blinkmint.domains.actions.generation import build_asset_generator
from blinkmint.domains.actions.minting import MintOrchestrator
from blinkmint.domains.actions.pinning import ContentPinner
from blinkmint.domains.actions.service import MintActionService
from blinkmint.shared.pinata_client import PinataClient
from blinkmint.shared.shyft_client import ShyftClient
from blinkmint.shared.solana import CustodialSigner, SolanaService

logger = logging.getLogger(__name__)


@dataclass
class Collaborators:
    """Process-wide clients, built once at startup and shared by all requests"""

    http_client: httpx.AsyncClient
    openai_client: AsyncOpenAI
    pinata: PinataClient
    shyft: ShyftClient
    solana: SolanaService
    signer: CustodialSigner

    async def aclose(self) -> None:
        await self.solana.close()
        await self.openai_client.close()
        await self.http_client.aclose()


def build_collaborators(settings: Settings) -> Collaborators:
    signer = CustodialSigner(load_custodial_keypair(settings))
    http_client = httpx.AsyncClient(timeout=settings.http_timeout)
    return Collaborators(
        http_client=http_client,
        openai_client=AsyncOpenAI(
            api_key=settings.openai_key.get_secret_value(), max_retries=0
        ),
        pinata=PinataClient(
            settings.pinata_jwt.get_secret_value(), http_client, base_url=settings.pinata_api_url
        ),
        shyft=ShyftClient(
            settings.shyft_api_key.get_secret_value(),
            http_client,
            network=settings.solana_network,
            base_url=settings.shyft_api_url,
        ),
        solana=SolanaService.from_url(settings.solana_rpc_url, timeout=settings.http_timeout),
        signer=signer,
    )


def build_mint_service(
    settings: Settings, product: ProductConfig, collaborators: Collaborators
) -> MintActionService:
    return MintActionService(
        product=product,
        generator=build_asset_generator(
            product,
            collaborators.http_client,
            collaborators.openai_client,
            model=settings.openai_image_model,
            size=settings.openai_image_size,
        ),
        pinner=ContentPinner(
            collaborators.pinata,
            settings.ipfs_gateway,
            http_client=collaborators.http_client,
            relay_base_url=settings.base_url,
        ),
        minter=MintOrchestrator(collaborators.shyft, product, collaborators.signer.pubkey),
        assembler=TransactionAssembler(collaborators.solana, collaborators.signer, product),
    )


# FastAPI dependencies
def get_product(request: Request) -> ProductConfig:
    return request.app.state.product


def get_mint_service(request: Request) -> MintActionService:
    return request.app.state.mint_service


def get_pinata(request: Request) -> PinataClient:
    return request.app.state.pinata


def get_cors_headers(request: Request) -> Dict[str, str]:
    return request.app.state.cors_headers
