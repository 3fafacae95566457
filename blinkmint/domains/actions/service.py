import logging

from solders.pubkey import Pubkey

from blinkmint.core.products import ProductConfig

from .assembly import TransactionAssembler
from .generation import AssetGenerator
from .minting import MintOrchestrator
from .pinning import ContentPinner
from .schemas import ActionPostResponse
from .validation import ActionQuery

logger = logging.getLogger(__name__)


class MintActionService:
    def __init__(
        self,
        product: ProductConfig,
        generator: AssetGenerator,
        pinner: ContentPinner,
        minter: MintOrchestrator,
        assembler: TransactionAssembler,
    ):
        self.product = product
        self.generator = generator
        self.pinner = pinner
        self.minter = minter
        self.assembler = assembler

    async def execute(self, query: ActionQuery, account: Pubkey) -> ActionPostResponse:
        """
        Generate, pin, mint and assemble for one validated request.

        Each step needs the previous step's output, so they run one after
        another. Any ``ActionError`` aborts the whole request.
        """
        logger.info("%s mint for %s (subject=%r)", self.product.title, account, query.subject)

        asset = await self.generator.generate(query.asset_source)
        logger.info("Generated %s asset (%d bytes)", asset.content_type, len(asset.content))

        pinned = await self.pinner.pin(asset, self.product, creator=str(account))

        fragment = await self.minter.request_fragment(pinned.metadata_uri, account)

        composed = await self.assembler.assemble(fragment, account)

        return ActionPostResponse(
            transaction=composed.to_base64(),
            message=f"Minted {self.product.title} for {query.subject}",
        )
