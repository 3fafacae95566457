import base64
import binascii
import logging
from dataclasses import dataclass

import httpx
from solders.pubkey import Pubkey
from solders.transaction import Transaction

from blinkmint.core.errors import MintDecodeFailure, MintRequestFailure
from blinkmint.core.products import ProductConfig
from blinkmint.shared.shyft_client import ShyftClient

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class MintFragment:
    transaction: Transaction
    encoded: str


def decode_fragment(encoded: str) -> MintFragment:
    try:
        raw = base64.b64decode(encoded, validate=True)
    except (binascii.Error, ValueError) as exc:
        raise MintRequestFailure(f"encoded_transaction is not base64: {exc}") from exc

    try:
        transaction = Transaction.from_bytes(raw)
    except Exception as exc:  # noqa: BLE001
        raise MintDecodeFailure(f"mint fragment is not a transaction: {exc}") from exc

    if not transaction.message.instructions:
        raise MintDecodeFailure("mint fragment has no instructions")
    return MintFragment(transaction=transaction, encoded=encoded)


class MintOrchestrator:
    def __init__(self, shyft: ShyftClient, product: ProductConfig, creator_wallet: Pubkey):
        self.shyft = shyft
        self.product = product
        self.creator_wallet = creator_wallet

    async def request_fragment(self, metadata_uri: str, recipient: Pubkey) -> MintFragment:
        """
        Ask the mint service for a one-of-one compressed NFT transaction.

        The recipient pays the fees and receives the token.
        """
        try:
            body = await self.shyft.mint_compressed_nft(
                creator_wallet=str(self.creator_wallet),
                merkle_tree=self.product.merkle_tree,
                collection_address=self.product.collection_address,
                metadata_uri=metadata_uri,
                fee_payer=str(recipient),
                receiver=str(recipient),
                max_supply=self.product.max_supply,
                priority_fee=self.product.priority_fee,
                is_mutable=self.product.is_mutable,
            )
        except (httpx.HTTPError, ValueError) as exc:
            raise MintRequestFailure(f"mint request failed: {exc}") from exc

        if not isinstance(body, dict) or not body.get("success"):
            message = body.get("message") if isinstance(body, dict) else body
            raise MintRequestFailure(f"mint request rejected: {message}")

        encoded = (body.get("result") or {}).get("encoded_transaction")
        if not encoded or not isinstance(encoded, str):
            raise MintRequestFailure("mint response has no encoded_transaction")

        fragment = decode_fragment(encoded)
        logger.info(
            "Mint fragment for %s carries %d instruction(s)",
            recipient,
            len(fragment.transaction.message.instructions),
        )
        return fragment
