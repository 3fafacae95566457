import logging
from dataclasses import dataclass

from solana.rpc.async_api import AsyncClient
from solana.rpc.commitment import Confirmed
from solders.hash import Hash
from solders.keypair import Keypair
from solders.pubkey import Pubkey
from solders.transaction import Transaction

from blinkmint.core.errors import ExpiryAnchorFailure

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class ExpiryAnchor:
    blockhash: Hash
    last_valid_block_height: int


class SolanaService:
    def __init__(self, client: AsyncClient):
        self.client = client

    @classmethod
    def from_url(cls, rpc_url: str, timeout: float = 30.0) -> "SolanaService":
        return cls(AsyncClient(rpc_url, commitment=Confirmed, timeout=timeout))

    async def latest_expiry_anchor(self) -> ExpiryAnchor:
        """Fetch a fresh blockhash and the last block height it is valid for"""
        try:
            resp = await self.client.get_latest_blockhash(commitment=Confirmed)
            value = resp.value
            anchor = ExpiryAnchor(
                blockhash=value.blockhash,
                last_valid_block_height=value.last_valid_block_height,
            )
        except Exception as exc:  # noqa: BLE001
            raise ExpiryAnchorFailure(f"getLatestBlockhash failed: {exc}") from exc

        logger.debug(
            "Expiry anchor %s valid until height %d",
            anchor.blockhash,
            anchor.last_valid_block_height,
        )
        return anchor

    async def close(self) -> None:
        await self.client.close()


class CustodialSigner:
    """
    Service-held key that co-signs mint transactions.

    Signing only reads the keypair, so one instance is shared by all requests.
    """

    def __init__(self, keypair: Keypair):
        self._keypair = keypair

    @property
    def pubkey(self) -> Pubkey:
        return self._keypair.pubkey()

    def co_sign(self, transaction: Transaction, blockhash: Hash) -> None:
        transaction.partial_sign([self._keypair], blockhash)

    def __repr__(self) -> str:
        return f"CustodialSigner(pubkey={self.pubkey})"
