# blinkmint/shared/shyft_client.py
import logging
from typing import Any, Dict, Optional

import httpx

logger = logging.getLogger(__name__)

SHYFT_BASE = "https://api.shyft.to/sol/v1"


class ShyftClient:
    """Thin async wrapper over the Shyft REST API (compressed NFT endpoints)"""

    def __init__(
        self,
        api_key: str,
        http_client: httpx.AsyncClient,
        network: str = "mainnet-beta",
        base_url: str = SHYFT_BASE,
    ):
        self._api_key = api_key
        self._http = http_client
        self.network = network
        self.base_url = base_url.rstrip("/")

    def _headers(self) -> Dict[str, str]:
        return {"x-api-key": self._api_key, "Content-Type": "application/json"}

    async def mint_compressed_nft(
        self,
        *,
        creator_wallet: str,
        merkle_tree: str,
        metadata_uri: str,
        fee_payer: str,
        receiver: str,
        max_supply: int = 1,
        priority_fee: int = 100,
        is_mutable: bool = True,
        collection_address: Optional[str] = None,
    ) -> Dict[str, Any]:
        """
        Request an unsigned compressed NFT mint transaction.

        Returns the decoded JSON body, e.g.
        ``{"success": true, "result": {"encoded_transaction": "...", "mint": "..."}}``
        """
        url = f"{self.base_url}/nft/compressed/mint"
        payload: Dict[str, Any] = {
            "network": self.network,
            "creator_wallet": creator_wallet,
            "merkle_tree": merkle_tree,
            "metadata_uri": metadata_uri,
            "max_supply": max_supply,
            "primary_sale_happen": False,
            "is_mutable": is_mutable,
            "receiver": receiver,
            "fee_payer": fee_payer,
            "priority_fee": priority_fee,
        }
        if collection_address:
            payload["collection_address"] = collection_address

        logger.info("Requesting compressed mint on tree %s for %s", merkle_tree, receiver)

        resp = await self._http.post(url, headers=self._headers(), json=payload)
        resp.raise_for_status()
        return resp.json()
