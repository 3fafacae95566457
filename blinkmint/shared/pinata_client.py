# blinkmint/shared/pinata_client.py
import json
import logging
from typing import Any, Dict, Optional

import httpx

logger = logging.getLogger(__name__)

PINATA_BASE = "https://api.pinata.cloud/pinning"


class PinataClient:
    def __init__(self, jwt: str, http_client: httpx.AsyncClient, base_url: str = PINATA_BASE):
        self._jwt = jwt
        self._http = http_client
        self.base_url = base_url.rstrip("/")

    def _auth_headers(self) -> Dict[str, str]:
        # JWT auth
        return {
            "Authorization": f"Bearer {self._jwt}",
        }

    async def pin_file_to_ipfs(
        self,
        file_bytes: bytes,
        filename: str,
        content_type: Optional[str] = None,
        metadata: Optional[Dict[str, Any]] = None,
    ) -> Dict[str, Any]:
        """
        Pinata pinFileToIPFS
        """
        url = f"{self.base_url}/pinFileToIPFS"
        if content_type:
            files = {"file": (filename, file_bytes, content_type)}
        else:
            files = {"file": (filename, file_bytes)}
        if metadata:
            files["pinataMetadata"] = (None, json.dumps(metadata), "application/json")

        logger.info("Pinning file to IPFS: %s (%d bytes)", filename, len(file_bytes))

        resp = await self._http.post(url, headers=self._auth_headers(), files=files)
        resp.raise_for_status()
        return resp.json()  # { IpfsHash, PinSize, Timestamp }

    async def pin_json_to_ipfs(
        self, json_obj: Dict[str, Any], name: Optional[str] = None
    ) -> Dict[str, Any]:
        """
        Pinata pinJSONToIPFS
        """
        url = f"{self.base_url}/pinJSONToIPFS"
        payload = {
            "pinataContent": json_obj,
        }
        if name:
            payload["pinataMetadata"] = {"name": name}

        headers = {**self._auth_headers(), "Content-Type": "application/json"}

        logger.info("Pinning JSON to IPFS: %s", name or "<unnamed>")

        resp = await self._http.post(url, headers=headers, json=payload)
        resp.raise_for_status()
        return resp.json()  # { IpfsHash, PinSize, Timestamp }
