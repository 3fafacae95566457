from typing import Any, Dict, Optional

from fastapi.responses import JSONResponse
from pydantic import BaseModel

ACTION_VERSION = "2.1.3"

# CAIP-2 ids per Solana cluster
BLOCKCHAIN_IDS = {
    "mainnet-beta": "solana:5eykt4UsFv8P8NJdTREpY1vzqKqZKvdp",
    "devnet": "solana:EtWTRABZaYq6iMfeYKouRu166VU2xqa1",
    "testnet": "solana:4uhcVJyU9pJkvQyS88uRDiswHXSCkY3z",
}


def blockchain_id(network: str) -> str:
    try:
        return BLOCKCHAIN_IDS[network]
    except KeyError:
        raise ValueError(
            f"Unknown solana network '{network}', expected one of: {', '.join(BLOCKCHAIN_IDS)}"
        ) from None


def actions_cors_headers(network: str = "mainnet-beta") -> Dict[str, str]:
    return {
        "Access-Control-Allow-Origin": "*",
        "Access-Control-Allow-Methods": "GET,POST,PUT,OPTIONS",
        "Access-Control-Allow-Headers": (
            "Content-Type, Authorization, Content-Encoding, Accept-Encoding, "
            "X-Accept-Action-Version, X-Accept-Blockchain-Ids"
        ),
        "Access-Control-Expose-Headers": "X-Action-Version, X-Blockchain-Ids",
        "X-Action-Version": ACTION_VERSION,
        "X-Blockchain-Ids": blockchain_id(network),
    }


class ActionErrorBody(BaseModel):
    message: str


def action_response(
    payload: Any, status_code: int = 200, headers: Optional[Dict[str, str]] = None
) -> JSONResponse:
    if isinstance(payload, BaseModel):
        payload = payload.model_dump(exclude_none=True)
    return JSONResponse(
        content=payload,
        status_code=status_code,
        headers=headers if headers is not None else actions_cors_headers(),
    )


def action_error(
    message: Optional[str], status_code: int = 400, headers: Optional[Dict[str, str]] = None
) -> JSONResponse:
    return action_response(
        ActionErrorBody(message=message or "An unknown error occurred"), status_code, headers
    )
