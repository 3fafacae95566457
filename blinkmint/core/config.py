import os
from typing import Optional

from pydantic import SecretStr
from pydantic_settings import BaseSettings


class Settings(BaseSettings):
    app_name: str = "Blink Mint Actions API"
    app_version: str = "1.0.0"
    app_description: str = "Solana action endpoints that mint generated images as compressed NFTs"
    log_level: str = os.getenv("LOG_LEVEL", "INFO")

    # Product variant served by this process
    product: str = os.getenv("PRODUCT", "pixlink")

    # Pinata
    pinata_jwt: SecretStr = SecretStr(os.getenv("PINATA_JWT", ""))
    pinata_api_url: str = "https://api.pinata.cloud/pinning"
    ipfs_gateway: str = "https://ipfs.moralis.io:2053/ipfs"

    # OpenAI
    openai_key: SecretStr = SecretStr(os.getenv("OPENAI_KEY", ""))
    openai_image_model: str = "dall-e-3"
    openai_image_size: str = "1024x1024"

    # Shyft
    shyft_api_key: SecretStr = SecretStr(os.getenv("SHYFT_API_KEY", ""))
    shyft_api_url: str = "https://api.shyft.to/sol/v1"

    # Solana
    solana_network: str = "mainnet-beta"
    solana_rpc_url: str = os.getenv("SOLANA_RPC_URL", "https://api.mainnet-beta.solana.com")
    custodial_secret_key: SecretStr = SecretStr(os.getenv("CUSTODIAL_SECRET_KEY", ""))

    # Asset relay (POST {base_url}/files); empty means pin directly
    base_url: Optional[str] = os.getenv("BASE_URL") or None

    http_timeout: float = 60.0

    class Config:
        env_file = ".env"


settings = Settings()
