import logging

from solders.keypair import Keypair

from blinkmint.core.config import Settings

logger = logging.getLogger(__name__)


def load_custodial_keypair(settings: Settings) -> Keypair:
    """
    Decode the custodial signing key (base58 encoded 64 byte secret).

    This is the only place the secret is read. The error never echoes it.
    """
    secret = settings.custodial_secret_key.get_secret_value()
    if not secret:
        raise RuntimeError("custodial_secret_key is not configured")
    try:
        keypair = Keypair.from_base58_string(secret)
    except Exception:  # noqa: BLE001
        raise RuntimeError("custodial_secret_key is not a valid base58 keypair") from None
    logger.info("Loaded custodial signer %s", keypair.pubkey())
    return keypair
