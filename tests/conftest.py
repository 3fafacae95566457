"""Shared pytest fixtures for blinkmint tests.

Every outside collaborator (image generation, Pinata, Shyft, Solana RPC) is
replaced by an in-memory fake that counts its calls. The pipeline classes
themselves are the real ones.
"""

import base64
from typing import Any, Dict, List, Optional

import pytest
from fastapi.testclient import TestClient
from solders.hash import Hash
from solders.instruction import AccountMeta, Instruction
from solders.keypair import Keypair
from solders.message import Message
from solders.pubkey import Pubkey
from solders.transaction import Transaction

from blinkmint.core.config import Settings
from blinkmint.core.products import ProductConfig, get_product_config
from blinkmint.domains.actions.assembly import TransactionAssembler
from blinkmint.domains.actions.generation import AssetRecord
from blinkmint.domains.actions.minting import MintOrchestrator
from blinkmint.domains.actions.pinning import ContentPinner
from blinkmint.domains.actions.service import MintActionService
from blinkmint.main import create_app
from blinkmint.shared.solana import CustodialSigner, ExpiryAnchor

GATEWAY = "https://ipfs.example/ipfs"
MINT_PROGRAM = Pubkey.from_string("BGUMAp9Gq7iTEuizy4pqaxsTyUCBK68MDfK752saRPUY")
MERKLE_TREE = Pubkey.from_string("FbdosWezrACU94Vuw9ZL8UJaj4wzthXxB3ZgiKf7F5N8")


def build_fragment(payer: Pubkey, creator: Pubkey, extra_signer: Optional[Pubkey] = None) -> str:
    """Encode a one-instruction legacy transaction shaped like a compressed mint"""
    accounts = [
        AccountMeta(payer, is_signer=True, is_writable=True),
        AccountMeta(MERKLE_TREE, is_signer=False, is_writable=True),
        AccountMeta(creator, is_signer=True, is_writable=False),
    ]
    if extra_signer is not None:
        accounts.append(AccountMeta(extra_signer, is_signer=True, is_writable=False))
    ix = Instruction(MINT_PROGRAM, bytes([1, 2, 3, 4]), accounts)
    message = Message.new_with_blockhash([ix], payer, Hash.default())
    return base64.b64encode(bytes(Transaction.new_unsigned(message))).decode()


# ---------------------------------------------------------------------------
# Fake collaborators.
# ---------------------------------------------------------------------------


class FakeGenerator:
    def __init__(self):
        self.calls: List[str] = []

    async def generate(self, source: str) -> AssetRecord:
        self.calls.append(source)
        return AssetRecord(content=b"\x89PNG fake", content_type="image/png", filename="pixlink.png")


class FakePinata:
    def __init__(self, file_hash: str = "QmImageHash", json_hash: str = "QmMetadataHash"):
        self.file_hash = file_hash
        self.json_hash = json_hash
        self.files: List[Dict[str, Any]] = []
        self.documents: List[Dict[str, Any]] = []

    @property
    def calls(self) -> int:
        return len(self.files) + len(self.documents)

    async def pin_file_to_ipfs(self, file_bytes, filename, content_type=None, metadata=None):
        self.files.append({"bytes": file_bytes, "filename": filename, "content_type": content_type})
        return {"IpfsHash": self.file_hash, "PinSize": len(file_bytes)}

    async def pin_json_to_ipfs(self, json_obj, name=None):
        self.documents.append(json_obj)
        return {"IpfsHash": self.json_hash}


class FakeShyft:
    def __init__(self, extra_signer: Optional[Pubkey] = None):
        self.requests: List[Dict[str, Any]] = []
        self.extra_signer = extra_signer
        self.response: Optional[Dict[str, Any]] = None

    async def mint_compressed_nft(self, **kwargs):
        self.requests.append(kwargs)
        if self.response is not None:
            return self.response
        encoded = build_fragment(
            Pubkey.from_string(kwargs["fee_payer"]),
            Pubkey.from_string(kwargs["creator_wallet"]),
            self.extra_signer,
        )
        return {"success": True, "result": {"encoded_transaction": encoded}}


class FakeSolana:
    def __init__(self):
        self.anchors: List[ExpiryAnchor] = []

    async def latest_expiry_anchor(self) -> ExpiryAnchor:
        anchor = ExpiryAnchor(blockhash=Hash.new_unique(), last_valid_block_height=1000 + len(self.anchors))
        self.anchors.append(anchor)
        return anchor


# ---------------------------------------------------------------------------
# Fixtures.
# ---------------------------------------------------------------------------


@pytest.fixture
def custodial_keypair() -> Keypair:
    return Keypair.from_seed(bytes([7] * 32))


@pytest.fixture
def caller_keypair() -> Keypair:
    return Keypair.from_seed(bytes([9] * 32))


@pytest.fixture
def signer(custodial_keypair: Keypair) -> CustodialSigner:
    return CustodialSigner(custodial_keypair)


@pytest.fixture
def product() -> ProductConfig:
    return get_product_config("pixlink")


@pytest.fixture
def test_settings() -> Settings:
    return Settings(product="pixlink", ipfs_gateway=GATEWAY, base_url=None, _env_file=None)


@pytest.fixture
def generator() -> FakeGenerator:
    return FakeGenerator()


@pytest.fixture
def pinata() -> FakePinata:
    return FakePinata()


@pytest.fixture
def shyft() -> FakeShyft:
    return FakeShyft()


@pytest.fixture
def solana_rpc() -> FakeSolana:
    return FakeSolana()


@pytest.fixture
def mint_service(product, generator, pinata, shyft, solana_rpc, signer) -> MintActionService:
    return MintActionService(
        product=product,
        generator=generator,
        pinner=ContentPinner(pinata, GATEWAY),
        minter=MintOrchestrator(shyft, product, signer.pubkey),
        assembler=TransactionAssembler(solana_rpc, signer, product),
    )


@pytest.fixture
def test_client(test_settings, mint_service, pinata) -> TestClient:
    app = create_app(test_settings, mint_service=mint_service, pinata=pinata)
    return TestClient(app)
