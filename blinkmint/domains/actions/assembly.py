import base64
import logging
from dataclasses import dataclass
from typing import List

from solders.instruction import AccountMeta, Instruction
from solders.message import Message
from solders.pubkey import Pubkey
from solders.transaction import Transaction
from spl.token.constants import TOKEN_PROGRAM_ID
from spl.token.instructions import TransferParams, get_associated_token_address, transfer

from blinkmint.core.errors import AssemblyFailure
from blinkmint.core.products import ProductConfig
from blinkmint.shared.solana import CustodialSigner, ExpiryAnchor, SolanaService

from .minting import MintFragment

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class ComposedTransaction:
    transaction: Transaction
    anchor: ExpiryAnchor

    def to_base64(self) -> str:
        return base64.b64encode(bytes(self.transaction)).decode("ascii")


def decompile_instructions(message: Message) -> List[Instruction]:
    """Rebuild full instructions from a compiled legacy message"""
    header = message.header
    keys = message.account_keys
    signed = header.num_required_signatures
    writable_signed = signed - header.num_readonly_signed_accounts
    writable_unsigned_end = len(keys) - header.num_readonly_unsigned_accounts

    def meta(index: int) -> AccountMeta:
        if index < signed:
            writable = index < writable_signed
        else:
            writable = index < writable_unsigned_end
        return AccountMeta(keys[index], is_signer=index < signed, is_writable=writable)

    instructions = []
    for compiled in message.instructions:
        accounts = [meta(i) for i in compiled.accounts]
        instructions.append(
            Instruction(keys[compiled.program_id_index], bytes(compiled.data), accounts)
        )
    return instructions


def fee_transfer_instruction(payer: Pubkey, product: ProductConfig) -> Instruction:
    mint = Pubkey.from_string(product.fee_mint)
    source = get_associated_token_address(payer, mint)
    dest = get_associated_token_address(Pubkey.from_string(product.fee_destination), mint)
    return transfer(
        TransferParams(
            program_id=TOKEN_PROGRAM_ID,
            source=source,
            dest=dest,
            owner=payer,
            amount=product.fee_amount,
        )
    )


class TransactionAssembler:
    def __init__(self, solana: SolanaService, signer: CustodialSigner, product: ProductConfig):
        self.solana = solana
        self.signer = signer
        self.product = product

    def compose_instructions(self, fragment: MintFragment, payer: Pubkey) -> List[Instruction]:
        if not isinstance(fragment, MintFragment) or not isinstance(fragment.transaction, Transaction):
            raise AssemblyFailure("mint fragment was not decoded before assembly")

        instructions = decompile_instructions(fragment.transaction.message)
        instructions.append(fee_transfer_instruction(payer, self.product))

        signers = {payer}
        for ix in instructions:
            signers.update(m.pubkey for m in ix.accounts if m.is_signer)
        if self.signer.pubkey not in signers:
            raise AssemblyFailure(f"custodial key {self.signer.pubkey} is not a signer of the mint")
        unknown = signers - {payer, self.signer.pubkey}
        if unknown:
            raise AssemblyFailure(f"mint requires signatures nobody can provide: {sorted(map(str, unknown))}")
        return instructions

    async def assemble(self, fragment: MintFragment, payer: Pubkey) -> ComposedTransaction:
        instructions = self.compose_instructions(fragment, payer)

        # Fetched last so the blockhash is as fresh as possible
        anchor = await self.solana.latest_expiry_anchor()

        message = Message.new_with_blockhash(instructions, payer, anchor.blockhash)
        transaction = Transaction.new_unsigned(message)
        self.signer.co_sign(transaction, anchor.blockhash)

        logger.info(
            "Assembled %d instruction(s) for %s, blockhash %s valid until %d",
            len(instructions),
            payer,
            anchor.blockhash,
            anchor.last_valid_block_height,
        )
        return ComposedTransaction(transaction=transaction, anchor=anchor)
