"""Verification transaction envelope built for simulation only."""

from __future__ import annotations

import base64
from dataclasses import dataclass

from solders.compute_budget import set_compute_unit_limit, set_compute_unit_price
from solders.hash import Hash
from solders.instruction import Instruction
from solders.keypair import Keypair
from solders.message import Message
from solders.pubkey import Pubkey
from solders.transaction import Transaction

from core.config import MAX_COMPUTE_UNIT_LIMIT, MAX_COMPUTE_UNIT_PRICE
from core.errors import InvalidConfigValue, InvalidProgramIdentifier
from schemas.internal.simulation import AccountStats, EnvelopeStats, SimulationRequest

_BASE58_ALPHABET = frozenset("123456789ABCDEFGHJKLMNPQRSTUVWXYZabcdefghijkmnopqrstuvwxyz")
_PUBKEY_MAX_CHARS = 44


def parse_program_id(value: str) -> Pubkey:
    """Validate a base58 program address without touching the network."""
    text = value.strip()
    if not text:
        raise InvalidProgramIdentifier(value, "program id cannot be empty")
    if len(text) > _PUBKEY_MAX_CHARS:
        raise InvalidProgramIdentifier(value, "too long for a 32-byte public key")
    invalid = sorted(set(text) - _BASE58_ALPHABET)
    if invalid:
        raise InvalidProgramIdentifier(value, f"invalid base58 characters: {''.join(invalid)}")
    try:
        return Pubkey.from_string(text)
    except ValueError as exc:
        raise InvalidProgramIdentifier(value, str(exc)) from exc


@dataclass(frozen=True)
class VerificationEnvelope:
    transaction: Transaction
    program_id: Pubkey

    @property
    def message(self) -> Message:
        return self.transaction.message

    def to_base64(self) -> str:
        return base64.b64encode(bytes(self.transaction)).decode("ascii")

    def stats(self) -> EnvelopeStats:
        message = self.message
        header = message.header
        return EnvelopeStats(
            transaction_size=len(bytes(self.transaction)),
            message_size=len(bytes(message)),
            num_signatures=max(len(self.transaction.signatures), 1),
            accounts=AccountStats(
                total_accounts=len(message.account_keys),
                num_required_signatures=header.num_required_signatures,
                readonly_signed_accounts=header.num_readonly_signed_accounts,
                readonly_unsigned_accounts=header.num_readonly_unsigned_accounts,
            ),
        )


def _check_budget(request: SimulationRequest) -> None:
    if not 0 <= request.compute_unit_limit <= MAX_COMPUTE_UNIT_LIMIT:
        raise InvalidConfigValue(
            f"Compute unit limit {request.compute_unit_limit} is outside 0..{MAX_COMPUTE_UNIT_LIMIT}"
        )
    if not 0 <= request.compute_unit_price <= MAX_COMPUTE_UNIT_PRICE:
        raise InvalidConfigValue(
            f"Compute unit price {request.compute_unit_price} is outside 0..{MAX_COMPUTE_UNIT_PRICE}"
        )


def build_verification_envelope(request: SimulationRequest) -> VerificationEnvelope:
    """Compute-budget directive(s) followed by one verify instruction.

    The fee payer is a throwaway keypair; the RPC node is asked to skip
    signature checks and substitute a fresh blockhash, so the transaction is
    never valid for settlement.
    """
    program_id = parse_program_id(request.program_id)
    _check_budget(request)
    instructions = [set_compute_unit_limit(request.compute_unit_limit)]
    if request.compute_unit_price > 0:
        instructions.append(set_compute_unit_price(request.compute_unit_price))
    instructions.append(Instruction(program_id, request.instruction_data, []))

    payer = Keypair()
    message = Message(instructions, payer.pubkey())
    transaction = Transaction([payer], message, Hash.default())
    return VerificationEnvelope(transaction=transaction, program_id=program_id)


__all__ = ["VerificationEnvelope", "build_verification_envelope", "parse_program_id"]
