"""Transaction simulation against a Solana RPC endpoint."""

from .rpc import SolanaRpcClient
from .simulator import SimulationOutcome, TransactionSimulator
from .transaction import build_verification_envelope, parse_program_id

__all__ = [
    "SimulationOutcome",
    "SolanaRpcClient",
    "TransactionSimulator",
    "build_verification_envelope",
    "parse_program_id",
]
