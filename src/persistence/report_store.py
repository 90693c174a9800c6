"""Cost report assembly and atomic persistence."""

from __future__ import annotations

import logging
from pathlib import Path

from pydantic import ValidationError

from core.errors import ReportCorrupt
from costing.model import (
    LAMPORTS_PER_SIGNATURE,
    MAX_COMPUTE_UNITS,
    MAX_MESSAGE_SIZE,
    compute_fees,
    compute_limit_warning,
    compute_suggestion,
    cu_per_proof_size,
    fee_suggestion,
    message_within_size,
    percentage_of_compute_budget_used,
    size_suggestion,
    total_proof_witness_size,
)
from costing.severity import classify_compute_usage, classify_message_size, classify_proof_size
from persistence.fs_store import atomic_write_text
from schemas.project import NetworkConfig
from schemas.report import (
    AccountsSection,
    ComputeUnitsSection,
    CostReport,
    CostSection,
    EnvironmentSection,
    FeeSampleEntry,
    ProofSection,
    TransactionLogsSection,
    TransactionSizeSection,
    TransactionStatusSection,
)
from simulation.simulator import SimulationOutcome, format_error

logger = logging.getLogger(__name__)


def build_cost_report(outcome: SimulationOutcome, network: NetworkConfig) -> CostReport:
    request = outcome.request
    result = outcome.result
    envelope = outcome.envelope

    proof_size = len(request.proof)
    witness_size = len(request.public_witness)
    total_size = total_proof_witness_size(proof_size, witness_size)

    budget = request.compute_unit_limit
    consumed = result.units_consumed
    usage_severity = classify_compute_usage(consumed, budget)
    limit_warning = compute_limit_warning(budget)

    fees = compute_fees(budget, request.compute_unit_price)
    fee_advice = fee_suggestion(fees)

    message_size = envelope.message_size
    within = message_within_size(message_size)
    if within:
        size_message = f"Success: Message size ({message_size}) is within limits ({MAX_MESSAGE_SIZE})"
    else:
        size_message = f"Fail: Message size ({message_size}) exceeds maximum ({MAX_MESSAGE_SIZE})"

    accounts = envelope.accounts
    return CostReport(
        program_id=request.program_id.strip(),
        compute_units=ComputeUnitsSection(
            total_compute_units_consumed=consumed,
            compute_budget=budget,
            max_compute_units=MAX_COMPUTE_UNITS,
            percentage_of_compute_budget_used=percentage_of_compute_budget_used(consumed, budget),
            severity=usage_severity,
            warning=limit_warning,
            suggestion=compute_suggestion(usage_severity, limit_warning),
        ),
        proof=ProofSection(
            proof_size=proof_size,
            witness_size=witness_size,
            total_proof_witness_size=total_size,
            cu_per_proof_size=cu_per_proof_size(consumed, total_size),
            severity=classify_proof_size(total_size),
        ),
        cost=CostSection(
            cost_in_sol=fees.cost_in_sol,
            cost_in_lamports=fees.total_fee,
            base_fee_per_signature=LAMPORTS_PER_SIGNATURE,
            num_signatures=fees.num_signatures,
            base_fee=fees.base_fee,
            cu_limit=fees.cu_limit,
            cu_price_microlamports=fees.cu_price_microlamports,
            prioritization_fee=fees.prioritization_fee,
            total_fee=fees.total_fee,
            priority=fees.priority,
            suggestion=fee_advice,
        ),
        transaction_status=TransactionStatusSection(
            status=result.status,
            error=format_error(result.error),
            suggestion=(
                "Transaction simulation successful"
                if result.succeeded
                else "Review transaction error and fix issues"
            ),
        ),
        transaction_size=TransactionSizeSection(
            transaction_size=envelope.transaction_size,
            message_size=message_size,
            max_message_size=MAX_MESSAGE_SIZE,
            message_within_size=within,
            severity=classify_message_size(message_size),
            message=size_message,
            suggestion=size_suggestion(message_size),
        ),
        transaction_logs=TransactionLogsSection(logs=list(result.logs), log_count=len(result.logs)),
        accounts=AccountsSection(
            total_accounts=accounts.total_accounts,
            writable_signed_accounts=accounts.writable_signed_accounts,
            writable_unsigned_accounts=accounts.writable_unsigned_accounts,
            total_writable_accounts=(
                accounts.writable_signed_accounts + accounts.writable_unsigned_accounts
            ),
            readonly_signed_accounts=accounts.readonly_signed_accounts,
            readonly_unsigned_accounts=accounts.readonly_unsigned_accounts,
        ),
        recent_prioritization_fees=[
            FeeSampleEntry(slot=sample.slot, prioritization_fee=sample.prioritization_fee)
            for sample in outcome.fee_samples
        ],
        environment=EnvironmentSection(
            network=network.name,
            rpc_url=network.rpc_url,
            custom_rpc=network.custom_rpc,
        ),
    )


class ReportStore:
    def __init__(self, path: str | Path) -> None:
        self._path = Path(path)

    @property
    def path(self) -> Path:
        return self._path

    def save(self, report: CostReport) -> Path:
        atomic_write_text(self._path, report.model_dump_json(indent=2))
        logger.info("Report saved to %s", self._path)
        return self._path

    def load_bytes(self) -> bytes:
        """Raw report body, validated against the schema."""
        content = self._read()
        self._parse(content)
        return content

    def load(self) -> CostReport:
        return self._parse(self._read())

    def _read(self) -> bytes:
        if not self._path.is_file():
            raise ReportCorrupt(self._path, "no report found")
        try:
            return self._path.read_bytes()
        except OSError as exc:
            raise ReportCorrupt(self._path, f"failed to read report: {exc}") from exc

    def _parse(self, content: bytes) -> CostReport:
        try:
            return CostReport.model_validate_json(content)
        except ValidationError as exc:
            raise ReportCorrupt(self._path, f"not a valid report: {exc.errors()[0]['msg']}") from exc


__all__ = ["ReportStore", "build_cost_report"]
