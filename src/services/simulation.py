"""Simulate the verification transaction and persist the cost report."""

from __future__ import annotations

import logging
from dataclasses import dataclass, field
from pathlib import Path

import httpx

from core.config import Settings
from core.errors import OnChainRejection
from persistence.project_store import ProjectStore
from persistence.report_store import ReportStore, build_cost_report
from schemas.internal.simulation import SimulationRequest
from schemas.project import ProjectConfig
from schemas.report import CostReport
from simulation.simulator import SimulationOutcome, TransactionSimulator, format_error
from simulation.transaction import parse_program_id
from toolchain.locator import find_artifact

logger = logging.getLogger(__name__)

PROOF_EXTENSION = "proof"
PUBLIC_WITNESS_EXTENSION = "pw"


@dataclass
class SimulationRun:
    outcome: SimulationOutcome
    report: CostReport
    report_path: Path
    proof_path: Path
    public_witness_path: Path
    warnings: list[str] = field(default_factory=list)


def run_simulation(
    root: str | Path,
    program_id: str,
    config: ProjectConfig,
    settings: Settings,
    *,
    compute_unit_limit: int | None = None,
    compute_unit_price: int | None = None,
    client: httpx.Client | None = None,
) -> SimulationRun:
    """Locate artifacts, simulate, write ``report.json``.

    The report is written for both successful and rejected simulations; a
    rejection then raises OnChainRejection pointing at the saved report.
    """
    parse_program_id(program_id)
    root = Path(root).resolve()
    proof_path = find_artifact(root, PROOF_EXTENSION)
    witness_path = find_artifact(root, PUBLIC_WITNESS_EXTENSION)
    logger.info("Using proof %s and public witness %s", proof_path, witness_path)

    request = SimulationRequest(
        program_id=program_id.strip(),
        proof=proof_path.read_bytes(),
        public_witness=witness_path.read_bytes(),
        compute_unit_limit=(
            settings.compute_unit_limit if compute_unit_limit is None else compute_unit_limit
        ),
        compute_unit_price=(
            settings.compute_unit_price if compute_unit_price is None else compute_unit_price
        ),
    )
    simulator = TransactionSimulator(
        config.network,
        client=client,
        fee_sample_limit=settings.fee_sample_limit,
    )
    outcome = simulator.simulate(request)

    report = build_cost_report(outcome, config.network)
    store = ProjectStore(root, config_dir_name=settings.config_dir_name)
    report_path = ReportStore(store.report_path).save(report)

    if not outcome.result.succeeded:
        raise OnChainRejection(
            format_error(outcome.result.error),
            outcome.result.logs,
            report_path=report_path,
        )
    return SimulationRun(
        outcome=outcome,
        report=report,
        report_path=report_path,
        proof_path=proof_path,
        public_witness_path=witness_path,
        warnings=list(outcome.warnings),
    )


__all__ = ["SimulationRun", "run_simulation"]
