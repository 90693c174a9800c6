"""Build pipeline service for CLI reuse."""

from __future__ import annotations

import logging
from dataclasses import dataclass
from pathlib import Path

from core.config import Settings
from pipelines.orchestrator import PipelineObserver, PipelineOrchestrator, deploy_chain_program
from schemas.internal.pipeline import PipelineRun, PipelineState
from toolchain.gateway import SubprocessToolRunner, ToolRunner

logger = logging.getLogger(__name__)


@dataclass
class BuildOutcome:
    run: PipelineRun
    program_id: str | None = None
    deployed: bool = False


def run_build_pipeline(
    root: str | Path,
    settings: Settings,
    *,
    deploy: bool = False,
    runner: ToolRunner | None = None,
    observer: PipelineObserver | None = None,
) -> BuildOutcome:
    """Run all six stages; with ``deploy`` also push the program to the cluster.

    An aborted run is returned as-is with its failure attached; the caller
    decides how to surface it. PreflightFailure and ManifestError propagate.
    """
    runner = runner or SubprocessToolRunner()
    orchestrator = PipelineOrchestrator(
        runner,
        target_dir_name=settings.target_dir_name,
        observer=observer,
    )
    run = orchestrator.run(Path(root).resolve())
    outcome = BuildOutcome(run=run)
    if deploy and run.state is PipelineState.COMPLETED:
        outcome.program_id = deploy_chain_program(
            runner,
            run.project_root,
            run.circuit_name,
            target_dir_name=settings.target_dir_name,
        )
        outcome.deployed = True
        if outcome.program_id is None:
            logger.warning("Deployment succeeded but no program id was found in the output")
    return outcome


__all__ = ["BuildOutcome", "run_build_pipeline"]
