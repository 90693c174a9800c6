"""Build pipeline stages and orchestration."""

from .orchestrator import PipelineObserver, PipelineOrchestrator, deploy_chain_program
from .stages import PIPELINE_STAGES, REQUIRED_TOOLS, StageSpec, read_circuit_name

__all__ = [
    "PIPELINE_STAGES",
    "PipelineObserver",
    "PipelineOrchestrator",
    "REQUIRED_TOOLS",
    "StageSpec",
    "deploy_chain_program",
    "read_circuit_name",
]
