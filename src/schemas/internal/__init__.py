"""Internal schema definitions."""

from .pipeline import (  # noqa: F401
    Artifact,
    ArtifactKind,
    PipelineRun,
    PipelineState,
    StageResult,
    StageStatus,
)
from .simulation import (  # noqa: F401
    AccountStats,
    EnvelopeStats,
    FeeSample,
    SimulationRequest,
    SimulationResult,
)

__all__ = [
    "AccountStats",
    "Artifact",
    "ArtifactKind",
    "EnvelopeStats",
    "FeeSample",
    "PipelineRun",
    "PipelineState",
    "SimulationRequest",
    "SimulationResult",
    "StageResult",
    "StageStatus",
]
