"""Pipeline run state: stages, results and produced artifacts."""

from __future__ import annotations

from dataclasses import dataclass, field
from enum import Enum
from pathlib import Path
from typing import TYPE_CHECKING

if TYPE_CHECKING:
    from core.errors import StageFailure


class ArtifactKind(str, Enum):
    MANIFEST = "manifest"
    CIRCUIT = "circuit"
    WITNESS = "witness"
    CONSTRAINT_SYSTEM = "constraint_system"
    PROVING_KEY = "proving_key"
    VERIFYING_KEY = "verifying_key"
    PROOF = "proof"
    PUBLIC_WITNESS = "public_witness"
    CHAIN_PROGRAM = "chain_program"


class StageStatus(str, Enum):
    SUCCEEDED = "succeeded"
    FAILED = "failed"


class PipelineState(str, Enum):
    IDLE = "idle"
    RUNNING = "running"
    COMPLETED = "completed"
    ABORTED = "aborted"


@dataclass(frozen=True)
class Artifact:
    path: Path
    kind: ArtifactKind
    size: int


@dataclass(frozen=True)
class StageResult:
    name: str
    status: StageStatus
    duration_ms: int
    artifacts: list[Artifact] = field(default_factory=list)
    stderr: str = ""

    @property
    def succeeded(self) -> bool:
        return self.status is StageStatus.SUCCEEDED


@dataclass
class PipelineRun:
    circuit_name: str
    project_root: Path
    state: PipelineState = PipelineState.IDLE
    results: list[StageResult] = field(default_factory=list)
    failure: StageFailure | None = None

    @property
    def total_duration_ms(self) -> int:
        return sum(result.duration_ms for result in self.results)

    @property
    def stages_attempted(self) -> list[str]:
        return [result.name for result in self.results]

    @property
    def artifacts(self) -> list[Artifact]:
        return [artifact for result in self.results for artifact in result.artifacts]


__all__ = [
    "Artifact",
    "ArtifactKind",
    "PipelineRun",
    "PipelineState",
    "StageResult",
    "StageStatus",
]
