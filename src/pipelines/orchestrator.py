"""Sequential build pipeline driven as an explicit state machine.

Stages communicate only through files under the project: stage N+1 starts
once stage N's outputs are confirmed on disk. A failure stops the run and
leaves every artifact produced so far untouched. Re-running rebuilds every
stage unconditionally.
"""

from __future__ import annotations

import logging
from pathlib import Path
from typing import Protocol, Sequence

from core.errors import PreflightFailure, StageFailure
from pipelines.stages import (
    CHAIN_PROGRAM,
    PIPELINE_STAGES,
    REQUIRED_TOOLS,
    SOLANA,
    ArtifactSpec,
    StageSpec,
    read_circuit_name,
)
from schemas.internal.pipeline import (
    Artifact,
    PipelineRun,
    PipelineState,
    StageResult,
    StageStatus,
)
from toolchain.gateway import ToolInvocation, ToolRunner, missing_tools

logger = logging.getLogger(__name__)

_INSTALL_HINTS = {
    "nargo": "Install nargo: https://noir-lang.org/docs/getting_started/installation",
    "sunspot": "Install sunspot: https://github.com/reilabs/sunspot",
    "solana": "Install the Solana CLI: https://docs.solana.com/cli/install-solana-cli-tools",
}


class PipelineObserver(Protocol):
    def stage_started(self, stage: StageSpec, index: int, total: int) -> None: ...

    def stage_finished(self, stage: StageSpec, result: StageResult) -> None: ...


class _SilentObserver:
    def stage_started(self, stage: StageSpec, index: int, total: int) -> None:
        return None

    def stage_finished(self, stage: StageSpec, result: StageResult) -> None:
        return None


class PipelineOrchestrator:
    def __init__(
        self,
        runner: ToolRunner,
        *,
        stages: Sequence[StageSpec] = PIPELINE_STAGES,
        required_tools: Sequence[str] = REQUIRED_TOOLS,
        target_dir_name: str = "target",
        observer: PipelineObserver | None = None,
    ) -> None:
        self._runner = runner
        self._stages = tuple(stages)
        self._required_tools = tuple(required_tools)
        self._target_dir_name = target_dir_name
        self._observer = observer or _SilentObserver()

    @property
    def stages(self) -> tuple[StageSpec, ...]:
        return self._stages

    def preflight(self) -> None:
        missing = missing_tools(self._runner, self._required_tools)
        if missing:
            raise PreflightFailure(
                missing, hints=[_INSTALL_HINTS[tool] for tool in missing if tool in _INSTALL_HINTS]
            )

    def run(self, root: Path, *, circuit_name: str | None = None) -> PipelineRun:
        """Run every stage in order; PreflightFailure propagates, StageFailure aborts the run."""
        root = Path(root)
        self.preflight()
        circuit = circuit_name or read_circuit_name(root)
        run = PipelineRun(circuit_name=circuit, project_root=root)
        run.state = PipelineState.RUNNING
        total = len(self._stages)

        for index, stage in enumerate(self._stages, start=1):
            self._observer.stage_started(stage, index, total)
            logger.info("[%d/%d] %s", index, total, stage.description)
            try:
                self._check_artifacts(stage, stage.requires, circuit, root, missing="precondition missing")
            except StageFailure as failure:
                return self._abort(run, failure)

            invocation = self._runner.run(stage.tool, stage.args(circuit), self._stage_cwd(stage, root))
            result, failure = self._evaluate(stage, invocation, circuit, root)
            run.results.append(result)
            self._observer.stage_finished(stage, result)
            if failure is not None:
                return self._abort(run, failure)

        run.state = PipelineState.COMPLETED
        logger.info("Pipeline completed in %d ms", run.total_duration_ms)
        return run

    def target_dir(self, root: Path) -> Path:
        return Path(root) / self._target_dir_name

    def _stage_cwd(self, stage: StageSpec, root: Path) -> Path:
        return self.target_dir(root) if stage.in_target_dir else root

    def _artifact_path(self, spec: ArtifactSpec, circuit: str, root: Path) -> Path:
        return spec.path(circuit, root, self.target_dir(root))

    def _check_artifacts(
        self,
        stage: StageSpec,
        specs: Sequence[ArtifactSpec],
        circuit: str,
        root: Path,
        *,
        missing: str,
    ) -> list[Artifact]:
        artifacts: list[Artifact] = []
        for spec in specs:
            path = self._artifact_path(spec, circuit, root)
            if not path.is_file() or path.stat().st_size == 0:
                raise StageFailure(stage.name, f"{missing}: {path.name}", path=path)
            artifacts.append(Artifact(path=path, kind=spec.kind, size=path.stat().st_size))
        return artifacts

    def _evaluate(
        self,
        stage: StageSpec,
        invocation: ToolInvocation,
        circuit: str,
        root: Path,
    ) -> tuple[StageResult, StageFailure | None]:
        if not invocation.succeeded:
            stderr = invocation.stderr_tail()
            failure = StageFailure(
                stage.name,
                f"'{invocation.command_line}' failed with exit code {invocation.exit_code}",
                exit_code=invocation.exit_code,
                stderr=stderr,
            )
            return self._failed(stage, invocation, stderr), failure
        try:
            artifacts = self._check_artifacts(
                stage,
                stage.produces,
                circuit,
                root,
                missing="tool succeeded but produced no output",
            )
        except StageFailure as failure:
            return self._failed(stage, invocation, invocation.stderr_tail()), failure
        result = StageResult(
            name=stage.name,
            status=StageStatus.SUCCEEDED,
            duration_ms=invocation.duration_ms,
            artifacts=artifacts,
        )
        return result, None

    @staticmethod
    def _failed(stage: StageSpec, invocation: ToolInvocation, stderr: str) -> StageResult:
        return StageResult(
            name=stage.name,
            status=StageStatus.FAILED,
            duration_ms=invocation.duration_ms,
            stderr=stderr,
        )

    @staticmethod
    def _abort(run: PipelineRun, failure: StageFailure) -> PipelineRun:
        logger.info("Pipeline aborted at %s: %s", failure.stage, failure.reason)
        run.state = PipelineState.ABORTED
        run.failure = failure
        return run


def parse_program_id(output: str) -> str | None:
    """Extract the address from a ``Program Id: <address>`` line."""
    for line in output.splitlines():
        if "Program Id:" in line:
            value = line.split(":", 1)[1].strip()
            return value or None
    return None


def deploy_chain_program(
    runner: ToolRunner,
    root: Path,
    circuit: str,
    *,
    target_dir_name: str = "target",
) -> str | None:
    """Deploy ``target/<circuit>.so`` with the Solana CLI and return its program id."""
    if runner.resolve(SOLANA) is None:
        raise PreflightFailure([SOLANA], hints=[_INSTALL_HINTS[SOLANA]])
    target = Path(root) / target_dir_name
    program = CHAIN_PROGRAM.path(circuit, Path(root), target)
    if not program.is_file():
        raise StageFailure("Deploy", f"program binary missing: {program.name}", path=program)
    invocation = runner.run(SOLANA, ["program", "deploy", str(program)], target)
    if not invocation.succeeded:
        raise StageFailure(
            "Deploy",
            f"'{invocation.command_line}' failed with exit code {invocation.exit_code}",
            exit_code=invocation.exit_code,
            stderr=invocation.stderr_tail(),
        )
    return parse_program_id(invocation.stdout)


__all__ = [
    "PipelineObserver",
    "PipelineOrchestrator",
    "deploy_chain_program",
    "parse_program_id",
]
