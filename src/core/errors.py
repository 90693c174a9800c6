"""Domain errors surfaced by the pipeline, simulator and report store."""

from __future__ import annotations

from pathlib import Path
from typing import Sequence


class ZklenseError(Exception):
    """Base class for every error the CLI reports as a failed command."""

    title = "ERROR"
    exit_code = 1

    def __init__(self, message: str, *, hints: Sequence[str] | None = None) -> None:
        super().__init__(message)
        self.message = message
        self.hints = list(hints or [])


class PreflightFailure(ZklenseError):
    title = "MISSING PREREQUISITES"

    def __init__(self, missing: Sequence[str], *, hints: Sequence[str] | None = None) -> None:
        self.missing = list(missing)
        super().__init__(
            f"Missing required commands: {', '.join(self.missing)}", hints=hints
        )


class StageFailure(ZklenseError):
    """A pipeline stage could not produce what the next stage needs."""

    title = "STAGE FAILED"

    def __init__(
        self,
        stage: str,
        reason: str,
        *,
        path: Path | None = None,
        exit_code: int | None = None,
        stderr: str = "",
    ) -> None:
        self.stage = stage
        self.reason = reason
        self.path = path
        self.tool_exit_code = exit_code
        self.stderr = stderr
        message = f"{stage}: {reason}"
        if path is not None:
            message = f"{message} ({path})"
        super().__init__(message)


class ManifestError(StageFailure):
    title = "INVALID PROJECT"


class ArtifactNotFound(ZklenseError):
    title = "ARTIFACT NOT FOUND"

    def __init__(self, extension: str, root: Path) -> None:
        self.extension = extension
        self.root = root
        super().__init__(
            f"Could not find file with extension .{extension} under {root}",
            hints=["Run 'zklense run' to build the proof artifacts first"],
        )


class InvalidProgramIdentifier(ZklenseError):
    title = "INVALID INPUT"

    def __init__(self, value: str, reason: str) -> None:
        self.value = value
        super().__init__(f"Invalid program id {value!r}: {reason}")


class TransportError(ZklenseError):
    """The RPC endpoint was unreachable or answered with something unusable."""

    title = "RPC ERROR"

    def __init__(self, rpc_url: str, detail: str) -> None:
        self.rpc_url = rpc_url
        self.detail = detail
        super().__init__(f"RPC request to {rpc_url} failed: {detail}")


class OnChainRejection(ZklenseError):
    title = "SIMULATION FAILED"
    exit_code = 3

    def __init__(self, error: str | None, logs: Sequence[str], *, report_path: Path | None = None) -> None:
        self.error = error
        self.logs = list(logs)
        self.report_path = report_path
        message = f"Transaction simulation failed: {error or 'unknown error'}"
        hints = [f"Report saved to {report_path}"] if report_path else None
        super().__init__(message, hints=hints)


class ReportCorrupt(ZklenseError):
    title = "REPORT UNAVAILABLE"

    def __init__(self, path: Path, reason: str) -> None:
        self.path = path
        self.reason = reason
        super().__init__(
            f"Report at {path} is unusable: {reason}",
            hints=["Run 'zklense simulate' to generate a report"],
        )


class NotInitialized(ZklenseError):
    title = "NOT INITIALIZED"

    def __init__(self, root: Path) -> None:
        self.root = root
        super().__init__(
            f"No zklense configuration found in {root}",
            hints=["Run 'zklense init' first"],
        )


class InvalidConfigValue(ZklenseError):
    title = "INVALID CONFIGURATION"


__all__ = [
    "ArtifactNotFound",
    "InvalidConfigValue",
    "InvalidProgramIdentifier",
    "ManifestError",
    "NotInitialized",
    "OnChainRejection",
    "PreflightFailure",
    "ReportCorrupt",
    "StageFailure",
    "TransportError",
    "ZklenseError",
]
