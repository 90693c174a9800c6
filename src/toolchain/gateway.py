"""Subprocess wrapper for the external proving toolchain."""

from __future__ import annotations

import logging
import shutil
import subprocess
from dataclasses import dataclass
from pathlib import Path
from time import perf_counter
from typing import Iterable, Protocol, Sequence

logger = logging.getLogger(__name__)

COMMAND_NOT_FOUND_EXIT_CODE = 127


@dataclass(frozen=True)
class ToolInvocation:
    tool: str
    args: tuple[str, ...]
    cwd: Path
    exit_code: int
    stdout: str
    stderr: str
    duration_ms: int

    @property
    def succeeded(self) -> bool:
        return self.exit_code == 0

    @property
    def command_line(self) -> str:
        return " ".join((self.tool, *self.args))

    def stderr_tail(self, lines: int = 10) -> str:
        return "\n".join(self.stderr.splitlines()[-lines:])


class ToolRunner(Protocol):
    def resolve(self, tool: str) -> str | None: ...

    def run(self, tool: str, args: Sequence[str], cwd: Path) -> ToolInvocation: ...


class SubprocessToolRunner:
    """Runs tools found on PATH and captures their output. No retries."""

    def resolve(self, tool: str) -> str | None:
        return shutil.which(tool)

    def run(self, tool: str, args: Sequence[str], cwd: Path) -> ToolInvocation:
        cmd = [tool, *args]
        logger.debug("Running %s in %s", " ".join(cmd), cwd)
        start = perf_counter()
        try:
            result = subprocess.run(
                cmd,
                cwd=cwd,
                capture_output=True,
                text=True,
                check=False,
            )
        except OSError as exc:
            # Surfaced to the caller as a failed invocation with the OS error text.
            duration_ms = int((perf_counter() - start) * 1000)
            logger.debug("Could not start %s: %s", tool, exc)
            return ToolInvocation(
                tool=tool,
                args=tuple(args),
                cwd=cwd,
                exit_code=COMMAND_NOT_FOUND_EXIT_CODE,
                stdout="",
                stderr=str(exc),
                duration_ms=duration_ms,
            )
        duration_ms = int((perf_counter() - start) * 1000)
        logger.debug("%s exited with %d after %d ms", tool, result.returncode, duration_ms)
        return ToolInvocation(
            tool=tool,
            args=tuple(args),
            cwd=cwd,
            exit_code=result.returncode,
            stdout=result.stdout,
            stderr=result.stderr,
            duration_ms=duration_ms,
        )


def missing_tools(runner: ToolRunner, tools: Iterable[str]) -> list[str]:
    return [tool for tool in tools if runner.resolve(tool) is None]


__all__ = [
    "COMMAND_NOT_FOUND_EXIT_CODE",
    "SubprocessToolRunner",
    "ToolInvocation",
    "ToolRunner",
    "missing_tools",
]
