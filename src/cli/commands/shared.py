"""Shared helpers for CLI subcommands."""

from __future__ import annotations

import json
import logging
from contextlib import contextmanager
from pathlib import Path
from typing import Any, Iterator

import typer
from rich.console import Console
from rich.logging import RichHandler
from rich.markup import escape
from rich.panel import Panel

from core.config import Settings, get_settings
from core.errors import OnChainRejection, StageFailure, ZklenseError

console = Console(highlight=False)
err_console = Console(stderr=True, highlight=False)

_MAX_LOG_LINES = 20


def configure_logging(level: str) -> None:
    logging.basicConfig(
        level=level.upper(),
        format="%(message)s",
        datefmt="[%X]",
        handlers=[RichHandler(console=err_console, show_path=False, rich_tracebacks=True)],
        force=True,
    )


def settings_from(ctx: typer.Context) -> Settings:
    """Settings loaded by the root callback, or a fresh load for direct invocations."""
    obj = ctx.find_root().obj
    if isinstance(obj, Settings):
        return obj
    return get_settings()


def emit_json(data: Any) -> None:
    typer.echo(json.dumps(data, ensure_ascii=False, indent=2))


def project_path_option(help_text: str = "Project directory") -> Any:
    return typer.Option(
        Path("."),
        "--path",
        "-p",
        file_okay=False,
        help=help_text,
    )


def print_error(exc: ZklenseError) -> None:
    lines = [escape(exc.message)]
    if isinstance(exc, StageFailure):
        if exc.tool_exit_code is not None:
            lines.append(f"Exit code: {exc.tool_exit_code}")
        if exc.stderr:
            lines.append("")
            lines.append(escape(exc.stderr))
    if isinstance(exc, OnChainRejection) and exc.logs:
        lines.append("")
        lines.append("[bold]Program logs:[/bold]")
        lines.extend(escape(line) for line in exc.logs[-_MAX_LOG_LINES:])
    for hint in exc.hints:
        lines.append(f"[dim]→ {escape(hint)}[/dim]")
    err_console.print(
        Panel("\n".join(lines), title=f"[bold red]{exc.title}[/bold red]", border_style="red")
    )


@contextmanager
def report_errors() -> Iterator[None]:
    """Render domain errors as a panel and exit with their code."""
    try:
        yield
    except ZklenseError as exc:
        print_error(exc)
        raise typer.Exit(code=exc.exit_code) from exc


def format_bytes(size: int) -> str:
    if size < 1024:
        return f"{size} B"
    if size < 1024 * 1024:
        return f"{size / 1024:.1f} KiB"
    return f"{size / (1024 * 1024):.1f} MiB"


__all__ = [
    "configure_logging",
    "console",
    "emit_json",
    "err_console",
    "format_bytes",
    "print_error",
    "project_path_option",
    "report_errors",
    "settings_from",
]
