"""Project initialization and build pipeline commands."""

from __future__ import annotations

from pathlib import Path

import typer
from rich.markup import escape
from rich.table import Table

from pipelines.stages import StageSpec
from schemas.internal.pipeline import PipelineRun, PipelineState, StageResult
from services.pipeline_runner import BuildOutcome, run_build_pipeline
from services.project import initialize_project
from toolchain.locator import collect_artifacts
from .shared import console, format_bytes, report_errors, settings_from


class ConsoleObserver:
    """Prints one line per stage as the pipeline advances."""

    def stage_started(self, stage: StageSpec, index: int, total: int) -> None:
        console.print(f"[bold blue][{index}/{total}][/bold blue] {stage.description}...")

    def stage_finished(self, stage: StageSpec, result: StageResult) -> None:
        seconds = result.duration_ms / 1000
        if result.succeeded:
            console.print(f"  [green]✓[/green] {stage.name} ({seconds:.2f}s)")
        else:
            console.print(f"  [red]✗[/red] {stage.name} ({seconds:.2f}s)")


def init_project(
    ctx: typer.Context,
    path: Path = typer.Argument(Path("."), file_okay=False, help="Project directory"),
) -> None:
    """Create .zklense/config.toml with the default network."""
    with report_errors():
        store, config, created = initialize_project(path, settings_from(ctx))
    if not created:
        console.print(f"Already initialized: {escape(str(store.config_path))}")
        return
    console.print(f"[green]Initialized[/green] {escape(str(store.config_path))}")
    console.print(f"Network: {config.network.name} ({config.network.rpc_url})")


def run_pipeline(
    ctx: typer.Context,
    path: Path = typer.Argument(Path("."), file_okay=False, help="Noir project directory"),
    deploy: bool = typer.Option(
        False,
        "--deploy",
        help="Deploy the generated verifier program with the Solana CLI",
    ),
) -> None:
    """Execute, compile, set up, prove, verify and build the Solana verifier."""
    settings = settings_from(ctx)
    with report_errors():
        outcome = run_build_pipeline(path, settings, deploy=deploy, observer=ConsoleObserver())
        if outcome.run.state is PipelineState.ABORTED and outcome.run.failure is not None:
            raise outcome.run.failure
    _print_summary(outcome, settings.target_dir_name)


def _print_summary(outcome: BuildOutcome, target_dir_name: str) -> None:
    run: PipelineRun = outcome.run
    console.print(
        f"\n[bold green]Pipeline completed[/bold green] for circuit "
        f"[bold]{escape(run.circuit_name)}[/bold] in {run.total_duration_ms / 1000:.2f}s"
    )
    table = Table("Artifact", "Kind", "Size")
    for artifact in run.artifacts:
        table.add_row(escape(artifact.path.name), artifact.kind.value, format_bytes(artifact.size))
    console.print(table)

    programs = collect_artifacts(run.project_root / target_dir_name, "so")
    if len(programs) > 1:
        console.print("Verifier programs found:")
        for program in programs:
            console.print(f"  {escape(str(program))}")

    if outcome.deployed:
        if outcome.program_id:
            console.print(f"Program Id: [bold]{outcome.program_id}[/bold]")
            console.print(f"Next: zklense simulate --program-id {outcome.program_id}")
        else:
            console.print("[yellow]Deployed, but no program id was reported[/yellow]")
    else:
        console.print("Next: deploy the .so program, then run zklense simulate --program-id <ID>")


__all__ = ["ConsoleObserver", "init_project", "run_pipeline"]
