"""Simulate proof verification and print the cost summary."""

from __future__ import annotations

from pathlib import Path

import typer
from rich.markup import escape
from rich.table import Table

from core.config import MAX_COMPUTE_UNIT_LIMIT, MAX_COMPUTE_UNIT_PRICE
from schemas.report import CostReport
from services.project import initialize_project
from services.simulation import run_simulation
from simulation.transaction import parse_program_id
from .shared import console, project_path_option, report_errors, settings_from

_SEVERITY_STYLES = {
    "optimal": "green",
    "safe": "green",
    "monitor": "yellow",
    "warning": "yellow",
    "critical": "red",
}


def simulate(
    ctx: typer.Context,
    program_id: str = typer.Option(..., "--program-id", help="Deployed verifier program id (base58)"),
    path: Path = project_path_option("Directory searched for the .proof and .pw files"),
    cu_limit: int | None = typer.Option(
        None,
        "--cu-limit",
        min=0,
        max=MAX_COMPUTE_UNIT_LIMIT,
        help="Compute unit limit for the transaction",
    ),
    cu_price: int | None = typer.Option(
        None,
        "--cu-price",
        min=0,
        max=MAX_COMPUTE_UNIT_PRICE,
        help="Compute unit price in microlamports",
    ),
) -> None:
    """Simulate the verification transaction and save .zklense/report.json."""
    settings = settings_from(ctx)
    with report_errors():
        parse_program_id(program_id)
        _, config, _ = initialize_project(path, settings)
        console.print(
            f"Simulating on [bold]{config.network.name}[/bold] ({escape(config.network.rpc_url)})"
        )
        result = run_simulation(
            path,
            program_id,
            config,
            settings,
            compute_unit_limit=cu_limit,
            compute_unit_price=cu_price,
        )
    for warning in result.warnings:
        console.print(f"[yellow]Warning:[/yellow] {escape(warning)}")
    print_report(result.report)
    console.print(f"\nReport saved to {escape(str(result.report_path))}")
    console.print("Run 'zklense view' to explore it in the browser")


def _severity(value: str) -> str:
    style = _SEVERITY_STYLES.get(value, "white")
    return f"[{style}]{value}[/{style}]"


def print_report(report: CostReport) -> None:
    units = report.compute_units
    proof = report.proof
    cost = report.cost
    size = report.transaction_size

    table = Table("Metric", "Value", "Severity", title="Verification cost")
    table.add_row(
        "Compute units",
        f"{units.total_compute_units_consumed:,} / {units.compute_budget:,} "
        f"({units.percentage_of_compute_budget_used:.2f}%)",
        _severity(units.severity),
    )
    table.add_row(
        "Proof + witness",
        f"{proof.proof_size} + {proof.witness_size} = {proof.total_proof_witness_size} bytes",
        _severity(proof.severity),
    )
    table.add_row("CU per byte", f"{proof.cu_per_proof_size:.2f}", "")
    table.add_row(
        "Message size",
        f"{size.message_size} / {size.max_message_size} bytes",
        _severity(size.severity),
    )
    table.add_row(
        "Total fee",
        f"{cost.total_fee:,} lamports ({cost.cost_in_sol:.9f} SOL)",
        "",
    )
    table.add_row("Status", report.transaction_status.status, "")
    console.print(table)
    for suggestion in (units.warning, units.suggestion, size.suggestion, cost.suggestion):
        if suggestion:
            console.print(f"[dim]→ {escape(suggestion)}[/dim]")


__all__ = ["print_report", "simulate"]
