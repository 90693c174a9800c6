"""Project network configuration commands."""

from __future__ import annotations

from pathlib import Path

import typer
from rich.table import Table

from schemas.project import DEFAULT_RPC_URLS, SOLANA_NETWORKS
from services.project import (
    load_project_config,
    project_store,
    reset_rpc_url,
    set_network,
    set_rpc_url,
)
from .shared import console, emit_json, project_path_option, report_errors, settings_from


app = typer.Typer(
    help="Show or change the project's Solana network settings",
    context_settings={"help_option_names": ["-h", "--help"]},
    add_completion=False,
    no_args_is_help=True,
)


@app.command("show", help="Show the project configuration")
def show_config(
    ctx: typer.Context,
    path: Path = project_path_option(),
    json_out: bool = typer.Option(False, "--json", help="Output JSON"),
) -> None:
    settings = settings_from(ctx)
    with report_errors():
        config = load_project_config(path, settings)
    if json_out:
        emit_json(config.model_dump(mode="json"))
        return
    table = Table(show_header=False, box=None)
    table.add_row("Config file", str(project_store(path, settings).config_path))
    table.add_row("Version", config.version)
    table.add_row("Initialized at", config.initialized_at.isoformat())
    table.add_row("Network", config.network.name)
    rpc = config.network.rpc_url + (" (custom)" if config.network.custom_rpc else "")
    table.add_row("RPC URL", rpc)
    table.add_row("Viewer URL", config.web_app_url)
    console.print(table)


@app.command("get-network", help="Print the configured network")
def get_network(ctx: typer.Context, path: Path = project_path_option()) -> None:
    with report_errors():
        config = load_project_config(path, settings_from(ctx))
    typer.echo(config.network.name)


@app.command("set-network", help="Switch network; the RPC URL resets to its default")
def set_network_command(
    ctx: typer.Context,
    name: str = typer.Argument(..., metavar="NETWORK"),
    path: Path = project_path_option(),
) -> None:
    with report_errors():
        config = set_network(path, settings_from(ctx), name)
    console.print(f"Network set to [bold]{config.network.name}[/bold] ({config.network.rpc_url})")


@app.command("list-networks", help="List supported networks and their default RPC URLs")
def list_networks(ctx: typer.Context, path: Path = project_path_option()) -> None:
    settings = settings_from(ctx)
    store = project_store(path, settings)
    current = None
    if store.is_initialized():
        with report_errors():
            current = store.load().network.name
    table = Table("Network", "Default RPC URL", "")
    for network in SOLANA_NETWORKS:
        table.add_row(network, DEFAULT_RPC_URLS[network], "current" if network == current else "")
    console.print(table)


@app.command("get-rpc", help="Print the configured RPC URL")
def get_rpc(ctx: typer.Context, path: Path = project_path_option()) -> None:
    with report_errors():
        config = load_project_config(path, settings_from(ctx))
    typer.echo(config.network.rpc_url)


@app.command("set-rpc", help="Use a custom RPC URL for the current network")
def set_rpc(
    ctx: typer.Context,
    url: str = typer.Argument(..., metavar="URL"),
    path: Path = project_path_option(),
) -> None:
    with report_errors():
        config = set_rpc_url(path, settings_from(ctx), url)
    suffix = " (custom)" if config.network.custom_rpc else ""
    console.print(f"RPC URL set to {config.network.rpc_url}{suffix}")


@app.command("reset-rpc", help="Restore the network's default RPC URL")
def reset_rpc(ctx: typer.Context, path: Path = project_path_option()) -> None:
    with report_errors():
        config = reset_rpc_url(path, settings_from(ctx))
    console.print(f"RPC URL reset to {config.network.rpc_url}")


__all__ = ["app"]
