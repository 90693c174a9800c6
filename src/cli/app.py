"""Typer CLI entrypoint for zklense."""

from __future__ import annotations

import logging

import typer
from pydantic import ValidationError

from core.config import get_settings
from core.errors import InvalidConfigValue
from zklense import __version__
from cli.commands import build, config, simulate, view
from cli.commands.shared import configure_logging, report_errors

logger = logging.getLogger(__name__)

app = typer.Typer(
    help=(
        "zklense: build Noir circuits into Groth16 proofs and measure what "
        "verifying them on Solana costs.\n"
    ),
    context_settings={"help_option_names": ["-h", "--help"]},
    add_completion=False,
    no_args_is_help=True,
)


def _print_version(value: bool) -> None:
    if value:
        typer.echo(__version__)
        raise typer.Exit()


@app.callback()
def root(
    ctx: typer.Context,
    version_flag: bool = typer.Option(
        False,
        "-v",
        "--version",
        help="Print the version and exit",
        callback=_print_version,
        is_eager=True,
    ),
    verbose: bool = typer.Option(False, "--verbose", help="Enable debug logging"),
) -> None:
    with report_errors():
        try:
            settings = get_settings()
        except ValidationError as exc:
            raise InvalidConfigValue(f"Invalid ZKLENSE_* settings: {exc.errors()[0]['msg']}") from exc
    configure_logging("DEBUG" if verbose else settings.log_level)
    ctx.obj = settings
    logger.debug("Loaded settings: %s", settings.model_dump())


app.command("init", help="Initialize zklense in a project directory")(build.init_project)
app.command("run", help="Run the Noir to Solana build pipeline")(build.run_pipeline)
app.command("simulate", help="Simulate on-chain verification and write a cost report")(
    simulate.simulate
)
app.command("view", help="Open the saved report in the web viewer")(view.view)
app.add_typer(config.app, name="config")


def main() -> None:
    app()


__all__ = ["app", "main"]
