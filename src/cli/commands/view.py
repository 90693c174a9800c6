"""Serve the saved report to the web viewer."""

from __future__ import annotations

from pathlib import Path

import typer
from rich.markup import escape

from persistence.project_store import ProjectStore
from services.viewer import load_viewer_report, serve_report
from .shared import console, report_errors, settings_from


def view(
    ctx: typer.Context,
    path: Path = typer.Argument(Path("."), file_okay=False, help="Project directory"),
    no_browser: bool = typer.Option(False, "--no-browser", help="Do not open a browser"),
) -> None:
    """Serve .zklense/report.json on a local port until interrupted."""
    settings = settings_from(ctx)
    with report_errors():
        body = load_viewer_report(path, settings)
        store = ProjectStore(path.resolve(), config_dir_name=settings.config_dir_name)
        web_app_url = store.load().web_app_url if store.is_initialized() else settings.web_app_url

    def _announce(url: str, port: int) -> None:
        console.print(f"Serving report on http://{settings.viewer_host}:{port}")
        console.print(f"Viewer: {escape(url)}")
        console.print("Press Ctrl+C to stop")

    serve_report(
        body,
        web_app_url=web_app_url,
        host=settings.viewer_host,
        open_browser=not no_browser,
        on_ready=_announce,
    )
    console.print("Viewer stopped")


__all__ = ["view"]
