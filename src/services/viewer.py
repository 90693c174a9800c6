"""Load the saved report and serve it to the web viewer."""

from __future__ import annotations

import logging
import webbrowser
from pathlib import Path
from typing import Callable

from api.main import create_app
from api.server import ViewerServer, viewer_url
from core.config import Settings
from persistence.project_store import ProjectStore
from persistence.report_store import ReportStore

logger = logging.getLogger(__name__)


def load_viewer_report(root: str | Path, settings: Settings) -> bytes:
    store = ProjectStore(Path(root).resolve(), config_dir_name=settings.config_dir_name)
    return ReportStore(store.report_path).load_bytes()


def serve_report(
    report_body: bytes,
    *,
    web_app_url: str,
    host: str = "127.0.0.1",
    open_browser: bool = True,
    on_ready: Callable[[str, int], None] | None = None,
) -> None:
    """Serve until interrupted; ``on_ready`` receives the viewer URL and port."""
    server = ViewerServer(create_app(report_body), host=host)
    sock = server.bind()
    port = sock.getsockname()[1]
    url = viewer_url(web_app_url, port)
    if on_ready is not None:
        on_ready(url, port)
    if open_browser and not webbrowser.open(url):
        logger.warning("Could not open a browser; visit %s", url)
    server.serve(sock)


__all__ = ["load_viewer_report", "serve_report"]
