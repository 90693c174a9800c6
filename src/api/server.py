"""Serve the viewer API on an ephemeral localhost port."""

from __future__ import annotations

import logging
import socket
from dataclasses import dataclass

import uvicorn
from fastapi import FastAPI

logger = logging.getLogger(__name__)


@dataclass
class ViewerServer:
    app: FastAPI
    host: str = "127.0.0.1"

    def bind(self) -> socket.socket:
        sock = socket.socket(socket.AF_INET, socket.SOCK_STREAM)
        sock.setsockopt(socket.SOL_SOCKET, socket.SO_REUSEADDR, 1)
        sock.bind((self.host, 0))
        return sock

    def serve(self, sock: socket.socket) -> None:
        """Block until interrupted; each connection is handled independently."""
        config = uvicorn.Config(self.app, log_level="warning", access_log=False)
        server = uvicorn.Server(config)
        logger.info("Viewer listening on %s:%d", *sock.getsockname()[:2])
        try:
            server.run(sockets=[sock])
        finally:
            sock.close()


def viewer_url(web_app_url: str, port: int) -> str:
    separator = "&" if "?" in web_app_url else "?"
    return f"{web_app_url}{separator}port={port}"


__all__ = ["ViewerServer", "viewer_url"]
