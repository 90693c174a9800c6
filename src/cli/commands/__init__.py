"""CLI command groups."""

__all__ = ["build", "config", "simulate", "view"]

from . import build, config, simulate, view
