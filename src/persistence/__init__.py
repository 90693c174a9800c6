"""Persistence subsystem exports."""

from persistence.fs_store import atomic_write_bytes, atomic_write_text
from persistence.project_store import ProjectStore
from persistence.report_store import ReportStore, build_cost_report

__all__ = [
    "ProjectStore",
    "ReportStore",
    "atomic_write_bytes",
    "atomic_write_text",
    "build_cost_report",
]
