"""Schema package for persisted and internal contracts."""

from .project import NetworkConfig, ProjectConfig
from .report import CostReport

__all__ = ["CostReport", "NetworkConfig", "ProjectConfig"]
