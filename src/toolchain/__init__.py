"""External toolchain invocation and artifact discovery."""

from .gateway import SubprocessToolRunner, ToolInvocation, ToolRunner, missing_tools
from .locator import collect_artifacts, find_artifact

__all__ = [
    "SubprocessToolRunner",
    "ToolInvocation",
    "ToolRunner",
    "collect_artifacts",
    "find_artifact",
    "missing_tools",
]
