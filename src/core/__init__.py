"""Core configuration, errors and shared utilities."""

from dotenv import load_dotenv

from .config import Settings, get_settings
from .errors import ZklenseError

load_dotenv()

__all__ = ["Settings", "ZklenseError", "get_settings"]
