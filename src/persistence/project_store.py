"""Project layout and ``config.toml`` load/save."""

from __future__ import annotations

import logging
import tomllib
from pathlib import Path

import tomli_w
from pydantic import ValidationError

from core.errors import InvalidConfigValue, NotInitialized
from persistence.fs_store import atomic_write_text
from schemas.project import ProjectConfig

logger = logging.getLogger(__name__)

CONFIG_FILE = "config.toml"
REPORT_FILE = "report.json"


class ProjectStore:
    def __init__(self, root: str | Path, *, config_dir_name: str = ".zklense") -> None:
        self._root = Path(root)
        self._config_dir = self._root / config_dir_name

    @property
    def root(self) -> Path:
        return self._root

    @property
    def config_dir(self) -> Path:
        return self._config_dir

    @property
    def config_path(self) -> Path:
        return self._config_dir / CONFIG_FILE

    @property
    def report_path(self) -> Path:
        return self._config_dir / REPORT_FILE

    def is_initialized(self) -> bool:
        return self.config_path.is_file()

    def initialize(self, config: ProjectConfig | None = None) -> tuple[ProjectConfig, bool]:
        """Create the config directory and file; an existing config is left alone."""
        if self.is_initialized():
            return self.load(), False
        self._config_dir.mkdir(parents=True, exist_ok=True)
        config = config or ProjectConfig()
        self.save(config)
        logger.info("Initialized project config at %s", self.config_path)
        return config, True

    def load(self) -> ProjectConfig:
        if not self.is_initialized():
            raise NotInitialized(self._root)
        try:
            data = tomllib.loads(self.config_path.read_text(encoding="utf-8"))
        except tomllib.TOMLDecodeError as exc:
            raise InvalidConfigValue(f"Failed to parse {self.config_path}: {exc}") from exc
        try:
            return ProjectConfig.model_validate(data)
        except ValidationError as exc:
            raise InvalidConfigValue(f"Invalid configuration in {self.config_path}: {exc}") from exc

    def save(self, config: ProjectConfig) -> Path:
        payload = config.model_dump(mode="python")
        atomic_write_text(self.config_path, tomli_w.dumps(payload))
        logger.debug("Saved project config to %s", self.config_path)
        return self.config_path


__all__ = ["CONFIG_FILE", "REPORT_FILE", "ProjectStore"]
