"""Project initialization and network configuration commands."""

from __future__ import annotations

import logging
from pathlib import Path

from core.config import Settings
from core.errors import InvalidConfigValue
from persistence.project_store import ProjectStore
from schemas.project import ProjectConfig, parse_network

logger = logging.getLogger(__name__)


def project_store(root: str | Path, settings: Settings) -> ProjectStore:
    return ProjectStore(Path(root).resolve(), config_dir_name=settings.config_dir_name)


def initialize_project(root: str | Path, settings: Settings) -> tuple[ProjectStore, ProjectConfig, bool]:
    """Create ``.zklense/config.toml`` with defaults unless it already exists."""
    store = project_store(root, settings)
    config, created = store.initialize(ProjectConfig(web_app_url=settings.web_app_url))
    return store, config, created


def load_project_config(root: str | Path, settings: Settings) -> ProjectConfig:
    return project_store(root, settings).load()


def set_network(root: str | Path, settings: Settings, name: str) -> ProjectConfig:
    try:
        network = parse_network(name)
    except ValueError as exc:
        raise InvalidConfigValue(str(exc)) from exc
    store = project_store(root, settings)
    config = store.load().with_network(network)
    store.save(config)
    logger.info("Network set to %s (%s)", config.network.name, config.network.rpc_url)
    return config


def set_rpc_url(root: str | Path, settings: Settings, url: str) -> ProjectConfig:
    store = project_store(root, settings)
    try:
        config = store.load().with_rpc_url(url)
    except ValueError as exc:
        raise InvalidConfigValue(str(exc)) from exc
    store.save(config)
    return config


def reset_rpc_url(root: str | Path, settings: Settings) -> ProjectConfig:
    store = project_store(root, settings)
    config = store.load().with_default_rpc()
    store.save(config)
    return config


__all__ = [
    "initialize_project",
    "load_project_config",
    "project_store",
    "reset_rpc_url",
    "set_network",
    "set_rpc_url",
]
