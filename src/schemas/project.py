"""Project configuration contracts persisted in ``.zklense/config.toml``."""

from __future__ import annotations

from datetime import datetime, timezone
from typing import Literal, get_args

from pydantic import BaseModel, ConfigDict, Field, field_validator

from core.config import DEFAULT_WEB_APP_URL

CONFIG_SCHEMA_VERSION = "0.1.0"

SolanaNetwork = Literal["mainnet-beta", "devnet", "testnet", "localnet"]

SOLANA_NETWORKS: tuple[SolanaNetwork, ...] = get_args(SolanaNetwork)
DEFAULT_NETWORK: SolanaNetwork = "devnet"

DEFAULT_RPC_URLS: dict[SolanaNetwork, str] = {
    "mainnet-beta": "https://api.mainnet-beta.solana.com",
    "devnet": "https://api.devnet.solana.com",
    "testnet": "https://api.testnet.solana.com",
    "localnet": "http://127.0.0.1:8899",
}

_NETWORK_ALIASES: dict[str, SolanaNetwork] = {
    "mainnet": "mainnet-beta",
    "mainnet-beta": "mainnet-beta",
    "devnet": "devnet",
    "testnet": "testnet",
    "localnet": "localnet",
    "localhost": "localnet",
    "local": "localnet",
}


def parse_network(value: str) -> SolanaNetwork:
    """Resolve a user-supplied network name, accepting common aliases."""
    key = value.strip().lower()
    network = _NETWORK_ALIASES.get(key)
    if network is None:
        allowed = ", ".join(SOLANA_NETWORKS)
        raise ValueError(f"Unknown Solana network {value!r}; expected one of: {allowed}")
    return network


def validate_rpc_url(value: str) -> str:
    url = value.strip()
    if not url.startswith(("http://", "https://")):
        raise ValueError("RPC URL must start with http:// or https://")
    return url


class NetworkConfig(BaseModel):
    name: SolanaNetwork = DEFAULT_NETWORK
    rpc_url: str = DEFAULT_RPC_URLS[DEFAULT_NETWORK]
    custom_rpc: bool = False

    model_config = ConfigDict(extra="forbid", frozen=True)

    @field_validator("rpc_url")
    @classmethod
    def _check_rpc_url(cls, value: str) -> str:
        return validate_rpc_url(value)

    @property
    def default_rpc_url(self) -> str:
        return DEFAULT_RPC_URLS[self.name]

    @classmethod
    def for_network(cls, name: SolanaNetwork) -> "NetworkConfig":
        return cls(name=name, rpc_url=DEFAULT_RPC_URLS[name], custom_rpc=False)


class ProjectConfig(BaseModel):
    """The whole config.toml document."""

    version: str = CONFIG_SCHEMA_VERSION
    initialized_at: datetime = Field(default_factory=lambda: datetime.now(timezone.utc))
    network: NetworkConfig = Field(default_factory=NetworkConfig)
    web_app_url: str = DEFAULT_WEB_APP_URL

    model_config = ConfigDict(extra="ignore", frozen=True)

    def with_network(self, name: SolanaNetwork) -> "ProjectConfig":
        """Switch networks; a custom RPC endpoint is replaced by the new default."""
        return self.model_copy(update={"network": NetworkConfig.for_network(name)})

    def with_rpc_url(self, rpc_url: str) -> "ProjectConfig":
        url = validate_rpc_url(rpc_url)
        custom = url != DEFAULT_RPC_URLS[self.network.name]
        network = NetworkConfig(name=self.network.name, rpc_url=url, custom_rpc=custom)
        return self.model_copy(update={"network": network})

    def with_default_rpc(self) -> "ProjectConfig":
        return self.model_copy(update={"network": NetworkConfig.for_network(self.network.name)})


__all__ = [
    "CONFIG_SCHEMA_VERSION",
    "DEFAULT_NETWORK",
    "DEFAULT_RPC_URLS",
    "NetworkConfig",
    "ProjectConfig",
    "SOLANA_NETWORKS",
    "SolanaNetwork",
    "parse_network",
    "validate_rpc_url",
]
