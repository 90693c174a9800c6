"""Minimal Solana JSON-RPC client for simulation and fee sampling."""

from __future__ import annotations

import logging
from itertools import count
from typing import Any

import httpx

from core.errors import TransportError

logger = logging.getLogger(__name__)


class SolanaRpcClient:
    """One POST per call; errors are raised, never retried."""

    def __init__(self, rpc_url: str, *, client: httpx.Client | None = None) -> None:
        self._rpc_url = rpc_url
        self._client = client or httpx.Client()
        self._owns_client = client is None
        self._ids = count(1)

    @property
    def rpc_url(self) -> str:
        return self._rpc_url

    def close(self) -> None:
        if self._owns_client:
            self._client.close()

    def __enter__(self) -> "SolanaRpcClient":
        return self

    def __exit__(self, *_exc: object) -> None:
        self.close()

    def call(self, method: str, params: list[Any]) -> Any:
        payload = {"jsonrpc": "2.0", "id": next(self._ids), "method": method, "params": params}
        logger.debug("RPC %s -> %s", method, self._rpc_url)
        try:
            response = self._client.post(self._rpc_url, json=payload)
            response.raise_for_status()
        except httpx.HTTPError as exc:
            raise TransportError(self._rpc_url, f"{method}: {exc}") from exc
        try:
            body = response.json()
        except ValueError as exc:
            raise TransportError(self._rpc_url, f"{method}: response is not JSON") from exc
        if not isinstance(body, dict):
            raise TransportError(self._rpc_url, f"{method}: unexpected response shape")
        error = body.get("error")
        if error is not None:
            if isinstance(error, dict):
                detail = f"{error.get('code')}: {error.get('message')}"
            else:
                detail = str(error)
            raise TransportError(self._rpc_url, f"{method}: {detail}")
        if "result" not in body:
            raise TransportError(self._rpc_url, f"{method}: response has no result")
        return body["result"]

    def simulate_transaction(self, encoded_transaction: str) -> dict[str, Any]:
        result = self.call(
            "simulateTransaction",
            [
                encoded_transaction,
                {
                    "encoding": "base64",
                    "sigVerify": False,
                    "replaceRecentBlockhash": True,
                    "commitment": "confirmed",
                },
            ],
        )
        value = result.get("value") if isinstance(result, dict) else None
        if not isinstance(value, dict):
            raise TransportError(self._rpc_url, "simulateTransaction: missing result value")
        return value

    def get_recent_prioritization_fees(self) -> list[dict[str, Any]]:
        result = self.call("getRecentPrioritizationFees", [[]])
        if not isinstance(result, list):
            raise TransportError(self._rpc_url, "getRecentPrioritizationFees: expected a list")
        return result


__all__ = ["SolanaRpcClient"]
