"""Simulated on-chain verification against the configured RPC endpoint."""

from __future__ import annotations

import json
import logging
from dataclasses import dataclass, field
from typing import Any

import httpx

from core.config import DEFAULT_FEE_SAMPLE_LIMIT
from core.errors import TransportError
from schemas.internal.simulation import (
    EnvelopeStats,
    FeeSample,
    SimulationRequest,
    SimulationResult,
)
from schemas.project import NetworkConfig
from simulation.rpc import SolanaRpcClient
from simulation.transaction import build_verification_envelope

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class SimulationOutcome:
    request: SimulationRequest
    result: SimulationResult
    envelope: EnvelopeStats
    fee_samples: list[FeeSample] = field(default_factory=list)
    warnings: list[str] = field(default_factory=list)


def _as_non_negative_int(value: Any) -> int:
    if isinstance(value, bool) or not isinstance(value, int):
        return 0
    return max(value, 0)


def parse_simulation_value(value: dict[str, Any], rpc_url: str) -> SimulationResult:
    logs = value.get("logs") or []
    if not isinstance(logs, list):
        raise TransportError(rpc_url, "simulateTransaction: logs is not a list")
    error = value.get("err")
    return SimulationResult(
        status="Failed" if error is not None else "Success",
        units_consumed=_as_non_negative_int(value.get("unitsConsumed")),
        logs=[str(line) for line in logs],
        error=error,
    )


def parse_fee_samples(entries: list[dict[str, Any]], limit: int) -> list[FeeSample]:
    """Keep the most recent ``limit`` samples, newest slot first."""
    samples = [
        FeeSample(
            slot=_as_non_negative_int(entry.get("slot")),
            prioritization_fee=_as_non_negative_int(entry.get("prioritizationFee")),
        )
        for entry in entries
        if isinstance(entry, dict)
    ]
    samples.sort(key=lambda sample: sample.slot, reverse=True)
    return samples[:limit]


def format_error(error: Any) -> str | None:
    if error is None:
        return None
    if isinstance(error, str):
        return error
    return json.dumps(error, sort_keys=True)


class TransactionSimulator:
    def __init__(
        self,
        network: NetworkConfig,
        *,
        client: httpx.Client | None = None,
        fee_sample_limit: int = DEFAULT_FEE_SAMPLE_LIMIT,
    ) -> None:
        self._network = network
        self._client = client
        self._fee_sample_limit = min(fee_sample_limit, DEFAULT_FEE_SAMPLE_LIMIT)

    def simulate(self, request: SimulationRequest) -> SimulationOutcome:
        """Build, simulate and sample fees.

        The program id is validated while building the envelope, before any
        request leaves the process. Transport failures raise TransportError;
        an on-chain rejection comes back as a ``Failed`` result.
        """
        envelope = build_verification_envelope(request)
        with SolanaRpcClient(self._network.rpc_url, client=self._client) as rpc:
            value = rpc.simulate_transaction(envelope.to_base64())
            result = parse_simulation_value(value, rpc.rpc_url)
            logger.info(
                "Simulation %s: %d CU consumed, %d log lines",
                result.status,
                result.units_consumed,
                len(result.logs),
            )
            fee_samples, warnings = self._fetch_fee_samples(rpc)
        return SimulationOutcome(
            request=request,
            result=result,
            envelope=envelope.stats(),
            fee_samples=fee_samples,
            warnings=warnings,
        )

    def _fetch_fee_samples(self, rpc: SolanaRpcClient) -> tuple[list[FeeSample], list[str]]:
        try:
            entries = rpc.get_recent_prioritization_fees()
        except TransportError as exc:
            logger.warning("Could not fetch prioritization fees: %s", exc.detail)
            return [], [f"Could not fetch prioritization fees: {exc.detail}"]
        return parse_fee_samples(entries, self._fee_sample_limit), []


__all__ = [
    "SimulationOutcome",
    "TransactionSimulator",
    "format_error",
    "parse_fee_samples",
    "parse_simulation_value",
]
