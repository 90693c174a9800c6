import base64

import pytest
from solders.transaction import Transaction

from core.config import MAX_COMPUTE_UNIT_LIMIT, MAX_COMPUTE_UNIT_PRICE
from core.errors import InvalidConfigValue, InvalidProgramIdentifier
from costing.model import message_within_size
from costing.severity import classify_message_size
from schemas.internal.simulation import SimulationRequest
from simulation.transaction import build_verification_envelope, parse_program_id

PROGRAM_ID = "11111111111111111111111111111111"


def _request(**overrides) -> SimulationRequest:
    values = dict(program_id=PROGRAM_ID, proof=b"\x01" * 256, public_witness=b"\x02" * 44)
    values.update(overrides)
    return SimulationRequest(**values)


@pytest.mark.parametrize("value", ["", "   ", "not-a-program-id!", "0OIl" * 8, "1" * 45])
def test_invalid_program_ids_are_rejected(value: str) -> None:
    with pytest.raises(InvalidProgramIdentifier):
        parse_program_id(value)


def test_program_id_is_trimmed() -> None:
    assert str(parse_program_id(f"  {PROGRAM_ID}\n")) == PROGRAM_ID


def test_envelope_carries_budget_and_verify_instruction() -> None:
    envelope = build_verification_envelope(_request())
    message = envelope.message

    assert len(message.instructions) == 2
    verify = message.instructions[-1]
    assert message.account_keys[verify.program_id_index] == envelope.program_id
    assert bytes(verify.data) == b"\x01" * 256 + b"\x02" * 44
    assert list(verify.accounts) == []


def test_price_adds_second_budget_instruction() -> None:
    envelope = build_verification_envelope(_request(compute_unit_price=1_000))
    assert len(envelope.message.instructions) == 3


def test_envelope_serializes_for_rpc() -> None:
    envelope = build_verification_envelope(_request())

    decoded = Transaction.from_bytes(base64.b64decode(envelope.to_base64()))
    stats = envelope.stats()

    assert decoded.message == envelope.message
    assert stats.num_signatures == 1
    assert stats.message_size == len(bytes(envelope.message))
    assert stats.transaction_size > stats.message_size
    assert stats.message_size > 256 + 44
    assert stats.accounts.num_required_signatures == 1
    assert stats.accounts.writable_signed_accounts == 1


def test_256_plus_600_payload_measures_over_warning_line() -> None:
    envelope = build_verification_envelope(
        _request(proof=b"\x01" * 256, public_witness=b"\x02" * 600)
    )
    message_size = envelope.stats().message_size

    # 145 bytes of legacy-message overhead around the 856-byte payload.
    assert message_size == 1001
    assert classify_message_size(message_size) == "warning"
    assert message_within_size(message_size) is True


@pytest.mark.parametrize(
    "overrides",
    [
        {"compute_unit_limit": MAX_COMPUTE_UNIT_LIMIT + 1},
        {"compute_unit_limit": -1},
        {"compute_unit_price": MAX_COMPUTE_UNIT_PRICE + 1},
    ],
)
def test_out_of_range_budget_is_a_config_error(overrides) -> None:
    with pytest.raises(InvalidConfigValue):
        build_verification_envelope(_request(**overrides))


def test_budget_at_wire_maximum_builds() -> None:
    envelope = build_verification_envelope(
        _request(compute_unit_limit=MAX_COMPUTE_UNIT_LIMIT, compute_unit_price=MAX_COMPUTE_UNIT_PRICE)
    )
    assert len(envelope.message.instructions) == 3
