import pytest

from costing.severity import (
    classify,
    classify_compute_usage,
    classify_message_size,
    classify_proof_size,
)


@pytest.mark.parametrize(
    ("consumed", "expected"),
    [
        (0, "optimal"),
        (349_999, "optimal"),
        (350_000, "monitor"),
        (450_000, "monitor"),
        (450_001, "critical"),
        (500_000, "critical"),
    ],
)
def test_compute_usage_boundaries(consumed: int, expected: str) -> None:
    assert classify_compute_usage(consumed, 500_000) == expected


def test_compute_usage_with_zero_budget() -> None:
    assert classify_compute_usage(0, 0) == "optimal"
    assert classify_compute_usage(1, 0) == "critical"


@pytest.mark.parametrize(
    ("size", "expected"),
    [(0, "optimal"), (499, "optimal"), (500, "monitor"), (1000, "monitor"), (1001, "critical")],
)
def test_proof_size_bands(size: int, expected: str) -> None:
    assert classify_proof_size(size) == expected


@pytest.mark.parametrize(
    ("size", "expected"),
    [(999, "safe"), (1000, "warning"), (1232, "warning"), (1233, "critical")],
)
def test_message_size_bands(size: int, expected: str) -> None:
    assert classify_message_size(size) == expected


def test_proof_of_256_plus_600_is_monitor() -> None:
    assert classify_proof_size(256 + 600) == "monitor"


def test_classify_rejects_inverted_bounds() -> None:
    with pytest.raises(ValueError):
        classify(5, 10, 1, ("a", "b", "c"))
