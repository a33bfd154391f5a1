"""
Tests for the Result[P] envelope and the section Timer.
"""

from dataclasses import FrozenInstanceError, dataclass

import pytest

from pytreatreg.core.result import Result
from pytreatreg.core.compute.timing import Timer


@dataclass(frozen=True)
class FakeParams:
    """Minimal payload for testing."""
    value: float


class TestResult:

    def test_basic_creation(self):
        result = Result(
            params=FakeParams(value=42.0),
            info={"method": "test"},
            timing=None,
            backend_name="cpu_test",
        )
        assert result.params.value == 42.0
        assert result.info["method"] == "test"
        assert result.warnings == ()

    def test_frozen(self):
        result = Result(params=FakeParams(1.0), info={}, timing=None, backend_name="x")
        with pytest.raises(FrozenInstanceError):
            result.backend_name = "y"

    def test_has_warning(self):
        result = Result(
            params=FakeParams(1.0),
            info={},
            timing=None,
            backend_name="x",
            warnings=("X'X is ill-conditioned", "other"),
        )
        assert result.has_warning("ill-conditioned")
        assert not result.has_warning("singular")


class TestTimer:

    def test_sections_recorded(self):
        with Timer() as timer:
            with timer.section("gram"):
                pass
            with timer.section("gram"):
                pass
        out = timer.result()
        assert set(out) == {"total_seconds", "gram"}
        assert out["total_seconds"] >= out["gram"] >= 0.0

    def test_total_unavailable_while_running(self):
        with Timer() as timer:
            with pytest.raises(RuntimeError, match="still running"):
                timer.total_seconds

    def test_total_recorded_when_block_raises(self):
        timer = Timer()
        with pytest.raises(ZeroDivisionError):
            with timer:
                1 / 0
        assert timer.total_seconds >= 0.0
