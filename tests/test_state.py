"""Tests for watch states, targets and the transition function."""

from __future__ import annotations

import os
from dataclasses import FrozenInstanceError, dataclass
from pathlib import Path

import pytest

from fwatch import (
    ABSENT,
    Absent,
    BasicTarget,
    Present,
    Transition,
    Watchable,
    classify,
    path_of,
)

KNOWN = Present(1_000)
OTHER = Present(2_000)
UNKNOWN = Present(None)


class TestClassify:
    """Every row of the transition table."""

    @pytest.mark.parametrize(
        ("previous", "current", "expected"),
        [
            (ABSENT, ABSENT, Transition.NONE),
            (ABSENT, KNOWN, Transition.CREATED),
            (ABSENT, UNKNOWN, Transition.CREATED),
            (KNOWN, ABSENT, Transition.DELETED),
            (UNKNOWN, ABSENT, Transition.DELETED),
            (KNOWN, OTHER, Transition.MODIFIED),
            (KNOWN, Present(1_000), Transition.NONE),
            (KNOWN, UNKNOWN, Transition.NONE),
            (UNKNOWN, KNOWN, Transition.NONE),
            (UNKNOWN, UNKNOWN, Transition.NONE),
        ],
    )
    def test_table(self, previous, current, expected) -> None:
        assert classify(previous, current) is expected

    def test_modified_needs_both_timestamps(self) -> None:
        """An unknown timestamp on either side never reads as a modification."""
        for previous, current in [(KNOWN, UNKNOWN), (UNKNOWN, OTHER)]:
            assert classify(previous, current) is not Transition.MODIFIED

    def test_older_timestamp_is_still_modified(self) -> None:
        """Any difference counts, including a clock moving backwards."""
        assert classify(OTHER, KNOWN) is Transition.MODIFIED


class TestStates:
    """Test the state value types."""

    def test_absent_is_a_singleton_value(self) -> None:
        assert Absent() == ABSENT
        assert not ABSENT.exists

    def test_present_equality_by_timestamp(self) -> None:
        assert Present(5) == Present(5)
        assert Present(5) != Present(6)
        assert Present(None) != ABSENT

    def test_present_mtime_in_seconds(self) -> None:
        assert Present(1_500_000_000).mtime == 1.5
        assert UNKNOWN.mtime is None
        assert KNOWN.exists

    def test_states_are_immutable(self) -> None:
        with pytest.raises(FrozenInstanceError):
            KNOWN.mtime_ns = 3  # type: ignore[misc]


class TestTargets:
    """Test BasicTarget and the Watchable protocol."""

    def test_basic_target_accepts_path_like(self, tmp_path: Path) -> None:
        target = BasicTarget(tmp_path / "a.txt")
        assert target.path == os.fspath(tmp_path / "a.txt")
        assert path_of(target) == target.path

    def test_basic_target_keeps_path_verbatim(self) -> None:
        """Trailing separators and dot segments are not normalised away."""
        assert BasicTarget("logs/").path == "logs/"
        assert BasicTarget("./a//b").path == "./a//b"
        assert BasicTarget("logs/") != BasicTarget("logs")

    def test_basic_target_accepts_bytes(self) -> None:
        assert BasicTarget(b"raw.bin").path == b"raw.bin"

    def test_basic_target_is_immutable(self) -> None:
        target = BasicTarget("a")
        with pytest.raises(FrozenInstanceError):
            target.path = "b"  # type: ignore[misc]

    def test_custom_target_satisfies_protocol(self) -> None:
        """Client types only need a path; extra data is theirs."""

        @dataclass(frozen=True)
        class Job:
            path: str
            owner: str

        job = Job("out.log", owner="ci")
        assert isinstance(job, Watchable)
        assert isinstance(BasicTarget("x"), Watchable)
        assert path_of(job) == "out.log"

    def test_object_without_path_is_not_watchable(self) -> None:
        assert not isinstance(object(), Watchable)
