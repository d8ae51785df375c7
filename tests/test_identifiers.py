"""Tests for share identifier generation and the record clock."""

import random
import re

import pytest

from slotshare.errors import IdentifierExhausted
from slotshare.services.clock import MonotonicClock
from slotshare.services.identifiers import IdGenerator


def test_generates_six_lowercase_alphanumerics():
    """Test the default identifier shape."""
    generator = IdGenerator(rng=random.Random(7))
    identifier = generator.generate(lambda candidate: False)
    assert re.fullmatch(r"[a-z0-9]{6}", identifier)


def test_retries_on_collision():
    """Test a taken identifier is never returned."""
    taken = set()
    generator = IdGenerator(rng=random.Random(7))
    first = generator.generate(lambda candidate: False)
    taken.add(first)

    # Replay the same random sequence so the first sample collides
    replay = IdGenerator(rng=random.Random(7))
    second = replay.generate(lambda candidate: candidate in taken)
    assert second != first
    assert re.fullmatch(r"[a-z0-9]{6}", second)


def test_falls_back_to_numeric_suffix():
    """Test suffixed identifiers are tried once plain samples are exhausted."""
    generator = IdGenerator(max_attempts=3, rng=random.Random(7))
    identifier = generator.generate(lambda candidate: len(candidate) == 6)
    assert re.fullmatch(r"[a-z0-9]{6}[0-9]{2}", identifier)


def test_exhausted_raises():
    """Test a bounded number of attempts before failing."""
    attempts = []

    def always_taken(candidate: str) -> bool:
        attempts.append(candidate)
        return True

    generator = IdGenerator(max_attempts=4, rng=random.Random(7))
    with pytest.raises(IdentifierExhausted):
        generator.generate(always_taken)
    assert len(attempts) == 8


def test_clock_strictly_increases():
    """Test the clock never repeats a reading even when the source stalls."""
    clock = MonotonicClock(source=lambda: 1_000)
    readings = [clock.now() for _ in range(3)]
    assert readings == [1_000, 1_001, 1_002]


def test_clock_follows_source():
    """Test the clock reports the source once it moves ahead."""
    values = iter([5, 100])
    clock = MonotonicClock(source=lambda: next(values))
    assert clock.now() == 5
    assert clock.now() == 100
