from __future__ import annotations

import pytest

from pebbles_game.random_source import (
    SeededRandomSource,
    SequenceRandomSource,
    SystemRandomSource,
    random_source_from_env,
)


def test_sequence_source_cycles() -> None:
    rng = SequenceRandomSource([3, 1])
    assert [rng.next() for _ in range(5)] == [3, 1, 3, 1, 3]
    assert rng.calls == 5


def test_sequence_source_rejects_bad_values() -> None:
    with pytest.raises(ValueError):
        SequenceRandomSource([])
    with pytest.raises(ValueError):
        SequenceRandomSource([1, -1])


def test_seeded_source_is_reproducible() -> None:
    a = SeededRandomSource(42)
    b = SeededRandomSource(42)
    assert [a.next() for _ in range(10)] == [b.next() for _ in range(10)]
    assert a.seed == 42


def test_system_source_draws_non_negative_u32() -> None:
    rng = SystemRandomSource()
    for _ in range(20):
        assert 0 <= rng.next() < 2**32


def test_random_source_from_env(monkeypatch: pytest.MonkeyPatch) -> None:
    monkeypatch.setenv("PEBBLES_RANDOM_SEED", "7")
    rng = random_source_from_env()
    assert isinstance(rng, SeededRandomSource)
    assert rng.seed == 7

    monkeypatch.delenv("PEBBLES_RANDOM_SEED")
    assert isinstance(random_source_from_env(), SystemRandomSource)
