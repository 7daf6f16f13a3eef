"""Tests for checkpoint sampling."""

import dataclasses
import random

import pytest

from worldmap.checkpoint import Checkpoint


def test_random_position_stays_inside_rectangle():
    checkpoint = Checkpoint(id=7, x=10, y=20, w=3, h=5)
    rng = random.Random(1234)

    for _ in range(10_000):
        x, y = checkpoint.random_position(rng)
        assert 10 <= x < 13
        assert 20 <= y < 25
        assert checkpoint.contains(x, y)


def test_random_position_reaches_every_tile():
    checkpoint = Checkpoint(id="small", x=0, y=0, w=2, h=2)
    rng = random.Random(99)

    seen = {checkpoint.random_position(rng) for _ in range(500)}
    assert seen == {(0, 0), (1, 0), (0, 1), (1, 1)}


def test_random_position_without_rng_uses_module_random():
    checkpoint = Checkpoint(id=1, x=5, y=5, w=1, h=1)
    assert checkpoint.random_position() == (5, 5)


def test_contains_excludes_far_edges():
    checkpoint = Checkpoint(id=1, x=2, y=2, w=3, h=2)

    assert checkpoint.contains(2, 2)
    assert checkpoint.contains(4, 3)
    assert not checkpoint.contains(5, 3)
    assert not checkpoint.contains(4, 4)
    assert not checkpoint.contains(1, 2)


def test_checkpoint_is_immutable():
    checkpoint = Checkpoint(id=1, x=0, y=0, w=1, h=1)
    with pytest.raises(dataclasses.FrozenInstanceError):
        checkpoint.x = 3
