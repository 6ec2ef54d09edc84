"""
Tests for the parse-generation arena.
"""

import pytest

from FormulaEngine.arena import Arena, ARENA_DEFAULT_CAP, align


class TestAlign:
    """Tests for the 8-byte rounding helper."""

    @pytest.mark.parametrize("size,expected", [(0, 0), (1, 8), (7, 8), (8, 8), (9, 16), (32, 32)])
    def test_rounds_up_to_multiple_of_eight(self, size, expected):
        assert align(size) == expected


class TestArena:
    """Tests for allocation, exhaustion and reset."""

    def test_default_capacity(self):
        arena = Arena()
        assert arena.capacity == ARENA_DEFAULT_CAP == 64 * 1024
        assert arena.used == 0

    def test_offsets_are_aligned(self):
        arena = Arena(256)
        offsets = [arena.alloc(size) for size in (3, 13, 1, 32)]
        assert offsets == [0, 8, 24, 32]
        assert all(offset % 8 == 0 for offset in offsets)
        assert arena.used == 64

    def test_alloc_fails_once_full(self):
        arena = Arena(16)
        assert arena.alloc(8) == 0
        assert arena.alloc(9) is None
        # A failed allocation leaves the arena untouched
        assert arena.used == 8
        assert arena.alloc(8) == 8
        assert arena.alloc(1) is None
        assert arena.remaining == 0

    def test_reset_starts_a_new_generation(self):
        arena = Arena(64)
        arena.alloc(64)
        generation = arena.generation

        arena.reset()

        assert arena.used == 0
        assert arena.generation == generation + 1
        assert arena.alloc(64) == 0

    def test_destroy_releases_capacity(self):
        arena = Arena(64)
        arena.destroy()
        assert arena.capacity == 0
        assert arena.alloc(1) is None

    def test_negative_capacity_rejected(self):
        with pytest.raises(ValueError):
            Arena(-1)
