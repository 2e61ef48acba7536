"""Unit tests for cube hex coordinates."""

import pytest

from robowars.board.hex_coord import ROTATION_STEPS, HexCoord


class TestReduceAndVector:
    """reduce() folds y away; to_vector() restores the shortest walk."""

    @pytest.mark.parametrize(
        "start, reduced, vector",
        [
            ((4, 5, 0), (9, 0, 5), (4, 5, 0)),
            ((1, 0, 0), (1, 0, 0), (1, 0, 0)),
            ((-4, 5, 0), (1, 0, 5), (0, 1, 4)),
            ((-5, 5, -6), (0, 0, -1), (0, 0, -1)),
            ((-4, 0, 4), (-4, 0, 4), (-4, 0, 4)),
        ],
    )
    def test_literal_cases(self, start, reduced, vector):
        coord = HexCoord(*start)
        coord.reduce()
        assert (coord.x, coord.y, coord.z) == reduced
        coord.to_vector()
        assert (coord.x, coord.y, coord.z) == vector

    def test_negative_same_sign_uses_larger_component(self):
        coord = HexCoord(-3, 0, -5)
        coord.to_vector()
        assert coord == HexCoord(0, -3, -2)

    def test_reduced_does_not_mutate(self):
        coord = HexCoord(1, 2, 3)
        assert coord.reduced() == HexCoord(3, 0, 5)
        assert coord == HexCoord(1, 2, 3)


class TestIsSameAs:
    def test_equivalent_walks_are_same(self):
        assert HexCoord(0, 1, 0).is_same_as(HexCoord(1, 0, 1))

    def test_different_hexes_are_not_same(self):
        assert not HexCoord(1, 0, 0).is_same_as(HexCoord(0, 0, 1))

    def test_reflexive_and_symmetric(self):
        a, b = HexCoord(2, -1, 0), HexCoord(1, 0, -1)
        assert a.is_same_as(a)
        assert a.is_same_as(b) and b.is_same_as(a)

    def test_reduces_both_operands_in_place(self):
        a, b = HexCoord(4, 5, 0), HexCoord(-4, 5, 0)
        a.is_same_as(b)
        assert a == HexCoord(9, 0, 5)
        assert b == HexCoord(1, 0, 5)


class TestGeometry:
    def test_six_distinct_neighbours(self):
        origin = HexCoord()
        neighbours = {str(origin.neighbor(r).reduced()) for r in range(6)}
        assert len(neighbours) == 6
        assert len(ROTATION_STEPS) == 6

    def test_neighbor_wraps_rotation(self):
        assert HexCoord().neighbor(7) == HexCoord().neighbor(1)

    def test_neighbours_are_one_step_away(self):
        origin = HexCoord(2, 0, -1)
        for r in range(6):
            assert origin.distance_to(origin.neighbor(r)) == 1

    def test_opposite_rotations_cancel(self):
        coord = HexCoord().neighbor(2).neighbor(5)
        assert coord.is_same_as(HexCoord())

    @pytest.mark.parametrize(
        "target, expected",
        [
            (HexCoord(0, 0, 0), 0),
            (HexCoord(4, 0, 5), 5),
            (HexCoord(-2, 0, 3), 5),
            (HexCoord(-3, 0, -1), 3),
        ],
    )
    def test_distance_from_origin(self, target, expected):
        assert HexCoord().distance_to(target) == expected

    def test_distance_is_symmetric(self):
        a, b = HexCoord(1, 0, -2), HexCoord(-3, 0, 2)
        assert a.distance_to(b) == b.distance_to(a) == 8

    def test_displacement_is_vector_form(self):
        assert HexCoord(1, 0, 1).displacement(HexCoord(5, 0, 6)) == HexCoord(0, 4, 1)

    def test_str(self):
        assert str(HexCoord(1, -2, 3)) == "(1, -2, 3)"
