"""Tests for Position and coordinate helpers."""

import dataclasses

import pytest

from chessrules.core.position import (
    BOARD_SIZE,
    InvalidPosition,
    Position,
    all_positions,
    is_on_board,
)


class TestConstruction:
    def test_valid_corners(self) -> None:
        for row, col in ((0, 0), (0, 7), (7, 0), (7, 7)):
            pos = Position(row, col)
            assert (pos.row, pos.column) == (row, col)

    @pytest.mark.parametrize("row, col", [(-1, 0), (0, -1), (8, 0), (0, 8), (9, 9)])
    def test_out_of_range_raises(self, row: int, col: int) -> None:
        with pytest.raises(InvalidPosition):
            Position(row, col)

    def test_invalid_position_is_value_error(self) -> None:
        with pytest.raises(ValueError, match="Invalid position"):
            Position(8, 8)

    def test_is_on_board(self) -> None:
        assert is_on_board(0, 0)
        assert is_on_board(7, 7)
        assert not is_on_board(-1, 3)
        assert not is_on_board(3, 8)

    def test_frozen(self) -> None:
        pos = Position(3, 3)
        with pytest.raises(dataclasses.FrozenInstanceError):
            pos.row = 4  # type: ignore[misc]

    def test_value_equality_and_hash(self) -> None:
        assert Position(2, 5) == Position(2, 5)
        assert len({Position(2, 5), Position(2, 5), Position(5, 2)}) == 2


class TestGeometry:
    def test_distances(self) -> None:
        a, b = Position(0, 0), Position(3, 5)
        assert a.row_distance(b) == 3
        assert a.column_distance(b) == 5
        assert a.distance(b) == 5

    def test_same_line_helpers(self) -> None:
        origin = Position(3, 3)
        assert origin.is_same_row(Position(3, 7))
        assert origin.is_same_column(Position(0, 3))
        assert origin.is_same_diagonal(Position(6, 0))
        assert not origin.is_same_diagonal(Position(5, 6))

    def test_offset_inside(self) -> None:
        assert Position(3, 3).offset(1, 1) == Position(4, 4)
        assert Position(3, 3).offset(-3, 4) == Position(0, 7)

    def test_offset_off_board_returns_none(self) -> None:
        assert Position(0, 0).offset(-1, 0) is None
        assert Position(7, 7).offset(0, 1) is None
        assert Position(6, 1).offset(2, -1) is None

    def test_square_color(self) -> None:
        assert Position(0, 0).is_light
        assert not Position(0, 1).is_light


class TestNotation:
    def test_corner_names(self) -> None:
        assert Position(7, 0).to_algebraic() == "a1"
        assert Position(0, 7).to_algebraic() == "h8"
        assert Position(0, 0).to_algebraic() == "a8"
        assert Position(7, 7).to_algebraic() == "h1"

    def test_from_algebraic(self) -> None:
        assert Position.from_algebraic("a1") == Position(7, 0)
        assert Position.from_algebraic("e8") == Position(0, 4)

    def test_round_trip_all_squares(self) -> None:
        for pos in all_positions():
            assert Position.from_algebraic(pos.to_algebraic()) == pos

    @pytest.mark.parametrize("name", ["", "e", "e10", "z9", "i1", "a0", "A1", "11"])
    def test_malformed_names_raise(self, name: str) -> None:
        with pytest.raises(InvalidPosition):
            Position.from_algebraic(name)

    def test_str_and_repr(self) -> None:
        pos = Position(1, 4)
        assert str(pos) == "e7"
        assert repr(pos) == "Position(1, 4)"


class TestAllPositions:
    def test_count_and_order(self) -> None:
        squares = all_positions()
        assert len(squares) == BOARD_SIZE * BOARD_SIZE
        assert squares[0] == Position(0, 0)
        assert squares[1] == Position(0, 1)
        assert squares[-1] == Position(7, 7)
