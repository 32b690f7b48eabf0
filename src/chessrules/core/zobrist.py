"""Zobrist keys identifying a board position for repetition detection."""

from __future__ import annotations

from typing import TYPE_CHECKING, Final

from chessrules.core.enums import Color, PieceKind
from chessrules.core.position import BOARD_SIZE

if TYPE_CHECKING:
    from chessrules.core.board import Board

_MASK_64: Final = 0xFFFFFFFFFFFFFFFF
_GOLDEN_GAMMA: Final = 0x9E3779B97F4A7C15

_SQUARES: Final = BOARD_SIZE * BOARD_SIZE
_PIECE_SLOTS: Final = len(Color) * len(PieceKind) * _SQUARES

# Layout of the key table: piece slots, side to move, 16 castling masks,
# one en-passant key per column.
_SIDE_SLOT: Final = _PIECE_SLOTS
_CASTLING_BASE: Final = _SIDE_SLOT + 1
_EN_PASSANT_BASE: Final = _CASTLING_BASE + 16
_TABLE_SIZE: Final = _EN_PASSANT_BASE + BOARD_SIZE


def _key_stream(seed: int, count: int) -> tuple[int, ...]:
    """*count* successive splitmix64 outputs starting from *seed*."""
    keys: list[int] = []
    state = seed
    for _ in range(count):
        state = (state + _GOLDEN_GAMMA) & _MASK_64
        z = state
        z = ((z ^ (z >> 30)) * 0xBF58476D1CE4E5B9) & _MASK_64
        z = ((z ^ (z >> 27)) * 0x94D049BB133111EB) & _MASK_64
        keys.append(z ^ (z >> 31))
    return tuple(keys)


_KEYS: Final = _key_stream(0x5EEDC0DE2B1D7A49, _TABLE_SIZE)


def _piece_slot(kind: PieceKind, color: Color, row: int, column: int) -> int:
    kind_index = int(color) * len(PieceKind) + int(kind) - 1
    return kind_index * _SQUARES + row * BOARD_SIZE + column


def position_key(
    board: Board,
    side_to_move: Color | None = None,
    en_passant_column: int | None = None,
) -> int:
    """Full key for *board*; *side_to_move* defaults to the board's turn.

    Castling rights come from the board itself. *en_passant_column* should
    only be given when a capture on that column is actually available.
    """
    side = board.current_player if side_to_move is None else side_to_move
    key = _KEYS[_CASTLING_BASE + (int(board.castling_rights()) & 0xF)]
    if side == Color.BLACK:
        key ^= _KEYS[_SIDE_SLOT]
    if en_passant_column is not None:
        key ^= _KEYS[_EN_PASSANT_BASE + en_passant_column]
    for piece in board.pieces():
        pos = piece.position
        assert pos is not None
        key ^= _KEYS[_piece_slot(piece.kind, piece.color, pos.row, pos.column)]
    return key
