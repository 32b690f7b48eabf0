"""Rules layer — move history, legality, special moves and status derivation.

Quick start::

    from chessrules.core import Board, Position
    from chessrules.rules import GameStateChecker, MoveHistory, MoveValidator

    board = Board.initial()
    history = MoveHistory()
    validator = MoveValidator(board, history)
    print(validator.get_valid_moves(Position(1, 4)))
    print(GameStateChecker(board, validator, history).game_state())
"""

from chessrules.rules.config import RulesConfig
from chessrules.rules.history import DoubleStep, MoveHistory, MoveRecord
from chessrules.rules.special_moves import (
    PROMOTION_KINDS,
    SpecialMoveResult,
    SpecialMovesHandler,
)
from chessrules.rules.state_checker import GameStateChecker
from chessrules.rules.validator import MovePair, MoveValidator

__all__ = [
    # Configuration
    "RulesConfig",
    # History
    "DoubleStep",
    "MoveHistory",
    "MoveRecord",
    # Legality
    "MovePair",
    "MoveValidator",
    "PROMOTION_KINDS",
    "SpecialMoveResult",
    "SpecialMovesHandler",
    # Status
    "GameStateChecker",
]
