"""Game management layer — the orchestrator driven by a presentation layer.

Quick start::

    from chessrules.game import GameController

    game = GameController()
    outcome = game.apply_move("e7", "e5")
    print(outcome.accepted, outcome.status)

Row 0 is white's back rank and is named rank 8, so ``"e7"`` to ``"e5"``
above is white's opening king-pawn double step.
"""

from chessrules.game.controller import GameController, GameEvents, MoveOutcome

__all__ = [
    "GameController",
    "GameEvents",
    "MoveOutcome",
]
