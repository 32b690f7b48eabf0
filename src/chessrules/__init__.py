"""chessrules — a rules engine for standard chess.

Layers, leaf first: :mod:`chessrules.core` (coordinates, pieces, board),
:mod:`chessrules.rules` (history, legality, special moves, status) and
:mod:`chessrules.game` (the orchestrator a presentation layer talks to).
"""

__version__ = "0.1.0"
