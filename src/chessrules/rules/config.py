"""Rule configuration: draw thresholds and promotion defaults."""

from __future__ import annotations

from dataclasses import dataclass

from chessrules.core.enums import PieceKind


@dataclass(frozen=True, slots=True)
class RulesConfig:
    """Immutable rule settings shared by the rules components.

    Args:
        fifty_move_limit: Plies counted by the fifty-move rule before a draw.
        fifty_move_resets: Whether captures and pawn moves reset that count.
            When ``False`` every recorded move counts.
        repetition_limit: Occurrences of one position that make a draw.
        default_promotion: Kind used when no valid promotion is chosen.
    """

    fifty_move_limit: int = 100
    fifty_move_resets: bool = True
    repetition_limit: int = 3
    default_promotion: PieceKind = PieceKind.QUEEN

    @classmethod
    def standard(cls) -> RulesConfig:
        """FIDE-style: 50 moves per side without capture or pawn move."""
        return cls()

    @classmethod
    def legacy(cls) -> RulesConfig:
        """Draw once 50 moves have been recorded, whatever they were."""
        return cls(fifty_move_limit=50, fifty_move_resets=False)

    def __repr__(self) -> str:
        mode = "reset" if self.fifty_move_resets else "total"
        return (
            f"RulesConfig(fifty={self.fifty_move_limit}/{mode}, "
            f"repetition={self.repetition_limit}, "
            f"promotion={self.default_promotion.name})"
        )
