"""Move value objects: the request a player submits and the record of a move."""

from __future__ import annotations

from dataclasses import dataclass

from chessrules.core.enums import MoveFlag, PieceKind
from chessrules.core.types import Square, square_name

_PROMO_CHARS: dict[PieceKind, str] = {
    PieceKind.KNIGHT: "N",
    PieceKind.BISHOP: "B",
    PieceKind.ROOK: "R",
    PieceKind.QUEEN: "Q",
}


@dataclass(frozen=True, slots=True)
class MoveRequest:
    """A structured move coming from the input collaborator."""

    origin: Square
    destination: Square
    promotion: PieceKind | None = None
    offer_draw: bool = False

    def __str__(self) -> str:
        parts = [square_name(self.origin), square_name(self.destination)]
        if self.promotion is not None:
            parts.append(_PROMO_CHARS[self.promotion])
        if self.offer_draw:
            parts.append("draw?")
        return " ".join(parts)


@dataclass(frozen=True, slots=True)
class Move:
    """Immutable record of a move the executor has applied."""

    from_sq: Square
    to_sq: Square
    move_number: int
    flag: MoveFlag = MoveFlag.NORMAL
    promotion: PieceKind | None = None
    captured: PieceKind | None = None

    # ── Display ──────────────────────────────────────────────────────────

    def __str__(self) -> str:
        base = f"{square_name(self.from_sq)}{square_name(self.to_sq)}"
        if self.promotion is not None:
            base += _PROMO_CHARS[self.promotion].lower()
        return base

    @property
    def is_capture(self) -> bool:
        return self.captured is not None
