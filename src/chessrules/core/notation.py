"""Parsing of the text commands players type.

Grammar (tokens separated by whitespace)::

    <square> <square>                    plain move, e.g. "e2 e4"
    <square> <square> <Q|R|B|N>          move with promotion choice
    <square> <square> draw?              move and offer a draw
    <square> <square> <Q|R|B|N> draw?    both
    resign
    draw                                 accept the opponent's offer

Squares are a file letter ``a``–``h`` followed by a rank digit ``1``–``8``.
"""

from __future__ import annotations

from dataclasses import dataclass
from typing import TypeAlias

from chessrules.core.move import MoveRequest
from chessrules.core.piece import PROMOTION_LETTERS
from chessrules.core.types import Square, parse_square

DRAW_OFFER_TOKEN = "draw?"
RESIGN_TOKEN = "resign"
ACCEPT_DRAW_TOKEN = "draw"


class NotationError(ValueError):
    """Raised when a command cannot be parsed."""


@dataclass(frozen=True, slots=True)
class Resign:
    """The side to move gives up."""


@dataclass(frozen=True, slots=True)
class AcceptDraw:
    """The side to move accepts the opponent's outstanding draw offer."""


Command: TypeAlias = MoveRequest | Resign | AcceptDraw


def parse_command(text: str) -> Command:
    """Parse one line of player input into a :data:`Command`."""
    tokens = text.split()
    if not tokens:
        raise NotationError("Empty command")

    if len(tokens) == 1:
        if tokens[0] == RESIGN_TOKEN:
            return Resign()
        if tokens[0] == ACCEPT_DRAW_TOKEN:
            return AcceptDraw()
        raise NotationError(f"Unknown command: {tokens[0]!r}")

    if len(tokens) > 4:
        raise NotationError(f"Too many tokens: {text!r}")

    origin = _parse_square_token(tokens[0])
    destination = _parse_square_token(tokens[1])
    extras = tokens[2:]

    offer_draw = False
    if extras and extras[-1] == DRAW_OFFER_TOKEN:
        offer_draw = True
        extras = extras[:-1]

    promotion = None
    if extras:
        if len(extras) != 1 or extras[0] not in PROMOTION_LETTERS:
            raise NotationError(f"Invalid promotion piece: {extras[0]!r}")
        promotion = PROMOTION_LETTERS[extras[0]]

    return MoveRequest(origin, destination, promotion, offer_draw)


def _parse_square_token(token: str) -> Square:
    try:
        return parse_square(token)
    except ValueError:
        raise NotationError(f"Invalid square: {token!r}") from None
