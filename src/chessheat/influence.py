"""Influence aggregation over a whole board.

Every piece adds its signed material value to each square it attacks. The
same pass records who is involved on each square: a piece landing on a
square held by its own color is a defender there, otherwise an attacker.
Classification is purely local and says nothing about whether a capture
would be legal or safe.
"""

import logging
import math
from dataclasses import dataclass, field

import chess

from chessheat.attacks import attacked_squares
from chessheat.constants import BOARD_SIZE, get_piece_value, piece_code, square_name
from chessheat.position import Board

__all__ = [
    "InfluenceSource",
    "SquareDetails",
    "InfluenceData",
    "compute_influence",
]

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class InfluenceSource:
    piece: chess.Piece
    row: int  # origin square of the piece
    col: int

    @property
    def code(self) -> str:
        return piece_code(self.piece)

    @property
    def square(self) -> str:
        return square_name(self.row, self.col)

    def to_dict(self) -> dict:
        return {
            "piece": self.code,
            "from": {"r": self.row, "c": self.col},
            "square": self.square,
        }


@dataclass
class SquareDetails:
    attackers: list[InfluenceSource] = field(default_factory=list)
    defenders: list[InfluenceSource] = field(default_factory=list)

    def by_color(self, color: chess.Color) -> list[InfluenceSource]:
        """Attackers belonging to one side."""
        return [a for a in self.attackers if a.piece.color == color]

    @property
    def is_empty(self) -> bool:
        return not self.attackers and not self.defenders

    def to_dict(self) -> dict:
        return {
            "attackers": [a.to_dict() for a in self.attackers],
            "defenders": [d.to_dict() for d in self.defenders],
        }


@dataclass
class InfluenceData:
    net: list[list[int]]                 # 8x8, white positive
    details: list[list[SquareDetails]]   # 8x8, scan order preserved

    def at(self, row: int, col: int) -> SquareDetails:
        return self.details[row][col]

    def max_abs(self) -> int:
        """Largest |net| on the board, never below 1 so callers can divide by it."""
        return max(1, max(abs(v) for row in self.net for v in row))

    def intensity(self, row: int, col: int) -> float:
        """Square-root compressed |net| in [0, 1], relative to the busiest square."""
        return math.sqrt(abs(self.net[row][col]) / self.max_abs())

    def to_dict(self) -> dict:
        return {
            "net_influence": [list(row) for row in self.net],
            "detailed_influence": [[sq.to_dict() for sq in row] for row in self.details],
        }


def compute_influence(board: Board) -> InfluenceData:
    """Net influence matrix and per-square attackers/defenders for a board.

    Origins are scanned row-major and each piece's attacked squares in
    generation order, so list order is deterministic for a given board.
    """
    net = [[0] * BOARD_SIZE for _ in range(BOARD_SIZE)]
    details = [[SquareDetails() for _ in range(BOARD_SIZE)] for _ in range(BOARD_SIZE)]
    pieces = 0

    for r, c, piece in board.occupied():
        pieces += 1
        value = get_piece_value(piece)
        source = InfluenceSource(piece=piece, row=r, col=c)
        for ar, ac in attacked_squares(piece, r, c, board):
            net[ar][ac] += value
            target = board.piece_at(ar, ac)
            if target is not None and target.color == piece.color:
                details[ar][ac].defenders.append(source)
            else:
                details[ar][ac].attackers.append(source)

    logger.debug("Computed influence for %d pieces", pieces)
    return InfluenceData(net=net, details=details)
