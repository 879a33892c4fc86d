"""Position decoder: piece-placement strings to immutable 8x8 boards.

Only the first FEN field (piece placement) is read. Side to move, castling
rights, en passant and clocks are ignored here; influence is turn-independent.

Grid convention: row 0 is rank 8 and column 0 is file a, matching the order
ranks appear in the placement string.
"""

from __future__ import annotations

import logging
import re
from collections.abc import Iterator
from dataclasses import dataclass

import chess

from chessheat.constants import BOARD_SIZE

__all__ = [
    "Board",
    "PlacementError",
    "RankCountError",
    "RankWidthError",
    "PieceSymbolError",
    "STARTING_PLACEMENT",
    "decode_placement",
    "encode_placement",
    "is_valid_fen",
]

logger = logging.getLogger(__name__)

STARTING_PLACEMENT = "rnbqkbnr/pppppppp/8/8/8/8/PPPPPPPP/RNBQKBNR"

_RANK_TOKEN = re.compile(r"[1-8]|[pnbrqkPNBRQK]")

Row = tuple[chess.Piece | None, ...]


class PlacementError(ValueError):
    """Piece placement could not be decoded into an 8x8 board."""


class RankCountError(PlacementError):
    """Placement does not split into exactly 8 ranks."""


class RankWidthError(PlacementError):
    """A rank does not expand to exactly 8 files."""

    def __init__(self, rank: int, width: int):
        super().__init__(f"Invalid FEN: Rank {rank} does not have 8 files.")
        self.rank = rank
        self.width = width


class PieceSymbolError(PlacementError):
    """A rank contains a character that is neither a digit 1-8 nor a piece letter."""


@dataclass(frozen=True)
class Board:
    """Immutable 8x8 grid of optional pieces.

    Boards are values: equal content means equal boards, and edits return a
    new Board rather than changing this one.
    """
    rows: tuple[Row, ...]

    def __post_init__(self):
        object.__setattr__(self, "rows", tuple(tuple(r) for r in self.rows))
        if len(self.rows) != BOARD_SIZE or any(len(r) != BOARD_SIZE for r in self.rows):
            raise ValueError("Board must be 8 rows of 8 cells")

    @classmethod
    def empty(cls) -> Board:
        return cls(tuple((None,) * BOARD_SIZE for _ in range(BOARD_SIZE)))

    @classmethod
    def from_rows(cls, rows) -> Board:
        """Build a board from any 8x8 nested sequence (e.g. lists from an editor)."""
        return cls(rows)

    def piece_at(self, row: int, col: int) -> chess.Piece | None:
        return self.rows[row][col]

    def with_piece(self, row: int, col: int, piece: chess.Piece | None) -> Board:
        """Return a copy with one cell replaced (None clears it)."""
        grid = [list(r) for r in self.rows]
        grid[row][col] = piece
        return Board.from_rows(grid)

    def occupied(self) -> Iterator[tuple[int, int, chess.Piece]]:
        """Yield (row, col, piece) for every occupied cell in row-major order."""
        for r, row in enumerate(self.rows):
            for c, piece in enumerate(row):
                if piece is not None:
                    yield r, c, piece

    def placement(self) -> str:
        return encode_placement(self)


def _decode_rank(text: str, rank: int, strict: bool) -> Row:
    cells: list[chess.Piece | None] = [None] * BOARD_SIZE
    file_idx = 0
    for char in text:
        if file_idx >= BOARD_SIZE and not strict:
            break
        if char in "12345678":
            file_idx += int(char)
            continue
        try:
            piece = chess.Piece.from_symbol(char)
        except ValueError:
            raise PieceSymbolError(
                f"Invalid FEN: Unexpected character {char!r} in rank {rank}."
            ) from None
        if file_idx < BOARD_SIZE:
            cells[file_idx] = piece
        file_idx += 1

    if strict and file_idx != BOARD_SIZE:
        raise RankWidthError(rank, file_idx)
    return tuple(cells)


def decode_placement(fen: str, *, strict: bool = True) -> Board:
    """Decode the piece-placement field of a FEN string into a Board.

    Accepts either a full FEN or just its first field. With strict=False a
    rank that overflows 8 files is silently truncated and a short rank leaves
    its trailing cells empty; the rank count is checked either way.

    Raises:
        RankCountError: placement does not have exactly 8 ranks.
        RankWidthError: (strict only) a rank does not expand to 8 files.
        PieceSymbolError: a rank contains an unrecognized character.
    """
    fields = fen.split()
    placement = fields[0] if fields else ""
    ranks = placement.split("/")
    if len(ranks) != BOARD_SIZE:
        raise RankCountError("Invalid FEN: Must have 8 ranks.")

    # Ranks appear from 8 down to 1
    rows = tuple(
        _decode_rank(text, BOARD_SIZE - idx, strict)
        for idx, text in enumerate(ranks)
    )
    logger.debug("Decoded placement %s (strict=%s)", placement, strict)
    return Board(rows)


def encode_placement(board: Board) -> str:
    """Encode a Board back into a FEN piece-placement field."""
    ranks = []
    for row in board.rows:
        out = []
        empty = 0
        for piece in row:
            if piece is None:
                empty += 1
                continue
            if empty:
                out.append(str(empty))
                empty = 0
            out.append(piece.symbol())
        if empty:
            out.append(str(empty))
        ranks.append("".join(out))
    return "/".join(ranks)


def is_valid_fen(fen: str) -> bool:
    """Yes/no syntax check of a FEN's placement field, without raising.

    True when the placement has 8 ranks, every rank uses only digits 1-8 and
    piece letters, and every rank sums to 8 files. Other FEN fields are not
    inspected.
    """
    fields = fen.strip().split()
    if not fields:
        return False
    ranks = fields[0].split("/")
    if len(ranks) != BOARD_SIZE:
        return False
    for rank in ranks:
        tokens = _RANK_TOKEN.findall(rank)
        if "".join(tokens) != rank:
            return False
        width = sum(int(t) if t.isdigit() else 1 for t in tokens)
        if width != BOARD_SIZE:
            return False
    return True
