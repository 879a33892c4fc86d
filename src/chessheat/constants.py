"""Constants and small utility functions shared across the influence modules."""

import chess

__all__ = [
    "BOARD_SIZE",
    "PIECE_VALUES",
    "KNIGHT_OFFSETS",
    "KING_OFFSETS",
    "RAY_DIRS",
    "get_piece_value",
    "piece_code",
    "square_name",
    "parse_square_name",
    "_color_name",
]

BOARD_SIZE = 8

# Kings carry no material weight but still attack and defend
PIECE_VALUES: dict[chess.PieceType, int] = {
    chess.PAWN: 1, chess.KNIGHT: 3, chess.BISHOP: 3,
    chess.ROOK: 5, chess.QUEEN: 9, chess.KING: 0,
}

# (d_row, d_col) offsets; row 0 is rank 8, so "up the board" is negative d_row.
KNIGHT_OFFSETS = [(-2, -1), (-2, 1), (-1, -2), (-1, 2), (1, -2), (1, 2), (2, -1), (2, 1)]
KING_OFFSETS = [(-1, -1), (-1, 0), (-1, 1), (0, -1), (0, 1), (1, -1), (1, 0), (1, 1)]

_DIAGONAL = [(1, 1), (1, -1), (-1, 1), (-1, -1)]
_ORTHOGONAL = [(1, 0), (-1, 0), (0, 1), (0, -1)]

RAY_DIRS: dict[chess.PieceType, list[tuple[int, int]]] = {
    chess.BISHOP: _DIAGONAL,
    chess.ROOK: _ORTHOGONAL,
    chess.QUEEN: _DIAGONAL + _ORTHOGONAL,
}


def get_piece_value(piece: chess.Piece) -> int:
    """Material value of a piece, positive for White and negative for Black."""
    value = PIECE_VALUES[piece.piece_type]
    return value if piece.color == chess.WHITE else -value


def piece_code(piece: chess.Piece) -> str:
    """Two-character identifier: White pawn → 'wP', Black knight → 'bN'."""
    color = "w" if piece.color == chess.WHITE else "b"
    return f"{color}{piece.symbol().upper()}"


def square_name(row: int, col: int) -> str:
    """Algebraic name of a grid cell: (7, 0) → 'a1', (0, 7) → 'h8'."""
    return chess.square_name(chess.square(col, BOARD_SIZE - 1 - row))


def parse_square_name(name: str) -> tuple[int, int]:
    """Inverse of square_name. Raises ValueError for anything but 'a1'..'h8'."""
    sq = chess.parse_square(name.strip().lower())
    return BOARD_SIZE - 1 - chess.square_rank(sq), chess.square_file(sq)


def _color_name(color: chess.Color) -> str:
    """Convert chess.Color bool to lowercase string."""
    return "white" if color == chess.WHITE else "black"
