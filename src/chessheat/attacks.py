"""Attack-set generation: which squares a piece geometrically attacks.

Turn, check and pins are ignored. A pinned piece still exerts influence.
"""

import chess

from chessheat.constants import BOARD_SIZE, KING_OFFSETS, KNIGHT_OFFSETS, RAY_DIRS
from chessheat.position import Board

__all__ = ["attacked_squares"]

Square = tuple[int, int]


def _on_board(row: int, col: int) -> bool:
    return 0 <= row < BOARD_SIZE and 0 <= col < BOARD_SIZE


def _walk_ray(
    board: Board,
    row: int,
    col: int,
    direction: tuple[int, int],
) -> list[Square]:
    """Walk a ray from (row, col), stopping on the first occupied square.

    The blocking square is included whatever its color; nothing behind it is.
    """
    dr, dc = direction
    r, c = row + dr, col + dc
    squares: list[Square] = []
    while _on_board(r, c):
        squares.append((r, c))
        if board.piece_at(r, c) is not None:
            break
        r += dr
        c += dc
    return squares


def _offset_squares(row: int, col: int, offsets: list[tuple[int, int]]) -> list[Square]:
    return [
        (row + dr, col + dc)
        for dr, dc in offsets
        if _on_board(row + dr, col + dc)
    ]


def _pawn_squares(color: chess.Color, row: int, col: int) -> list[Square]:
    # White pawns advance toward row 0. Never the square straight ahead.
    forward = -1 if color == chess.WHITE else 1
    return _offset_squares(row, col, [(forward, -1), (forward, 1)])


def attacked_squares(piece: chess.Piece, row: int, col: int, board: Board) -> list[Square]:
    """Squares attacked by `piece` standing on (row, col), in generation order."""
    pt = piece.piece_type
    if pt == chess.PAWN:
        return _pawn_squares(piece.color, row, col)
    if pt == chess.KNIGHT:
        return _offset_squares(row, col, KNIGHT_OFFSETS)
    if pt == chess.KING:
        return _offset_squares(row, col, KING_OFFSETS)

    squares: list[Square] = []
    for direction in RAY_DIRS[pt]:
        squares.extend(_walk_ray(board, row, col, direction))
    return squares
