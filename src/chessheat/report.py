"""Text and structured views of influence results.

No chess logic lives here: everything is read off an InfluenceData. The CLI
prints these views, the HTTP layer returns them, and insight_payload() is the
structured input handed to a natural-language insight generator.
"""

from __future__ import annotations

import chess

from chessheat.constants import BOARD_SIZE, _color_name, square_name
from chessheat.influence import InfluenceData, InfluenceSource
from chessheat.position import Board

_PIECE_NAMES = {
    chess.PAWN: "pawn", chess.KNIGHT: "knight", chess.BISHOP: "bishop",
    chess.ROOK: "rook", chess.QUEEN: "queen", chess.KING: "king",
}

_FILES = "abcdefgh"


def _colored(piece: chess.Piece) -> str:
    """'White knight', 'Black pawn'."""
    return f"{_color_name(piece.color).capitalize()} {_PIECE_NAMES[piece.piece_type]}"


def _format_sources(sources: list[InfluenceSource]) -> str:
    return ", ".join(f"{_colored(s.piece)} on {s.square}" for s in sources)


def _format_value(value: int) -> str:
    if value == 0:
        return "."
    return f"+{value}" if value > 0 else str(value)


def describe_square(board: Board, data: InfluenceData, row: int, col: int) -> str:
    """Human-readable breakdown of who attacks and defends one square."""
    name = square_name(row, col)
    occupant = board.piece_at(row, col)
    header = f"{name}: {_colored(occupant)}" if occupant else f"{name}: empty"
    header += f" (net {_format_value(data.net[row][col])})"

    details = data.at(row, col)
    if details.is_empty:
        return f"{header}\n  This square is not attacked or defended by any piece."

    lines = [header]
    white = details.by_color(chess.WHITE)
    black = details.by_color(chess.BLACK)
    if white:
        lines.append(f"  Attackers (White): {_format_sources(white)}")
    if black:
        lines.append(f"  Attackers (Black): {_format_sources(black)}")
    if details.defenders:
        lines.append(f"  Defenders: {_format_sources(details.defenders)}")
    return "\n".join(lines)


def format_matrix(data: InfluenceData, *, flipped: bool = False) -> str:
    """Net influence as a labelled 8x8 text grid.

    flipped=True shows the board from Black's side (rank 1 on top, file h
    on the left).
    """
    rows = range(BOARD_SIZE - 1, -1, -1) if flipped else range(BOARD_SIZE)
    cols = list(range(BOARD_SIZE - 1, -1, -1) if flipped else range(BOARD_SIZE))

    lines = []
    for r in rows:
        rank = BOARD_SIZE - r
        cells = "".join(f"{_format_value(data.net[r][c]):>4}" for c in cols)
        lines.append(f"{rank} {cells}")
    lines.append("  " + "".join(f"{_FILES[c]:>4}" for c in cols))
    return "\n".join(lines)


def contested_squares(data: InfluenceData, limit: int = 5) -> list[tuple[int, int]]:
    """Squares where both sides have pieces involved, busiest first.

    Ties on involvement count break on |net|, then on board order.
    """
    found = []
    for r in range(BOARD_SIZE):
        for c in range(BOARD_SIZE):
            details = data.at(r, c)
            sources = details.attackers + details.defenders
            colors = {s.piece.color for s in sources}
            if len(colors) < 2:
                continue
            found.append((-len(sources), -abs(data.net[r][c]), r, c))
    found.sort()
    return [(r, c) for _, _, r, c in found[:limit]]


def insight_payload(data: InfluenceData) -> dict:
    """Structured input for an insight generator.

    Pieces are listed by code only ('wQ', 'bN'), without their origins.
    """
    return {
        "net_influence_matrix": [list(row) for row in data.net],
        "detailed_influence": [
            [
                {
                    "attackers": [a.code for a in sq.attackers],
                    "defenders": [d.code for d in sq.defenders],
                }
                for sq in row
            ]
            for row in data.details
        ],
    }


def summarize(board: Board, data: InfluenceData, *, flipped: bool = False, limit: int = 5) -> str:
    """Matrix followed by the most contested squares."""
    text = format_matrix(data, flipped=flipped)
    contested = contested_squares(data, limit)
    if not contested:
        return text
    lines = ["Contested squares:"]
    lines.extend(describe_square(board, data, r, c) for r, c in contested)
    return text + "\n\n" + "\n".join(lines)
