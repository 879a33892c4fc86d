"""Square-by-square influence analysis of chess positions.

Pure functions: decode a FEN piece placement into a Board, then compute the
material-weighted influence each side exerts on every square together with
the attackers and defenders involved. No engine, no side effects.
"""

from chessheat.attacks import attacked_squares
from chessheat.constants import get_piece_value, piece_code, square_name
from chessheat.influence import InfluenceData, InfluenceSource, SquareDetails, compute_influence
from chessheat.position import (
    Board,
    PieceSymbolError,
    PlacementError,
    RankCountError,
    RankWidthError,
    decode_placement,
    encode_placement,
    is_valid_fen,
)

__all__ = [
    "Board",
    "InfluenceData",
    "InfluenceSource",
    "PieceSymbolError",
    "PlacementError",
    "RankCountError",
    "RankWidthError",
    "SquareDetails",
    "attacked_squares",
    "compute_influence",
    "decode_placement",
    "encode_placement",
    "get_piece_value",
    "is_valid_fen",
    "piece_code",
    "square_name",
]
