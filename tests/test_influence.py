"""Tests for influence aggregation using well-known positions."""

import chess
import pytest

from chessheat.constants import get_piece_value
from chessheat.influence import InfluenceData, compute_influence
from chessheat.position import Board, decode_placement


# ---------------------------------------------------------------------------
# Test positions (FEN)
# ---------------------------------------------------------------------------

STARTING = "rnbqkbnr/pppppppp/8/8/8/8/PPPPPPPP/RNBQKBNR w KQkq - 0 1"
ROOK_BEHIND_PAWN = "8/8/8/8/8/8/P7/R7 w - - 0 1"
ROOK_HITS_ENEMY = "8/8/8/8/p7/8/8/R7 w - - 0 1"
PINNED_ROOK = "r3k1r1/8/8/8/8/8/8/4R1K1 w - - 0 1"
LONE_KINGS = "8/8/8/4k3/8/8/8/K7 b - - 0 1"
MIDDLEGAME = "r1b1k2r/pp1n1ppp/1q2p3/2ppP3/3N4/2P5/PP2QPPP/R3KB1R w KQkq - 0 12"


def _influence(fen: str) -> InfluenceData:
    return compute_influence(decode_placement(fen))


def _codes(sources) -> list[str]:
    return [s.code for s in sources]


class TestStartingPosition:
    def test_d3_white_pawns_only(self):
        """Bishop c1 and queen d1 are blocked by d2, so only c2 and e2 bear on d3."""
        data = _influence(STARTING)
        assert data.net[5][3] == 2
        assert _codes(data.at(5, 3).attackers) == ["wP", "wP"]
        assert [(s.row, s.col) for s in data.at(5, 3).attackers] == [(6, 2), (6, 4)]

    def test_symmetry(self):
        data = _influence(STARTING)
        for r in range(8):
            for c in range(8):
                assert data.net[r][c] == -data.net[7 - r][c]

    def test_e6_black(self):
        data = _influence(STARTING)
        assert data.net[2][4] == -2

    def test_middle_ranks_empty(self):
        data = _influence(STARTING)
        assert all(data.net[r][c] == 0 for r in (3, 4) for c in range(8))
        assert all(data.at(r, c).is_empty for r in (3, 4) for c in range(8))

    def test_c3_knight_and_pawns(self):
        # Nb1 (3), b2 (1), d2 (1)
        data = _influence(STARTING)
        assert data.net[5][2] == 5

    def test_d2_defended(self):
        # Bc1, Qd1, Ke1, Nb1 defend d2
        data = _influence(STARTING)
        d2 = data.at(6, 3)
        assert d2.attackers == []
        assert sorted(_codes(d2.defenders)) == ["wB", "wK", "wN", "wQ"]
        assert data.net[6][3] == 3 + 9 + 0 + 3


class TestBlocking:
    def test_friendly_blocker_is_defended(self):
        data = _influence(ROOK_BEHIND_PAWN)
        a2 = data.at(6, 0)
        assert len(a2.defenders) == 1
        assert a2.defenders[0].code == "wR"
        assert (a2.defenders[0].row, a2.defenders[0].col) == (7, 0)
        assert a2.attackers == []

    def test_nothing_behind_blocker(self):
        data = _influence(ROOK_BEHIND_PAWN)
        assert data.net[5][0] == 0
        assert data.at(5, 0).attackers == []

    def test_enemy_blocker_is_attacked(self):
        data = _influence(ROOK_HITS_ENEMY)
        a4 = data.at(4, 0)
        assert _codes(a4.attackers) == ["wR"]
        assert a4.defenders == []
        assert data.net[4][0] == 5

    def test_nothing_behind_enemy_blocker(self):
        data = _influence(ROOK_HITS_ENEMY)
        assert data.net[3][0] == 0
        assert data.at(3, 0).is_empty


class TestPinnedPieces:
    def test_pinned_rook_still_exerts_influence(self):
        data = _influence(PINNED_ROOK)
        e4 = data.at(4, 4)
        assert any(a.code == "wR" and (a.row, a.col) == (7, 4) for a in e4.attackers)
        assert data.net[4][4] == 5

    def test_king_square_attackers_and_defenders(self):
        data = _influence(PINNED_ROOK)
        e8 = data.at(0, 4)
        assert _codes(e8.attackers) == ["wR"]
        assert [(d.row, d.col) for d in e8.defenders] == [(0, 0), (0, 6)]
        assert data.net[0][4] == 5 - 5 - 5

    def test_balanced_square_is_zero_but_busy(self):
        """g1: attacked by the g8 rook, defended by the e1 rook."""
        data = _influence(PINNED_ROOK)
        g1 = data.at(7, 6)
        assert data.net[7][6] == 0
        assert _codes(g1.attackers) == ["bR"]
        assert _codes(g1.defenders) == ["wR"]


class TestKings:
    def test_king_adds_no_material(self):
        data = _influence(LONE_KINGS)
        for r, c in [(4, 3), (4, 5), (2, 4), (4, 4)]:
            assert data.net[r][c] == 0
            assert _codes(data.at(r, c).attackers) == ["bK"]

    def test_white_king_corner(self):
        data = _influence(LONE_KINGS)
        for r, c in [(6, 0), (6, 1), (7, 1)]:
            assert _codes(data.at(r, c).attackers) == ["wK"]


class TestEmptyBoard:
    def test_all_zero(self):
        data = compute_influence(Board.empty())
        assert data.net == [[0] * 8 for _ in range(8)]
        assert all(sq.is_empty for row in data.details for sq in row)

    def test_max_abs_floor(self):
        assert compute_influence(Board.empty()).max_abs() == 1


class TestConsistency:
    @pytest.mark.parametrize("fen", [
        STARTING, ROOK_BEHIND_PAWN, ROOK_HITS_ENEMY, PINNED_ROOK, LONE_KINGS, MIDDLEGAME,
    ])
    def test_net_matches_listed_pieces(self, fen):
        """Net influence is the signed sum of every listed attacker and defender."""
        data = _influence(fen)
        for r in range(8):
            for c in range(8):
                sq = data.at(r, c)
                listed = sum(get_piece_value(s.piece) for s in sq.attackers + sq.defenders)
                assert data.net[r][c] == listed

    @pytest.mark.parametrize("fen", [STARTING, PINNED_ROOK, MIDDLEGAME])
    def test_defenders_share_occupant_color(self, fen):
        board = decode_placement(fen)
        data = compute_influence(board)
        for r in range(8):
            for c in range(8):
                occupant = board.piece_at(r, c)
                for d in data.at(r, c).defenders:
                    assert occupant is not None and occupant.color == d.piece.color
                for a in data.at(r, c).attackers:
                    assert occupant is None or occupant.color != a.piece.color

    @pytest.mark.parametrize("fen", [STARTING, MIDDLEGAME])
    def test_idempotent(self, fen):
        board = decode_placement(fen)
        assert compute_influence(board) == compute_influence(board)

    def test_board_not_modified(self):
        board = decode_placement(MIDDLEGAME)
        compute_influence(board)
        assert board == decode_placement(MIDDLEGAME)


class TestSerialization:
    def test_to_dict_shape(self):
        result = _influence(ROOK_BEHIND_PAWN).to_dict()
        assert len(result["net_influence"]) == 8
        assert result["net_influence"][6][0] == 5
        assert result["detailed_influence"][6][0]["defenders"] == [
            {"piece": "wR", "from": {"r": 7, "c": 0}, "square": "a1"},
        ]
        assert result["detailed_influence"][6][0]["attackers"] == []

    def test_max_abs(self):
        assert _influence(ROOK_BEHIND_PAWN).max_abs() == 5

    def test_intensity(self):
        data = _influence(ROOK_BEHIND_PAWN)
        assert data.intensity(6, 0) == 1.0
        assert data.intensity(5, 1) == pytest.approx((1 / 5) ** 0.5)
        assert data.intensity(0, 0) == 0.0

    def test_intensity_empty_board(self):
        assert compute_influence(Board.empty()).intensity(3, 3) == 0.0

    def test_by_color(self):
        data = _influence(PINNED_ROOK)
        a1 = data.at(7, 0)
        assert _codes(a1.by_color(chess.WHITE)) == ["wR"]
        assert _codes(a1.by_color(chess.BLACK)) == ["bR"]
