"""
単体テスト: 持ち駒を打つルールのテスト
空きマス、二歩、行き所のない駒、打ち歩詰め、自玉の安全を確認
"""

import pytest
from src.engine import Board, Player, PieceType, Piece, Rules


class TestCanDropPiece:
    """打てるマスの判定のテストクラス"""

    def test_drop_on_empty_square(self, empty_board):
        assert Rules.can_drop_piece(empty_board, PieceType.GOLD, Player.BLACK, 4, 4)

    def test_cannot_drop_on_occupied_square(self, empty_board):
        """駒のあるマスには打てないことを確認（自分の駒・敵の駒とも）"""
        empty_board.set_piece((4, 4), Piece(PieceType.PAWN, Player.WHITE))
        empty_board.set_piece((4, 5), Piece(PieceType.PAWN, Player.BLACK))

        assert not Rules.can_drop_piece(empty_board, PieceType.GOLD, Player.BLACK, 4, 4)
        assert not Rules.can_drop_piece(empty_board, PieceType.GOLD, Player.BLACK, 4, 5)

    @pytest.mark.parametrize("row, col", [(-1, 0), (0, 9), (9, 9)])
    def test_cannot_drop_outside_board(self, empty_board, row, col):
        assert not Rules.can_drop_piece(empty_board, PieceType.GOLD, Player.BLACK, row, col)

    def test_two_pawns_on_file_rejected(self, empty_board):
        """同じ筋に自分の歩があると歩を打てないことを確認（二歩）"""
        empty_board.set_piece((6, 4), Piece(PieceType.PAWN, Player.BLACK))

        for row in range(1, 9):
            if row == 6:
                continue
            assert not Rules.can_drop_piece(empty_board, PieceType.PAWN, Player.BLACK, row, 4)
        assert Rules.can_drop_piece(empty_board, PieceType.PAWN, Player.BLACK, 4, 3)

    def test_promoted_pawn_does_not_count(self, empty_board):
        """同じ筋の歩が成っていれば歩を打てることを確認"""
        empty_board.set_piece((2, 4), Piece(PieceType.PAWN, Player.BLACK, promoted=True))

        assert Rules.can_drop_piece(empty_board, PieceType.PAWN, Player.BLACK, 4, 4)

    def test_opponent_pawn_does_not_count(self, empty_board):
        """同じ筋にあるのが相手の歩なら打てることを確認"""
        empty_board.set_piece((2, 4), Piece(PieceType.PAWN, Player.WHITE))

        assert Rules.can_drop_piece(empty_board, PieceType.PAWN, Player.BLACK, 4, 4)

    def test_two_pawn_rule_only_applies_to_pawns(self, empty_board):
        empty_board.set_piece((6, 4), Piece(PieceType.PAWN, Player.BLACK))

        assert Rules.can_drop_piece(empty_board, PieceType.LANCE, Player.BLACK, 4, 4)

    @pytest.mark.parametrize("piece_type", [PieceType.PAWN, PieceType.LANCE])
    def test_pawn_and_lance_not_on_last_rank(self, empty_board, piece_type):
        """歩・香は最奥の段に打てないことを確認"""
        assert not Rules.can_drop_piece(empty_board, piece_type, Player.BLACK, 0, 4)
        assert Rules.can_drop_piece(empty_board, piece_type, Player.BLACK, 1, 4)
        assert not Rules.can_drop_piece(empty_board, piece_type, Player.WHITE, 8, 4)
        assert Rules.can_drop_piece(empty_board, piece_type, Player.WHITE, 7, 4)

    def test_knight_not_on_last_two_ranks(self, empty_board):
        """桂は最奥の2段に打てないことを確認"""
        for row in (0, 1):
            assert not Rules.can_drop_piece(empty_board, PieceType.KNIGHT, Player.BLACK, row, 4)
        assert Rules.can_drop_piece(empty_board, PieceType.KNIGHT, Player.BLACK, 2, 4)

        for row in (7, 8):
            assert not Rules.can_drop_piece(empty_board, PieceType.KNIGHT, Player.WHITE, row, 4)
        assert Rules.can_drop_piece(empty_board, PieceType.KNIGHT, Player.WHITE, 6, 4)

    @pytest.mark.parametrize("piece_type", [
        PieceType.SILVER, PieceType.GOLD, PieceType.BISHOP, PieceType.ROOK,
    ])
    @pytest.mark.parametrize("player", [Player.BLACK, Player.WHITE])
    def test_other_pieces_any_rank(self, empty_board, piece_type, player):
        """銀・金・角・飛はどの段にも打てることを確認"""
        for row in range(9):
            assert Rules.can_drop_piece(empty_board, piece_type, player, row, 0)


class TestDropPositions:
    """打てる位置の列挙のテストクラス"""

    @pytest.mark.parametrize("piece_type, expected", [
        (PieceType.PAWN, 72),
        (PieceType.LANCE, 72),
        (PieceType.KNIGHT, 63),
        (PieceType.GOLD, 81),
    ])
    def test_counts_on_empty_board(self, empty_board, piece_type, expected):
        assert len(Rules.get_drop_positions(empty_board, piece_type, Player.BLACK)) == expected

    def test_initial_board_has_no_pawn_drops(self, initial_board):
        """初期配置では全ての筋に歩があるので歩を打てないことを確認"""
        assert Rules.get_drop_positions(initial_board, PieceType.PAWN, Player.BLACK) == set()
        assert len(Rules.get_drop_positions(initial_board, PieceType.GOLD, Player.BLACK)) == 41

    def test_legal_drops_must_block_check(self, empty_board):
        """王手されているときは合駒になるマスにしか打てないことを確認"""
        empty_board.set_piece((8, 4), Piece(PieceType.KING, Player.BLACK))
        empty_board.set_piece((0, 4), Piece(PieceType.ROOK, Player.WHITE))

        legal = Rules.get_legal_drop_positions(empty_board, PieceType.GOLD, Player.BLACK)

        assert legal == {(row, 4) for row in range(1, 8)}

    def test_legal_drops_do_not_modify_board(self, empty_board):
        empty_board.set_piece((8, 4), Piece(PieceType.KING, Player.BLACK))
        empty_board.set_piece((0, 4), Piece(PieceType.ROOK, Player.WHITE))
        before = empty_board.copy()

        Rules.get_legal_drop_positions(empty_board, PieceType.PAWN, Player.BLACK)

        assert empty_board == before

    def test_legal_drops_without_king_are_placement_only(self, empty_board):
        empty_board.set_piece((0, 4), Piece(PieceType.ROOK, Player.WHITE))

        assert Rules.get_legal_drop_positions(
            empty_board, PieceType.SILVER, Player.BLACK
        ) == Rules.get_drop_positions(empty_board, PieceType.SILVER, Player.BLACK)


class TestPawnDropMate:
    """打ち歩詰めのテストクラス"""

    @pytest.fixture
    def mating_board(self):
        """(1, 4)に歩を打つと後手玉が詰む局面"""
        board = Board()
        board.set_piece((0, 4), Piece(PieceType.KING, Player.WHITE))
        board.set_piece((0, 3), Piece(PieceType.KNIGHT, Player.WHITE))
        board.set_piece((0, 5), Piece(PieceType.KNIGHT, Player.WHITE))
        board.set_piece((2, 4), Piece(PieceType.GOLD, Player.BLACK))
        board.set_piece((8, 4), Piece(PieceType.KING, Player.BLACK))
        return board

    def test_detects_pawn_drop_mate(self, mating_board):
        assert Rules.is_pawn_drop_mate(mating_board, Player.BLACK, 1, 4)
        assert not Rules.is_pawn_drop_mate(mating_board, Player.BLACK, 3, 0)

    def test_allowed_by_default(self, mating_board):
        """既定では打ち歩詰めは禁止されないことを確認"""
        assert Rules.can_drop_piece(mating_board, PieceType.PAWN, Player.BLACK, 1, 4)

    def test_forbidden_when_enabled(self, mating_board):
        """禁止を有効にすると打ち歩詰めの位置だけ打てなくなることを確認"""
        assert not Rules.can_drop_piece(
            mating_board, PieceType.PAWN, Player.BLACK, 1, 4, forbid_pawn_drop_mate=True
        )
        positions = Rules.get_legal_drop_positions(
            mating_board, PieceType.PAWN, Player.BLACK, forbid_pawn_drop_mate=True
        )
        assert (1, 4) not in positions
        assert (1, 3) in positions

    def test_other_pieces_may_mate_by_drop(self, mating_board):
        """歩以外の駒で詰ませる打ち込みは禁止されないことを確認"""
        assert Rules.can_drop_piece(
            mating_board, PieceType.LANCE, Player.BLACK, 1, 4, forbid_pawn_drop_mate=True
        )
