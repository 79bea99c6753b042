"""
将棋のルール判定を行うモジュール

盤面を受け取って合法性・王手・詰みを答える。渡された盤面は変更しない
（apply_moveを除く）。仮想の局面は盤面のコピー上で評価する。
"""

from typing import Dict, List, Optional, Set, Tuple
from .board import Board, BOARD_SIZE, Position
from .piece import Piece, Player, PieceType, HAND_PIECE_TYPES
from .move import Move, MoveType
from .promotion import can_promote, must_promote


class Rules:
    """将棋のルールを管理するクラス"""

    # ------------------------------------------------------------------
    # 駒の移動（自玉の安全は考慮しない）
    # ------------------------------------------------------------------

    @staticmethod
    def get_pseudo_legal_moves(board: Board, from_pos: Position) -> Set[Position]:
        """
        指定位置の駒が動けるマスを取得（自玉が取られるかは考慮しない）
        駒がない・盤外の場合は空集合
        """
        piece = board.get_piece(from_pos)
        if piece is None:
            return set()

        pattern = piece.get_move_pattern()
        forward = piece.owner.forward
        positions = set()

        # 1マスの移動（桂馬の跳びを含む）
        for dr, dc in pattern['steps']:
            target = (from_pos[0] + dr * forward, from_pos[1] + dc)
            if Rules._can_move_to(board, target, piece.owner):
                positions.add(target)

        # 走り駒（香・角・飛）
        for dr, dc in pattern['slides']:
            Rules._collect_line_moves(board, from_pos, (dr * forward, dc), piece.owner, positions)

        return positions

    @staticmethod
    def _can_move_to(board: Board, position: Position, player: Player) -> bool:
        """盤内で、自分の駒がないマスか"""
        if not board.is_valid_position(position):
            return False
        target = board.get_piece(position)
        return target is None or target.owner != player

    @staticmethod
    def _collect_line_moves(
        board: Board,
        from_pos: Position,
        direction: Tuple[int, int],
        player: Player,
        positions: Set[Position]
    ):
        """直線方向に、駒にぶつかるまでのマスを追加"""
        dr, dc = direction
        row, col = from_pos[0] + dr, from_pos[1] + dc

        while board.is_valid_position((row, col)):
            target = board.get_piece((row, col))
            if target is None:
                positions.add((row, col))
            elif target.owner != player:
                # 敵の駒は取れるがその先には進めない
                positions.add((row, col))
                break
            else:
                break
            row, col = row + dr, col + dc

    # ------------------------------------------------------------------
    # 利き・王手
    # ------------------------------------------------------------------

    @staticmethod
    def is_square_attacked_by(board: Board, target: Position, attacker: Player) -> bool:
        """指定マスにattackerの駒が利いているか確認"""
        if not board.is_valid_position(target):
            return False

        for pos, _ in board.iter_pieces(attacker):
            if target in Rules.get_pseudo_legal_moves(board, pos):
                return True

        return False

    @staticmethod
    def find_king(board: Board, player: Player) -> Optional[Position]:
        """指定プレイヤーの玉の位置（盤上にない場合はNone）"""
        return board.find_king(player)

    @staticmethod
    def is_king_captured(board: Board, player: Player) -> bool:
        """指定プレイヤーの玉が盤上にないか確認"""
        return board.find_king(player) is None

    @staticmethod
    def is_in_check(board: Board, player: Player) -> bool:
        """
        指定プレイヤーの玉が王手されているか確認
        玉が盤上にない場合はFalse
        """
        king_pos = board.find_king(player)
        if king_pos is None:
            return False
        return Rules.is_square_attacked_by(board, king_pos, player.opponent)

    # ------------------------------------------------------------------
    # 合法手（自玉を取られる手を除外）
    # ------------------------------------------------------------------

    @staticmethod
    def get_legal_moves(board: Board, from_pos: Position) -> Set[Position]:
        """
        指定位置の駒の合法な移動先を取得
        各移動先について盤面のコピー上で駒を動かし、自玉に利きがあれば除外する
        """
        piece = board.get_piece(from_pos)
        if piece is None:
            return set()

        legal = set()
        for to_pos in Rules.get_pseudo_legal_moves(board, from_pos):
            test_board = board.copy()
            test_board.move_piece(from_pos, to_pos)
            if not Rules._leaves_king_attacked(test_board, piece.owner):
                legal.add(to_pos)

        return legal

    @staticmethod
    def _leaves_king_attacked(board: Board, player: Player) -> bool:
        # 玉がない盤面では自玉の安全による除外は行わない
        return Rules.is_in_check(board, player)

    # ------------------------------------------------------------------
    # 持ち駒を打つ
    # ------------------------------------------------------------------

    @staticmethod
    def can_drop_piece(
        board: Board,
        piece_type: PieceType,
        player: Player,
        row: int,
        col: int,
        forbid_pawn_drop_mate: bool = False
    ) -> bool:
        """
        指定マスに持ち駒を打てるか確認

        将棋のルール:
        - 空きマスにしか打てない
        - 二歩（同じ筋に自分の成っていない歩がある）は禁止
        - 歩・香は最奥の段に、桂は最奥の2段に打てない
        - forbid_pawn_drop_mateがTrueなら打ち歩詰めも禁止
        """
        pos = (row, col)
        if not board.is_valid_position(pos):
            return False

        # マスが空いているか
        if board.is_occupied(pos):
            return False

        if piece_type == PieceType.PAWN:
            # 二歩チェック（成った歩は数えない）
            for r in range(BOARD_SIZE):
                piece = board.get_piece((r, col))
                if (piece and piece.piece_type == PieceType.PAWN
                        and piece.owner == player and not piece.is_promoted):
                    return False

        # 行き所のない駒は打てない
        if Rules._is_dead_square(piece_type, player, row):
            return False

        if (forbid_pawn_drop_mate and piece_type == PieceType.PAWN
                and Rules.is_pawn_drop_mate(board, player, row, col)):
            return False

        return True

    @staticmethod
    def _is_dead_square(piece_type: PieceType, player: Player, row: int) -> bool:
        """打った駒が前に進めない段か"""
        if piece_type in (PieceType.PAWN, PieceType.LANCE):
            return row == (0 if player == Player.BLACK else BOARD_SIZE - 1)
        if piece_type == PieceType.KNIGHT:
            if player == Player.BLACK:
                return row in (0, 1)
            return row in (BOARD_SIZE - 2, BOARD_SIZE - 1)
        return False

    @staticmethod
    def get_drop_positions(
        board: Board,
        piece_type: PieceType,
        player: Player,
        forbid_pawn_drop_mate: bool = False
    ) -> Set[Position]:
        """持ち駒を打てる位置をすべて取得（自玉の安全は考慮しない）"""
        return {
            (row, col)
            for row in range(BOARD_SIZE)
            for col in range(BOARD_SIZE)
            if Rules.can_drop_piece(board, piece_type, player, row, col,
                                    forbid_pawn_drop_mate)
        }

    @staticmethod
    def get_legal_drop_positions(
        board: Board,
        piece_type: PieceType,
        player: Player,
        forbid_pawn_drop_mate: bool = False
    ) -> Set[Position]:
        """持ち駒を打った後に自玉が王手されていない位置を取得"""
        legal = set()
        for pos in Rules.get_drop_positions(board, piece_type, player, forbid_pawn_drop_mate):
            test_board = board.copy()
            test_board.set_piece(pos, Piece(piece_type, player))
            if not Rules._leaves_king_attacked(test_board, player):
                legal.add(pos)
        return legal

    @staticmethod
    def is_pawn_drop_mate(board: Board, player: Player, row: int, col: int) -> bool:
        """
        歩を打つと相手が即詰みになるか（打ち歩詰め）
        歩の王手は隣接マスからなので、相手の合駒は考えなくてよい
        """
        pos = (row, col)
        if not board.is_valid_position(pos) or board.is_occupied(pos):
            return False

        test_board = board.copy()
        test_board.set_piece(pos, Piece(PieceType.PAWN, player))
        return Rules.is_checkmate(test_board, player.opponent)

    # ------------------------------------------------------------------
    # 詰み
    # ------------------------------------------------------------------

    @staticmethod
    def is_checkmate(
        board: Board,
        player: Player,
        hand_pieces: Optional[Dict[PieceType, int]] = None
    ) -> bool:
        """
        指定プレイヤーが詰んでいるか確認
        hand_pieces: 詰まされる側の持ち駒 {PieceType: count}
        """
        if not Rules.is_in_check(board, player):
            return False

        # 盤上の駒で王手を回避できるか
        for pos, _ in board.iter_pieces(player):
            if Rules.get_legal_moves(board, pos):
                return False

        # 持ち駒を打って王手を回避できるか
        for piece_type in Rules._hand_types_in_stock(hand_pieces):
            if Rules.get_legal_drop_positions(board, piece_type, player):
                return False

        return True

    @staticmethod
    def _hand_types_in_stock(hand_pieces: Optional[Dict[PieceType, int]]) -> List[PieceType]:
        """持ち駒のうち1枚以上ある駒種（玉は含めない）"""
        if not hand_pieces:
            return []
        return [pt for pt in HAND_PIECE_TYPES if hand_pieces.get(pt, 0) > 0]

    # ------------------------------------------------------------------
    # 局面全体の合法手・手の適用
    # ------------------------------------------------------------------

    @staticmethod
    def get_all_legal_moves(
        board: Board,
        player: Player,
        hand_pieces: Optional[Dict[PieceType, int]] = None,
        forbid_pawn_drop_mate: bool = False
    ) -> List[Move]:
        """
        指定プレイヤーの合法手をすべて取得
        hand_pieces: 持ち駒の辞書 {PieceType: count}
        """
        legal_moves = []

        # 盤上の駒の移動
        for from_pos, piece in board.iter_pieces(player):
            for to_pos in sorted(Rules.get_legal_moves(board, from_pos)):
                is_capture = board.is_occupied(to_pos)
                create = Move.create_capture_move if is_capture else Move.create_normal_move

                if (piece.is_promotable()
                        and can_promote(piece.piece_type, player, from_pos[0], to_pos[0])):
                    legal_moves.append(create(from_pos, to_pos, player, promote=True))
                    if must_promote(piece.piece_type, player, to_pos[0]):
                        continue

                legal_moves.append(create(from_pos, to_pos, player))

        # 持ち駒を打つ手
        for piece_type in Rules._hand_types_in_stock(hand_pieces):
            positions = Rules.get_legal_drop_positions(
                board, piece_type, player, forbid_pawn_drop_mate
            )
            for to_pos in sorted(positions):
                legal_moves.append(Move.create_drop_move(to_pos, piece_type, player))

        return legal_moves

    @staticmethod
    def apply_move(
        board: Board,
        move: Move,
        hand_pieces: Optional[Dict[PieceType, int]] = None,
        forbid_pawn_drop_mate: bool = False
    ) -> Tuple[bool, Optional[Piece]]:
        """
        盤面に手を適用する（boardを直接変更する）

        - 合法でない手は適用せず(False, None)を返す
        - 成りはmove.promoteがTrueで成れる場合のみ
        - 行き所のない駒になる移動は自動的に成る
        - 持ち駒を打つとhand_piecesが1枚減る

        返り値: (成功したらTrue, 取った駒)
        """
        if move.move_type == MoveType.DROP:
            return Rules._apply_drop(board, move, hand_pieces, forbid_pawn_drop_mate), None

        piece = board.get_piece(move.from_pos)
        if piece is None or (move.player is not None and piece.owner != move.player):
            return False, None

        if move.to_pos not in Rules.get_legal_moves(board, move.from_pos):
            return False, None

        promotable = piece.is_promotable() and can_promote(
            piece.piece_type, piece.owner, move.from_pos[0], move.to_pos[0]
        )
        if promotable and (move.promote or must_promote(piece.piece_type, piece.owner, move.to_pos[0])):
            piece.promoted = True

        captured = board.move_piece(move.from_pos, move.to_pos)
        return True, captured

    @staticmethod
    def _apply_drop(
        board: Board,
        move: Move,
        hand_pieces: Optional[Dict[PieceType, int]],
        forbid_pawn_drop_mate: bool
    ) -> bool:
        """持ち駒を打つ"""
        # 持ち駒数のチェック
        if hand_pieces is None or hand_pieces.get(move.piece_type, 0) <= 0:
            return False

        if move.player is None or move.piece_type == PieceType.KING:
            return False

        legal_positions = Rules.get_legal_drop_positions(
            board, move.piece_type, move.player, forbid_pawn_drop_mate
        )
        if move.to_pos not in legal_positions:
            return False

        board.set_piece(move.to_pos, Piece(move.piece_type, move.player))
        hand_pieces[move.piece_type] -= 1
        return True

    @staticmethod
    def is_game_over(
        board: Board,
        hand_pieces: Optional[Dict[Player, Dict[PieceType, int]]] = None
    ) -> Tuple[bool, Optional[Player]]:
        """
        ゲームが終了したか確認
        hand_pieces: プレイヤーごとの持ち駒
        返り値: (終了フラグ, 勝者)
        """
        hand_pieces = hand_pieces or {}

        for player in [Player.BLACK, Player.WHITE]:
            # 玉が取られている = 相手の勝ち
            if Rules.is_king_captured(board, player):
                return True, player.opponent

            if Rules.is_checkmate(board, player, hand_pieces.get(player)):
                return True, player.opponent

        return False, None
