"""
対局の進行（手番・持ち駒・勝敗）を管理するモジュール
"""

import logging
from typing import Dict, List, Optional, Set, Tuple

from .board import Position
from .move import Move
from .piece import Player, PieceType
from .rules import Rules
from .initial_setup import load_initial_board, get_initial_hand_pieces, format_position

logger = logging.getLogger(__name__)


class GameState:
    """ゲームの状態を管理するクラス"""

    def __init__(self, game_id: Optional[str] = None, forbid_pawn_drop_mate: bool = False):
        self.game_id = game_id
        self.forbid_pawn_drop_mate = forbid_pawn_drop_mate
        self.reset()

    def reset(self):
        """平手の初期状態に戻す"""
        self.board = load_initial_board()
        self.current_player = Player.BLACK
        self.move_history: List[Move] = []
        self.hand_pieces: Dict[Player, Dict[PieceType, int]] = {
            Player.BLACK: get_initial_hand_pieces(Player.BLACK),
            Player.WHITE: get_initial_hand_pieces(Player.WHITE),
        }
        self.game_over = False
        self.winner: Optional[Player] = None

    def switch_turn(self):
        """手番を交代"""
        self.current_player = self.current_player.opponent

    def is_in_check(self) -> bool:
        """手番側が王手されているか"""
        return Rules.is_in_check(self.board, self.current_player)

    def get_valid_moves(self, from_pos: Position) -> Set[Position]:
        """手番側の駒の移動先（相手の駒や空きマスを指定した場合は空集合）"""
        if self.game_over or self.board.get_piece_owner(from_pos) != self.current_player:
            return set()
        return Rules.get_legal_moves(self.board, from_pos)

    def get_drop_positions(self, piece_type: PieceType) -> Set[Position]:
        """手番側の持ち駒を打てる位置（持っていなければ空集合）"""
        if self.game_over or self.hand_pieces[self.current_player].get(piece_type, 0) <= 0:
            return set()
        return Rules.get_legal_drop_positions(
            self.board, piece_type, self.current_player, self.forbid_pawn_drop_mate
        )

    def get_legal_moves(self) -> List[Move]:
        """手番側の合法手をすべて取得"""
        if self.game_over:
            return []
        return Rules.get_all_legal_moves(
            self.board,
            self.current_player,
            self.hand_pieces[self.current_player],
            self.forbid_pawn_drop_mate,
        )

    def apply_move(self, move: Move) -> Tuple[bool, str]:
        """
        手を適用して手番を進める
        返り値: (成功したらTrue, メッセージ)
        """
        if self.game_over:
            return False, "ゲームは既に終了しています"

        if move.player is None:
            move.player = self.current_player
        elif move.player != self.current_player:
            logger.info("Rejected move by %s on %s's turn: %s",
                        move.player.name, self.current_player.name, move)
            return False, "手番ではありません"

        mover = self.current_player
        success, captured = Rules.apply_move(
            self.board,
            move,
            self.hand_pieces[mover],
            self.forbid_pawn_drop_mate,
        )
        if not success:
            logger.info("Rejected illegal move: %s", move)
            return False, "無効な手です"

        self.move_history.append(move)

        if captured is not None:
            if captured.piece_type == PieceType.KING:
                # 玉を取った場合は即座に終了
                self._finish(mover)
                return True, f"玉を取りました！{mover.name}の勝利です！"
            # 取った駒は成りを解除して持ち駒にする
            hand = self.hand_pieces[mover]
            hand[captured.piece_type] = hand.get(captured.piece_type, 0) + 1

        # 詰みの判定
        is_over, winner = Rules.is_game_over(self.board, self.hand_pieces)
        if is_over:
            self._finish(winner)
            return True, f"詰みです！{winner.name}の勝利です！"

        self.switch_turn()
        if self.is_in_check():
            return True, f"王手です（{format_position(*move.to_pos)}）"
        return True, "手を適用しました"

    def resign(self) -> Player:
        """手番側が投了する（返り値: 勝者）"""
        if not self.game_over:
            self._finish(self.current_player.opponent)
        return self.winner

    def _finish(self, winner: Player):
        self.game_over = True
        self.winner = winner
        logger.info("Game %s over: %s wins after %d moves",
                    self.game_id, winner.name, len(self.move_history))

    def to_dict(self) -> dict:
        """ゲーム状態を辞書形式に変換"""
        return {
            "game_id": self.game_id,
            "board": self.board.to_dict(),
            "current_player": self.current_player.name,
            "move_count": len(self.move_history),
            "hand_pieces": {
                "BLACK": {k.name: v for k, v in self.hand_pieces[Player.BLACK].items()},
                "WHITE": {k.name: v for k, v in self.hand_pieces[Player.WHITE].items()},
            },
            "in_check": (not self.game_over) and self.is_in_check(),
            "game_over": self.game_over,
            "winner": self.winner.name if self.winner else None,
        }
