"""
成りの判定を行うモジュール
"""

from typing import Tuple
from .board import BOARD_SIZE
from .piece import Player, PieceType, PROMOTABLE_PIECES

# 各プレイヤーの成りゾーン（敵陣3段）
PROMOTION_ZONES = {
    Player.BLACK: (0, 1, 2),
    Player.WHITE: (6, 7, 8),
}


def get_promotion_zone(player: Player) -> Tuple[int, ...]:
    """プレイヤーの成りゾーン（敵陣）の行を返す"""
    return PROMOTION_ZONES[player]


def can_promote(piece_type: PieceType, player: Player, from_row: int, to_row: int) -> bool:
    """
    駒が成れるかどうかを判定
    移動元または移動先が成りゾーンにあれば成れる（玉と金は成れない）
    """
    if piece_type not in PROMOTABLE_PIECES:
        return False

    zone = get_promotion_zone(player)
    return from_row in zone or to_row in zone


def must_promote(piece_type: PieceType, player: Player, to_row: int) -> bool:
    """
    成らないと次に動けなくなる移動か判定（行き所のない駒）
    歩・香は最奥の1段、桂は最奥の2段
    """
    if piece_type in (PieceType.PAWN, PieceType.LANCE):
        dead_rows = 1
    elif piece_type == PieceType.KNIGHT:
        dead_rows = 2
    else:
        return False

    if player == Player.BLACK:
        return to_row < dead_rows
    return to_row >= BOARD_SIZE - dead_rows
