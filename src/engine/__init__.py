"""
将棋のゲームエンジン - パッケージ初期化
"""

from .piece import Piece, Player, PieceType, PIECE_NAMES, HAND_PIECE_TYPES, PROMOTABLE_PIECES
from .board import Board, BOARD_SIZE
from .move import Move, MoveType
from .rules import Rules
from .promotion import can_promote, get_promotion_zone, must_promote
from .game_state import GameState

__all__ = [
    'Piece',
    'Player',
    'PieceType',
    'PIECE_NAMES',
    'HAND_PIECE_TYPES',
    'PROMOTABLE_PIECES',
    'Board',
    'BOARD_SIZE',
    'Move',
    'MoveType',
    'Rules',
    'can_promote',
    'get_promotion_zone',
    'must_promote',
    'GameState',
]
