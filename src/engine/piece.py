"""
将棋の駒の種類と動きを定義するモジュール
"""

from enum import Enum, auto
from typing import Dict, Tuple


class Player(Enum):
    """プレイヤーの定義"""
    BLACK = 0  # 先手（下側、9段目から0段目へ進む）
    WHITE = 1  # 後手（上側、0段目から8段目へ進む）

    @property
    def opponent(self):
        """相手プレイヤーを返す"""
        return Player.WHITE if self == Player.BLACK else Player.BLACK

    @property
    def forward(self) -> int:
        """前方向の行の増分（先手は-1、後手は+1）"""
        return -1 if self == Player.BLACK else 1


class PieceType(Enum):
    """駒の種類"""
    PAWN = auto()    # 歩
    LANCE = auto()   # 香
    KNIGHT = auto()  # 桂
    SILVER = auto()  # 銀
    GOLD = auto()    # 金
    BISHOP = auto()  # 角
    ROOK = auto()    # 飛
    KING = auto()    # 玉


# 成れる駒
PROMOTABLE_PIECES = frozenset({
    PieceType.PAWN,
    PieceType.LANCE,
    PieceType.KNIGHT,
    PieceType.SILVER,
    PieceType.BISHOP,
    PieceType.ROOK,
})

# 持ち駒になれる駒（玉以外の7種）
HAND_PIECE_TYPES = (
    PieceType.PAWN,
    PieceType.LANCE,
    PieceType.KNIGHT,
    PieceType.SILVER,
    PieceType.GOLD,
    PieceType.BISHOP,
    PieceType.ROOK,
)

# 駒の表示名（漢字）
PIECE_NAMES = {
    PieceType.PAWN: "歩",
    PieceType.LANCE: "香",
    PieceType.KNIGHT: "桂",
    PieceType.SILVER: "銀",
    PieceType.GOLD: "金",
    PieceType.BISHOP: "角",
    PieceType.ROOK: "飛",
    PieceType.KING: "玉",
}

# 成り駒の表示名
PROMOTED_PIECE_NAMES = {
    PieceType.PAWN: "と",
    PieceType.LANCE: "杏",
    PieceType.KNIGHT: "圭",
    PieceType.SILVER: "全",
    PieceType.BISHOP: "馬",
    PieceType.ROOK: "龍",
}

# 方向ベクトル（先手・後手に依存しない絶対方向）
ORTHOGONAL = ((-1, 0), (1, 0), (0, -1), (0, 1))
DIAGONAL = ((-1, -1), (-1, 1), (1, -1), (1, 1))

# 金の動き
_GOLD_STEPS = ((1, -1), (1, 0), (1, 1), (0, -1), (0, 1), (-1, 0))

# 駒の動きパターン定義
# (row, col)で表現: rowの正の値は前方向（手番プレイヤー基準）
# 'steps': 1マスだけ動く（桂馬の跳びも含む）
# 'slides': 駒にぶつかるか盤外に出るまで進む
PIECE_MOVE_PATTERNS: Dict[PieceType, Dict[str, Dict[str, Tuple[Tuple[int, int], ...]]]] = {
    PieceType.KING: {
        'base': {
            'steps': ORTHOGONAL + DIAGONAL,
            'slides': (),
        },
    },
    PieceType.GOLD: {
        'base': {
            'steps': _GOLD_STEPS,
            'slides': (),
        },
    },
    PieceType.SILVER: {
        'base': {
            'steps': ((1, -1), (1, 0), (1, 1), (-1, -1), (-1, 1)),
            'slides': (),
        },
        'promoted': {
            'steps': _GOLD_STEPS,
            'slides': (),
        },
    },
    PieceType.KNIGHT: {
        'base': {
            'steps': ((2, -1), (2, 1)),
            'slides': (),
        },
        'promoted': {
            'steps': _GOLD_STEPS,
            'slides': (),
        },
    },
    PieceType.LANCE: {
        'base': {
            'steps': (),
            'slides': ((1, 0),),
        },
        'promoted': {
            'steps': _GOLD_STEPS,
            'slides': (),
        },
    },
    PieceType.PAWN: {
        'base': {
            'steps': ((1, 0),),
            'slides': (),
        },
        'promoted': {
            'steps': _GOLD_STEPS,
            'slides': (),
        },
    },
    PieceType.BISHOP: {
        'base': {
            'steps': (),
            'slides': DIAGONAL,
        },
        'promoted': {  # 馬: 角 + 縦横1マス
            'steps': ORTHOGONAL,
            'slides': DIAGONAL,
        },
    },
    PieceType.ROOK: {
        'base': {
            'steps': (),
            'slides': ORTHOGONAL,
        },
        'promoted': {  # 龍: 飛 + 斜め1マス
            'steps': DIAGONAL,
            'slides': ORTHOGONAL,
        },
    },
}

_EMPTY_PATTERN = {'steps': (), 'slides': ()}


class Piece:
    """将棋の駒を表すクラス"""

    def __init__(self, piece_type: PieceType, owner: Player, promoted: bool = False):
        self.piece_type = piece_type
        self.owner = owner
        self.promoted = promoted

    def __str__(self):
        """駒の文字列表現（例: 'b歩', 'wと'）"""
        prefix = 'b' if self.owner == Player.BLACK else 'w'
        return f"{prefix}{self.display_name}"

    def __repr__(self):
        if self.promoted:
            return f"Piece({self.piece_type.name}, {self.owner.name}, promoted=True)"
        return f"Piece({self.piece_type.name}, {self.owner.name})"

    def __eq__(self, other):
        if not isinstance(other, Piece):
            return NotImplemented
        return (
            self.piece_type == other.piece_type
            and self.owner == other.owner
            and self.is_promoted == other.is_promoted
        )

    def __hash__(self):
        return hash((self.piece_type, self.owner, self.is_promoted))

    @property
    def is_promoted(self) -> bool:
        """成っているか（金と玉は常にFalse）"""
        return self.promoted and self.piece_type in PROMOTABLE_PIECES

    @property
    def display_name(self) -> str:
        if self.is_promoted:
            return PROMOTED_PIECE_NAMES[self.piece_type]
        return PIECE_NAMES[self.piece_type]

    def is_promotable(self) -> bool:
        """まだ成っておらず、成ることができる駒か"""
        return self.piece_type in PROMOTABLE_PIECES and not self.promoted

    def get_move_pattern(self) -> dict:
        """
        この駒の移動パターンを返す（成り状態に応じて変化）
        返り値: {'steps': tuple, 'slides': tuple}
        """
        patterns = PIECE_MOVE_PATTERNS.get(self.piece_type)
        if not patterns:
            return _EMPTY_PATTERN

        if self.is_promoted:
            return patterns['promoted']
        return patterns['base']

    def copy(self) -> 'Piece':
        return Piece(self.piece_type, self.owner, self.promoted)

    def to_dict(self) -> dict:
        """駒を辞書形式に変換（API用）"""
        return {
            "type": self.piece_type.name,
            "owner": self.owner.name,
            "promoted": self.is_promoted,
        }

    @staticmethod
    def from_dict(data: dict) -> 'Piece':
        """辞書形式から駒を復元（API用）"""
        return Piece(
            PieceType[data["type"]],
            Player[data["owner"]],
            bool(data.get("promoted", False)),
        )
