"""
将棋の盤面を管理するモジュール
"""

from typing import Iterator, List, Optional, Tuple
from .piece import Piece, Player, PieceType

# 盤面サイズ
BOARD_SIZE = 9

Position = Tuple[int, int]


class Board:
    """将棋の盤面を表すクラス（1マスに駒は最大1つ）"""

    def __init__(self):
        # 9x9の盤面を初期化
        self.squares: List[List[Optional[Piece]]] = [
            [None for _ in range(BOARD_SIZE)]
            for _ in range(BOARD_SIZE)
        ]

    @staticmethod
    def is_valid_position(position) -> bool:
        """位置が盤面内か確認（不正な形式の値もFalse）"""
        try:
            row, col = position
        except (TypeError, ValueError):
            return False
        if not isinstance(row, int) or not isinstance(col, int):
            return False
        return 0 <= row < BOARD_SIZE and 0 <= col < BOARD_SIZE

    def get_piece(self, position: Position) -> Optional[Piece]:
        """
        指定位置の駒を取得
        盤外の位置に対しては例外を出さずにNoneを返す
        """
        if not self.is_valid_position(position):
            return None
        row, col = position
        return self.squares[row][col]

    def is_occupied(self, position: Position) -> bool:
        """指定位置に駒があるか確認"""
        return self.get_piece(position) is not None

    def get_piece_owner(self, position: Position) -> Optional[Player]:
        """指定位置の駒の所有者を取得"""
        piece = self.get_piece(position)
        return piece.owner if piece else None

    def set_piece(self, position: Position, piece: Optional[Piece]):
        """指定位置に駒を置く（既にある駒は上書き）"""
        if not self.is_valid_position(position):
            raise ValueError(f"Invalid position: {position}")
        row, col = position
        self.squares[row][col] = piece

    def remove_piece(self, position: Position) -> Optional[Piece]:
        """指定位置から駒を取り除いて返す"""
        piece = self.get_piece(position)
        self.set_piece(position, None)
        return piece

    def move_piece(self, from_pos: Position, to_pos: Position) -> Optional[Piece]:
        """
        駒を移動する（移動先の駒は上書きされる）
        返り値: 移動先にあった駒
        """
        piece = self.remove_piece(from_pos)
        captured = self.get_piece(to_pos)
        self.set_piece(to_pos, piece)
        return captured

    def iter_pieces(self, player: Optional[Player] = None) -> Iterator[Tuple[Position, Piece]]:
        """盤上の駒を(位置, 駒)で列挙（playerを指定するとその駒のみ）"""
        for row in range(BOARD_SIZE):
            for col in range(BOARD_SIZE):
                piece = self.squares[row][col]
                if piece is None:
                    continue
                if player is None or piece.owner == player:
                    yield (row, col), piece

    def find_king(self, player: Player) -> Optional[Position]:
        """指定プレイヤーの玉の位置を盤面を走査して取得"""
        for pos, piece in self.iter_pieces(player):
            if piece.piece_type == PieceType.KING:
                return pos
        return None

    def copy(self) -> 'Board':
        """盤面のコピーを作成"""
        new_board = Board()
        for (row, col), piece in self.iter_pieces():
            new_board.squares[row][col] = piece.copy()
        return new_board

    def __eq__(self, other):
        if not isinstance(other, Board):
            return NotImplemented
        return self.squares == other.squares

    def __str__(self):
        """盤面の文字列表現を返す"""
        cell_width = 4
        separator_length = BOARD_SIZE * (cell_width + 1) + 1

        result = []

        # 列インデックスヘッダー
        header = "   "
        for i in range(BOARD_SIZE):
            header += f"{i:^{cell_width}}|"
        result.append(header)

        # 区切り線
        result.append("  " + "-" * separator_length)

        for row in range(BOARD_SIZE):
            row_str = f"{row} |"
            for col in range(BOARD_SIZE):
                piece = self.squares[row][col]
                if piece is None:
                    row_str += " " * cell_width + "|"
                else:
                    row_str += f"{str(piece):^{cell_width}}|"
            result.append(row_str)
            result.append("  " + "-" * separator_length)

        return "\n".join(result)

    def to_dict(self) -> dict:
        """盤面を辞書形式に変換（API用）"""
        board_data = []
        for row in range(BOARD_SIZE):
            row_data = []
            for col in range(BOARD_SIZE):
                piece = self.squares[row][col]
                row_data.append(piece.to_dict() if piece else None)
            board_data.append(row_data)

        return {
            "board": board_data,
            "king_positions": {
                "BLACK": self.find_king(Player.BLACK),
                "WHITE": self.find_king(Player.WHITE),
            }
        }

    @staticmethod
    def from_dict(data: dict) -> 'Board':
        """辞書形式から盤面を復元（API用）"""
        board = Board()
        for row, row_data in enumerate(data["board"]):
            for col, piece_data in enumerate(row_data):
                if piece_data:
                    board.set_piece((row, col), Piece.from_dict(piece_data))
        return board
