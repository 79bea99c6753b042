"""
初期盤面の設定とユーティリティ
"""

from typing import Dict, Tuple
from .board import Board, BOARD_SIZE
from .piece import Piece, Player, PieceType, PIECE_NAMES, HAND_PIECE_TYPES

# 1段目（後手）と9段目（先手）の並び（筋0から8）
BACK_RANK = (
    PieceType.LANCE,
    PieceType.KNIGHT,
    PieceType.SILVER,
    PieceType.GOLD,
    PieceType.KING,
    PieceType.GOLD,
    PieceType.SILVER,
    PieceType.KNIGHT,
    PieceType.LANCE,
)


def load_initial_board() -> Board:
    """
    平手の初期盤面を作成する
    後手: 0段目に大駒以外、1段目に角(1筋)と飛(7筋)、2段目に歩
    先手: 8段目に大駒以外、7段目に飛(1筋)と角(7筋)、6段目に歩
    """
    board = Board()

    # 後手（白）の配置（上側）
    for col, piece_type in enumerate(BACK_RANK):
        board.set_piece((0, col), Piece(piece_type, Player.WHITE))
    board.set_piece((1, 1), Piece(PieceType.BISHOP, Player.WHITE))
    board.set_piece((1, 7), Piece(PieceType.ROOK, Player.WHITE))
    for col in range(BOARD_SIZE):
        board.set_piece((2, col), Piece(PieceType.PAWN, Player.WHITE))

    # 先手（黒）の配置（下側）
    for col, piece_type in enumerate(BACK_RANK):
        board.set_piece((8, col), Piece(piece_type, Player.BLACK))
    board.set_piece((7, 1), Piece(PieceType.ROOK, Player.BLACK))
    board.set_piece((7, 7), Piece(PieceType.BISHOP, Player.BLACK))
    for col in range(BOARD_SIZE):
        board.set_piece((6, col), Piece(PieceType.PAWN, Player.BLACK))

    return board


def get_initial_hand_pieces(player: Player) -> Dict[PieceType, int]:
    """
    対局開始時の持ち駒（全種0枚）
    """
    return {piece_type: 0 for piece_type in HAND_PIECE_TYPES}


def parse_piece_from_text(text: str) -> Tuple[PieceType, Player]:
    """
    テキストから駒の種類とプレイヤーを解析
    例: 'b玉' -> (PieceType.KING, Player.BLACK)
    """
    if len(text) < 2:
        raise ValueError(f"Invalid piece text: {text}")

    player_char = text[0]
    piece_char = text[1]

    # プレイヤーの判定
    if player_char == 'b':
        player = Player.BLACK
    elif player_char == 'w':
        player = Player.WHITE
    else:
        raise ValueError(f"Invalid player character: {player_char}")

    # 駒の種類を判定
    piece_type = None
    for pt, name in PIECE_NAMES.items():
        if name == piece_char:
            piece_type = pt
            break

    if piece_type is None:
        raise ValueError(f"Invalid piece character: {piece_char}")

    return piece_type, player


def board_from_rows(rows) -> Board:
    """
    文字列の行から盤面を作成（テスト・デバッグ用）
    各行はスペース区切りで9マス、空きマスは'.'、駒は'b歩'や'w玉'
    成り駒は末尾に'+'（例: 'b歩+'）
    """
    rows = list(rows)
    if len(rows) != BOARD_SIZE:
        raise ValueError(f"Expected {BOARD_SIZE} rows, got {len(rows)}")

    board = Board()
    for row, line in enumerate(rows):
        cells = line.split()
        if len(cells) != BOARD_SIZE:
            raise ValueError(f"Row {row} must have {BOARD_SIZE} cells: {line!r}")
        for col, cell in enumerate(cells):
            if cell == '.':
                continue
            promoted = cell.endswith('+')
            piece_type, player = parse_piece_from_text(cell.rstrip('+'))
            board.set_piece((row, col), Piece(piece_type, player, promoted))
    return board


def format_position(row: int, col: int) -> str:
    """
    盤面の位置を将棋の符号（筋・段）に変換
    例: (0, 0) -> "9一", (8, 8) -> "1九"
    """
    kanji_rows = "一二三四五六七八九"
    return f"{BOARD_SIZE - col}{kanji_rows[row]}"
