"""
pytest共通設定とフィクスチャ
"""

import pytest
import sys
from pathlib import Path

# プロジェクトルートをパスに追加
project_root = Path(__file__).parent.parent
sys.path.insert(0, str(project_root))


@pytest.fixture
def empty_board():
    """空の盤面を提供するフィクスチャ"""
    from src.engine import Board
    return Board()


@pytest.fixture
def initial_board():
    """平手の初期盤面を提供するフィクスチャ"""
    from src.engine.initial_setup import load_initial_board
    return load_initial_board()


@pytest.fixture
def empty_hand():
    """空の持ち駒を提供するフィクスチャ"""
    from src.engine.initial_setup import get_initial_hand_pieces
    from src.engine import Player
    return get_initial_hand_pieces(Player.BLACK)


@pytest.fixture
def game_state():
    """初期状態の対局を提供するフィクスチャ"""
    from src.engine import GameState
    return GameState("test-game")


@pytest.fixture
def black_player():
    """先手（黒）プレイヤーを提供するフィクスチャ"""
    from src.engine import Player
    return Player.BLACK


@pytest.fixture
def white_player():
    """後手（白）プレイヤーを提供するフィクスチャ"""
    from src.engine import Player
    return Player.WHITE
