"""
将棋 FastAPI サーバ
対局の状態管理と合法手・詰み判定のエンドポイントを提供
"""

import logging
import uuid
from typing import Dict, List, Optional

from fastapi import FastAPI, HTTPException
from fastapi.middleware.cors import CORSMiddleware
from pydantic import BaseModel

from ..engine import GameState, Move, MoveType, PieceType, Player, can_promote
from .config import ServerConfig

logger = logging.getLogger(__name__)

config = ServerConfig.from_env()

app = FastAPI(
    title="将棋 API",
    description="将棋のルール判定バックエンドAPI",
    version="1.0.0"
)

# CORS設定（フロントエンドからのアクセスを許可）
app.add_middleware(
    CORSMiddleware,
    allow_origins=["*"],
    allow_credentials=True,
    allow_methods=["*"],
    allow_headers=["*"],
)

# ゲームの状態を保持する辞書
games: Dict[str, GameState] = {}


# Pydanticモデル（リクエスト/レスポンス用）

class NewGameResponse(BaseModel):
    game_id: str
    message: str
    game_state: dict


class MoveRequest(BaseModel):
    from_row: Optional[int] = None
    from_col: Optional[int] = None
    to_row: int
    to_col: int
    move_type: str = "NORMAL"  # NORMAL, CAPTURE, DROP
    piece_type: Optional[str] = None  # DROPの場合に必要
    promote: bool = False


class MoveResponse(BaseModel):
    success: bool
    message: str
    game_state: dict
    legal_moves: Optional[List[dict]] = None


class PositionsResponse(BaseModel):
    positions: List[List[int]]
    count: int
    current_player: str


def _get_game(game_id: str) -> GameState:
    if game_id not in games:
        raise HTTPException(status_code=404, detail="ゲームが見つかりません")
    return games[game_id]


def _parse_enum(enum_cls, name: str, label: str):
    try:
        return enum_cls[name.upper()]
    except KeyError:
        raise HTTPException(status_code=400, detail=f"無効な{label}: {name}")


def _positions_response(positions, game_state: GameState) -> PositionsResponse:
    ordered = sorted(positions)
    return PositionsResponse(
        positions=[[row, col] for row, col in ordered],
        count=len(ordered),
        current_player=game_state.current_player.name,
    )


# エンドポイント

@app.get("/api")
async def root():
    """APIルート"""
    return {
        "message": "将棋 API へようこそ",
        "version": "1.0.0",
        "endpoints": [
            "/new_game",
            "/apply_move/{game_id}",
            "/get_legal_moves/{game_id}",
            "/get_valid_moves/{game_id}",
            "/get_drop_positions/{game_id}",
            "/can_promote",
            "/get_game/{game_id}",
            "/resign/{game_id}",
            "/delete_game/{game_id}",
        ]
    }


@app.post("/new_game", response_model=NewGameResponse)
async def new_game():
    """
    新しいゲームを開始する
    平手の初期盤面から始まる
    """
    game_id = str(uuid.uuid4())
    game_state = GameState(game_id, forbid_pawn_drop_mate=config.forbid_pawn_drop_mate)
    games[game_id] = game_state
    logger.debug("Created game %s", game_id)

    return NewGameResponse(
        game_id=game_id,
        message="新しいゲームを開始しました",
        game_state=game_state.to_dict()
    )


@app.get("/get_game/{game_id}")
async def get_game(game_id: str):
    """ゲームの状態を取得"""
    return _get_game(game_id).to_dict()


@app.post("/apply_move/{game_id}", response_model=MoveResponse)
async def apply_move(game_id: str, move_request: MoveRequest):
    """
    手を適用する
    """
    game_state = _get_game(game_id)

    if game_state.game_over:
        raise HTTPException(status_code=400, detail="ゲームは既に終了しています")

    # 手を構築
    move_type = _parse_enum(MoveType, move_request.move_type, "手の種類")
    to_pos = (move_request.to_row, move_request.to_col)

    if move_type == MoveType.DROP:
        if not move_request.piece_type:
            raise HTTPException(status_code=400, detail="DROPには piece_type が必要です")
        piece_type = _parse_enum(PieceType, move_request.piece_type, "駒の種類")
        move = Move.create_drop_move(to_pos, piece_type, game_state.current_player)
    else:
        if move_request.from_row is None or move_request.from_col is None:
            raise HTTPException(status_code=400, detail="移動元の座標が必要です")

        from_pos = (move_request.from_row, move_request.from_col)
        if move_type == MoveType.CAPTURE:
            move = Move.create_capture_move(
                from_pos, to_pos, game_state.current_player, move_request.promote
            )
        else:  # NORMAL
            move = Move.create_normal_move(
                from_pos, to_pos, game_state.current_player, move_request.promote
            )

    success, message = game_state.apply_move(move)

    if not success:
        return MoveResponse(
            success=False,
            message=message,
            game_state=game_state.to_dict()
        )

    # 次の合法手を取得
    legal_moves = None
    if not game_state.game_over:
        legal_moves = [m.to_dict() for m in game_state.get_legal_moves()]

    return MoveResponse(
        success=True,
        message=message,
        game_state=game_state.to_dict(),
        legal_moves=legal_moves
    )


@app.get("/get_legal_moves/{game_id}")
async def get_legal_moves(game_id: str):
    """現在のプレイヤーの合法手を取得"""
    game_state = _get_game(game_id)

    if game_state.game_over:
        return {"legal_moves": [], "message": "ゲームは終了しています"}

    legal_moves = game_state.get_legal_moves()

    return {
        "legal_moves": [move.to_dict() for move in legal_moves],
        "count": len(legal_moves),
        "current_player": game_state.current_player.name
    }


@app.get("/get_valid_moves/{game_id}", response_model=PositionsResponse)
async def get_valid_moves(game_id: str, row: int, col: int):
    """指定マスの駒の移動先を取得"""
    game_state = _get_game(game_id)
    return _positions_response(game_state.get_valid_moves((row, col)), game_state)


@app.get("/get_drop_positions/{game_id}", response_model=PositionsResponse)
async def get_drop_positions(game_id: str, piece_type: str):
    """持ち駒を打てる位置を取得"""
    game_state = _get_game(game_id)
    parsed = _parse_enum(PieceType, piece_type, "駒の種類")
    return _positions_response(game_state.get_drop_positions(parsed), game_state)


@app.get("/can_promote")
async def can_promote_endpoint(piece_type: str, player: str, from_row: int, to_row: int):
    """成れるかどうかを判定"""
    parsed_type = _parse_enum(PieceType, piece_type, "駒の種類")
    parsed_player = _parse_enum(Player, player, "プレイヤー")
    return {"can_promote": can_promote(parsed_type, parsed_player, from_row, to_row)}


@app.post("/resign/{game_id}")
async def resign(game_id: str):
    """
    投了する
    現在のプレイヤーが投了し、相手の勝利となる
    """
    game_state = _get_game(game_id)

    if game_state.game_over:
        raise HTTPException(status_code=400, detail="ゲームは既に終了しています")

    loser = game_state.current_player
    winner = game_state.resign()

    return {
        "message": f"{loser.name}が投了しました",
        "winner": winner.name,
        "game_state": game_state.to_dict()
    }


@app.delete("/delete_game/{game_id}")
async def delete_game(game_id: str):
    """ゲームを削除"""
    _get_game(game_id)
    del games[game_id]
    logger.debug("Deleted game %s", game_id)
    return {"message": "ゲームを削除しました"}


if __name__ == "__main__":
    import uvicorn
    uvicorn.run(app, host=config.host, port=config.port, log_level=config.log_level)
