"""
APIサーバの設定
環境変数 SHOGI_* で上書きできる
"""

import os
from typing import Mapping, Optional

from pydantic import BaseModel, Field

ENV_PREFIX = "SHOGI_"

_TRUE_VALUES = {"1", "true", "yes", "on"}


class ServerConfig(BaseModel):
    """サーバ設定"""

    host: str = "0.0.0.0"
    port: int = Field(default=8001, ge=1, le=65535)
    log_level: str = "info"
    # 打ち歩詰めを禁止するか（既定では許可）
    forbid_pawn_drop_mate: bool = False

    @classmethod
    def from_env(cls, environ: Optional[Mapping[str, str]] = None) -> "ServerConfig":
        """環境変数から設定を読み込む（未設定の項目は既定値）"""
        environ = os.environ if environ is None else environ
        values = {}

        if f"{ENV_PREFIX}HOST" in environ:
            values["host"] = environ[f"{ENV_PREFIX}HOST"]
        if f"{ENV_PREFIX}PORT" in environ:
            values["port"] = environ[f"{ENV_PREFIX}PORT"]
        if f"{ENV_PREFIX}LOG_LEVEL" in environ:
            values["log_level"] = environ[f"{ENV_PREFIX}LOG_LEVEL"].lower()
        if f"{ENV_PREFIX}FORBID_PAWN_DROP_MATE" in environ:
            raw = environ[f"{ENV_PREFIX}FORBID_PAWN_DROP_MATE"]
            values["forbid_pawn_drop_mate"] = raw.strip().lower() in _TRUE_VALUES

        return cls(**values)
