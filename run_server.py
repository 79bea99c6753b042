#!/usr/bin/env python
"""
将棋 開発サーバ起動スクリプト
"""

import sys
import os

# プロジェクトルートをパスに追加
project_root = os.path.dirname(os.path.abspath(__file__))
sys.path.insert(0, project_root)

# appを直接インポート
from src.api.main import app, config
import uvicorn

if __name__ == "__main__":
    print("=" * 60)
    print("将棋 開発サーバを起動します")
    print("=" * 60)
    print(f"APIサーバ: http://localhost:{config.port}")
    print(f"API ドキュメント: http://localhost:{config.port}/docs")
    print("=" * 60)
    print()

    # appオブジェクトを直接渡す
    uvicorn.run(
        app,
        host=config.host,
        port=config.port,
        reload=False,
        log_level=config.log_level
    )
