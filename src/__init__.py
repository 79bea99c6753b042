"""
将棋ルールエンジン
"""
