"""
将棋 APIパッケージ
"""
