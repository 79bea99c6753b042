"""
将棋ルールエンジンのセットアップスクリプト
"""

from setuptools import setup, find_packages

setup(
    name="shogi-rules",
    version="1.0.0",
    description="将棋 - 合法手・王手・詰み判定エンジンとAPIサーバ",
    author="",
    packages=find_packages(include=["src", "src.*"]),
    package_dir={"": "."},
    python_requires=">=3.11",
    install_requires=[
        "fastapi>=0.118.0",
        "uvicorn>=0.37.0",
        "pydantic>=2.11.10",
    ],
    extras_require={
        "dev": [
            "pytest>=7.0.0",
            "pytest-asyncio>=0.21.0",
            "hypothesis>=6.0.0",
            "httpx>=0.27.0",
        ],
    },
)
