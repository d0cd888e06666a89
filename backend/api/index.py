# backend/api/index.py

"""
サーバーレス（Vercel Python Runtime）用のエントリーポイント。

Vercel は api/ 配下のモジュールから ASGI の `app` を探すので、
FastAPI アプリをそのまま公開する。
"""

from app.main import app

__all__ = ["app"]
