# backend/app/main.py

"""
バックエンドアプリケーションのエントリーポイント。

主な責務:
- /api/notion-counts エンドポイントを公開する
- /health エンドポイントを公開する
"""

from fastapi import FastAPI

from app.notion.router import router as notion_router


def create_app() -> FastAPI:
    """
    FastAPI アプリケーションファクトリ。

    - Notion ステータス集計エンドポイント (/api/notion-counts)
    - ヘルスチェックエンドポイント (/health)
    """
    app = FastAPI(title="Notion Status Counts")

    # ルーター登録
    app.include_router(notion_router)

    @app.get("/health", tags=["health"])
    def health_check() -> dict:
        """
        簡易ヘルスチェックエンドポイント。
        モニタリングや動作確認用。
        """
        return {"status": "ok"}

    return app


# uvicorn 実行時のエントリーポイント
app = create_app()
