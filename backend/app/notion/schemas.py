# backend/app/notion/schemas.py

"""
/api/notion-counts のレスポンスボディを表現するスキーマ定義。
"""

from datetime import datetime
from typing import Dict, Optional

from pydantic import BaseModel, ConfigDict, Field


class NotionStatusCounts(BaseModel):
    """
    ステータスごとの件数集計結果。

    counts のキー順は設定されたステータス語彙の順になる。
    """

    model_config = ConfigDict(populate_by_name=True)

    counts: Dict[str, int] = Field(..., description="ステータス名 → 件数")
    total: int = Field(..., ge=0, description="counts の合計")
    updated_at: datetime = Field(
        ...,
        alias="updatedAt",
        description="集計時刻（ISO-8601, UTC）",
    )


class ErrorResponse(BaseModel):
    """
    エラー時の JSON ボディ。

    status / detail は該当する場合のみ出力する。
    """

    error: str
    status: Optional[int] = Field(None, description="上流 API の HTTP ステータス")
    detail: Optional[str] = Field(None, description="診断用の詳細メッセージ")
