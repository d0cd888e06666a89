# backend/app/notion/router.py

"""
/api/notion-counts エンドポイント。

ダッシュボードや Notion 埋め込みから直接呼ばれる前提なので、
エラーも含めて常に CORS ヘッダー付きの JSON を返す。
"""

import logging
import secrets
from typing import Any, Dict, Optional

from fastapi import APIRouter, Depends, Query, Request, Response, status
from fastapi.responses import JSONResponse

from app.notion.client import NotionAPIError
from app.notion.config import NotionCountsConfig, get_notion_counts_config
from app.notion.schemas import ErrorResponse
from app.notion.service import NotionPaginationLimitError, NotionStatusCountService

logger = logging.getLogger(__name__)

router = APIRouter(prefix="/api", tags=["notion"])

CORS_HEADERS = {
    "Access-Control-Allow-Origin": "*",
    "Access-Control-Allow-Methods": "GET,OPTIONS",
    "Access-Control-Allow-Headers": "Content-Type",
}
CACHE_CONTROL = "s-maxage=10, stale-while-revalidate=30"

# GET / OPTIONS 以外もハンドラで受け、405 のボディをこちらで組み立てる
_ROUTED_METHODS = ["GET", "OPTIONS", "POST", "PUT", "PATCH", "DELETE", "HEAD"]


def get_count_service(
    config: NotionCountsConfig = Depends(get_notion_counts_config),
) -> NotionStatusCountService:
    return NotionStatusCountService(config=config)


def _error(
    status_code: int,
    error: str,
    headers: Dict[str, str],
    *,
    upstream_status: Optional[int] = None,
    detail: Optional[str] = None,
) -> JSONResponse:
    body = ErrorResponse(error=error, status=upstream_status, detail=detail)
    return JSONResponse(
        status_code=status_code,
        content=body.model_dump(exclude_none=True),
        headers=headers,
    )


def _key_matches(supplied: Optional[str], expected: str) -> bool:
    if supplied is None:
        return False
    return secrets.compare_digest(supplied.encode("utf-8"), expected.encode("utf-8"))


@router.api_route(
    "/notion-counts",
    methods=_ROUTED_METHODS,
    summary="Notion データベースのステータス件数を集計",
    description="STATUS_PROP のステータスごとの件数・合計・集計時刻を返す。",
)
def notion_counts(
    request: Request,
    key: Optional[str] = Query(None, description="SHARED_KEY 設定時の共有キー"),
    config: NotionCountsConfig = Depends(get_notion_counts_config),
    service: NotionStatusCountService = Depends(get_count_service),
) -> Response:
    """
    ステータス件数を返すエンドポイント。

    判定順:
      1. OPTIONS → 200（空ボディ）
      2. GET 以外 → 405
      3. SHARED_KEY 不一致 → 401
      4. NOTION_TOKEN / DATABASE_ID 未設定 → 500（Notion へは問い合わせない）
      5. Notion の失敗・予期しない例外 → 500
    """
    headers: Dict[str, Any] = dict(CORS_HEADERS)

    if request.method == "OPTIONS":
        return Response(status_code=status.HTTP_200_OK, headers=headers)
    if request.method != "GET":
        return _error(status.HTTP_405_METHOD_NOT_ALLOWED, "Method not allowed", headers)

    if config.shared_key and not _key_matches(key, config.shared_key):
        return _error(status.HTTP_401_UNAUTHORIZED, "Unauthorized", headers)

    headers["Cache-Control"] = CACHE_CONTROL

    if not config.is_configured:
        logger.error("Missing configuration: %s", ", ".join(config.missing_settings()))
        return _error(
            status.HTTP_500_INTERNAL_SERVER_ERROR,
            "Missing NOTION_TOKEN or DATABASE_ID env vars",
            headers,
        )

    try:
        result = service.count_statuses()
    except NotionAPIError as exc:
        logger.error("Notion query failed with status %s.", exc.status_code)
        return _error(
            status.HTTP_500_INTERNAL_SERVER_ERROR,
            "Notion query failed",
            headers,
            upstream_status=exc.status_code,
            detail=exc.body,
        )
    except NotionPaginationLimitError as exc:
        return _error(
            status.HTTP_500_INTERNAL_SERVER_ERROR,
            "Notion pagination limit exceeded",
            headers,
            detail=str(exc),
        )
    except Exception as exc:  # noqa: BLE001
        # 予期しない例外も 500 の JSON に変換する（スタックトレースはログ側で確認）
        logger.exception("Unexpected error while counting Notion statuses.")
        return _error(
            status.HTTP_500_INTERNAL_SERVER_ERROR,
            "Server error",
            headers,
            detail=str(exc),
        )

    return JSONResponse(
        status_code=status.HTTP_200_OK,
        content=result.model_dump(mode="json", by_alias=True),
        headers=headers,
    )
