# backend/app/notion/client.py

"""
Notion API との通信を担当するクライアントモジュール。
"""

from dataclasses import dataclass, field
from typing import Any, Dict, List, Optional

import httpx

from .config import NotionCountsConfig, get_notion_counts_config


class NotionClientError(RuntimeError):
    """Notion クライアント全般の例外。"""


class NotionAPIError(NotionClientError):
    """Notion API が 2xx 以外を返した場合の例外。"""

    def __init__(self, status_code: int, body: str = "") -> None:
        super().__init__(f"Notion API error: {status_code} {body}".rstrip())
        self.status_code = status_code
        self.body = body


class NotionAuthError(NotionAPIError):
    """認証・権限関連のエラー（401 / 403）。"""


@dataclass
class NotionQueryPage:
    """databases/query 1 回分のレスポンス。"""

    results: List[Dict[str, Any]] = field(default_factory=list)
    has_more: bool = False
    next_cursor: Optional[str] = None


class NotionClient:
    """
    Notion API の薄いラッパークライアント。

    - データベースの query（1 ページ単位）
    """

    def __init__(self, config: Optional[NotionCountsConfig] = None) -> None:
        self.config = config or get_notion_counts_config()

    def _build_headers(self) -> Dict[str, str]:
        """
        Notion API 呼び出しに必要なヘッダーを構築。
        """
        return {
            "Authorization": f"Bearer {self.config.api_token}",
            "Notion-Version": self.config.api_version,
            "Content-Type": "application/json",
        }

    def _raise_for_status(self, response: httpx.Response) -> None:
        """
        HTTP レスポンスコードが 2xx 以外なら、ステータスと本文を持った例外を投げる。
        """
        if response.is_success:
            return
        if response.status_code in (401, 403):
            raise NotionAuthError(response.status_code, response.text)
        raise NotionAPIError(response.status_code, response.text)

    def query_database(self, start_cursor: Optional[str] = None) -> NotionQueryPage:
        """
        データベースを 1 ページ分 query する。

        start_cursor が None の場合は先頭ページを取得する。
        """
        url = f"{self.config.api_base_url}/databases/{self.config.database_id}/query"

        payload: Dict[str, Any] = {"page_size": self.config.page_size}
        if start_cursor:
            payload["start_cursor"] = start_cursor

        try:
            response = httpx.post(
                url,
                headers=self._build_headers(),
                json=payload,
                timeout=self.config.timeout_seconds,
            )
        except httpx.RequestError as exc:
            raise NotionClientError(f"Failed to call Notion API: {exc}") from exc

        self._raise_for_status(response)

        try:
            data = response.json()
        except ValueError as exc:
            raise NotionClientError("Notion API returned a non-JSON response.") from exc

        if not isinstance(data, dict):
            raise NotionClientError("Unexpected Notion API response format: body is not an object.")

        results = data.get("results") or []
        if not isinstance(results, list):
            raise NotionClientError("Unexpected Notion API response format: 'results' is not a list.")

        next_cursor = data.get("next_cursor")
        return NotionQueryPage(
            results=results,
            has_more=bool(data.get("has_more")),
            next_cursor=next_cursor if isinstance(next_cursor, str) else None,
        )
