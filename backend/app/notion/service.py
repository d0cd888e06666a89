# backend/app/notion/service.py

"""
Notion クライアントとステータス集計をつなぐサービス層。

- databases/query を cursor で順番にページングする
- 各ページのステータスを解決し、既知のステータスだけを数える
"""

import logging
from datetime import datetime, timezone
from typing import Any, Dict, Iterable, Optional

from .client import NotionClient, NotionClientError
from .config import NotionCountsConfig, get_notion_counts_config
from .schemas import NotionStatusCounts
from .status import extract_page_status

logger = logging.getLogger(__name__)


class NotionPaginationLimitError(NotionClientError):
    """max_pages 回 query しても has_more が終わらない場合の例外。"""

    def __init__(self, max_pages: int) -> None:
        super().__init__(
            f"Notion still reported has_more after {max_pages} pages; "
            "raise NOTION_MAX_PAGES if the database is really this large."
        )
        self.max_pages = max_pages


def new_counts(statuses: Iterable[str]) -> Dict[str, int]:
    """既知ステータスをすべて 0 で初期化した集計用 dict を返す。"""
    return {status: 0 for status in statuses}


def tally_pages(
    counts: Dict[str, int],
    pages: Iterable[Dict[str, Any]],
    property_name: str,
) -> None:
    """
    ページ群のステータスを counts に加算する。

    counts に存在しないステータス（"Unknown" を含む）は無視し、キーも追加しない。
    """
    for page in pages:
        resolved = extract_page_status(page, property_name)
        if resolved.name in counts:
            counts[resolved.name] += 1


class NotionStatusCountService:
    """
    NotionClient を利用して、データベース全体のステータス件数を集計するサービス。
    """

    def __init__(
        self,
        config: Optional[NotionCountsConfig] = None,
        client: Optional[NotionClient] = None,
    ) -> None:
        self.config = config or get_notion_counts_config()
        self.client = client or NotionClient(self.config)

    def count_statuses(self, now: Optional[datetime] = None) -> NotionStatusCounts:
        """
        データベースを最後のページまで取得し、ステータスごとの件数を返す。

        :raises NotionAPIError: Notion が 2xx 以外を返した場合（最初の失敗で中断）。
        :raises NotionPaginationLimitError: max_pages を超えてもページが続く場合。
        :raises NotionClientError: 通信エラーやレスポンス形式不正。
        """
        counts = new_counts(self.config.statuses)
        cursor: Optional[str] = None
        pages_fetched = 0

        while True:
            if pages_fetched >= self.config.max_pages:
                logger.warning(
                    "Stopped paginating database %s after %d pages.",
                    self.config.database_id,
                    pages_fetched,
                )
                raise NotionPaginationLimitError(self.config.max_pages)

            page = self.client.query_database(start_cursor=cursor)
            pages_fetched += 1
            tally_pages(counts, page.results, self.config.status_property)

            if not page.has_more:
                break
            if not page.next_cursor:
                logger.warning("Notion reported has_more without next_cursor; stopping.")
                break
            cursor = page.next_cursor

        total = sum(counts.values())
        logger.info(
            "Counted %d records across %d page(s) for database %s.",
            total,
            pages_fetched,
            self.config.database_id,
        )

        return NotionStatusCounts(
            counts=counts,
            total=total,
            updated_at=now or datetime.now(timezone.utc),
        )
