# backend/app/notion/config.py

"""
Notion ステータス集計に必要な設定値をまとめるモジュール。

プロセス起動時に一度だけ環境変数から読み込み、リクエスト処理中は変更しない。
"""

from dataclasses import dataclass
from functools import lru_cache
from typing import List, Optional, Tuple

from app.utils.config import get_env, get_env_int, get_env_list

DEFAULT_STATUSES: Tuple[str, ...] = (
    "Queue",
    "In Progress",
    "Past Due",
    "Blocked",
    "Completed",
)

# Notion の databases/query は page_size 100 が上限
MAX_PAGE_SIZE = 100


@dataclass(frozen=True)
class NotionCountsConfig:
    """Notion ステータス集計用の設定値コンテナ。"""

    api_token: Optional[str]
    database_id: Optional[str]
    status_property: str = "Status"
    shared_key: Optional[str] = None
    statuses: Tuple[str, ...] = DEFAULT_STATUSES
    api_base_url: str = "https://api.notion.com/v1"
    api_version: str = "2022-06-28"
    page_size: int = MAX_PAGE_SIZE
    max_pages: int = 50
    timeout_seconds: float = 10.0

    def missing_settings(self) -> List[str]:
        """未設定の必須環境変数名を返す。"""
        missing = []
        if not self.api_token:
            missing.append("NOTION_TOKEN")
        if not self.database_id:
            missing.append("DATABASE_ID")
        return missing

    @property
    def is_configured(self) -> bool:
        return not self.missing_settings()


def load_notion_counts_config() -> NotionCountsConfig:
    """
    環境変数から Notion 集計設定を読み込む。

    必須（欠けていてもここでは例外にせず、リクエスト時に 500 を返す）:
      - NOTION_TOKEN
      - DATABASE_ID

    任意:
      - STATUS_PROP            (デフォルト: Status)
      - SHARED_KEY             (設定時のみ ?key= を検証)
      - NOTION_STATUSES        (カンマ区切り。デフォルト: Queue,In Progress,Past Due,Blocked,Completed)
      - NOTION_API_BASE_URL    (デフォルト: https://api.notion.com/v1)
      - NOTION_API_VERSION     (デフォルト: 2022-06-28)
      - NOTION_PAGE_SIZE       (デフォルト: 100, 1..100 に丸める)
      - NOTION_MAX_PAGES       (デフォルト: 50)
      - NOTION_TIMEOUT_SECONDS (デフォルト: 10)
    """
    page_size = get_env_int("NOTION_PAGE_SIZE", MAX_PAGE_SIZE)
    max_pages = get_env_int("NOTION_MAX_PAGES", 50)

    return NotionCountsConfig(
        api_token=get_env("NOTION_TOKEN", required=False),
        database_id=get_env("DATABASE_ID", required=False),
        status_property=get_env("STATUS_PROP", default="Status", required=False),
        shared_key=get_env("SHARED_KEY", required=False),
        statuses=get_env_list("NOTION_STATUSES", DEFAULT_STATUSES),
        api_base_url=get_env(
            "NOTION_API_BASE_URL",
            default="https://api.notion.com/v1",
            required=False,
        ).rstrip("/"),
        api_version=get_env(
            "NOTION_API_VERSION",
            default="2022-06-28",
            required=False,
        ),
        page_size=min(max(page_size, 1), MAX_PAGE_SIZE),
        max_pages=max(max_pages, 1),
        timeout_seconds=float(get_env_int("NOTION_TIMEOUT_SECONDS", 10)),
    )


@lru_cache()
def get_notion_counts_config() -> NotionCountsConfig:
    """プロセス内で共有する設定インスタンスを返す。"""
    return load_notion_counts_config()
