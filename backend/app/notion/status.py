# backend/app/notion/status.py

"""
Notion のステータス系プロパティから表示ラベルを取り出す。

Notion では同じ「ステータス」でも status 型と select 型の 2 種類があり得るので、
どちらの形だったかを StatusKind として明示して返す。
"""

from dataclasses import dataclass
from enum import Enum
from typing import Any, Dict, Optional

UNKNOWN_STATUS = "Unknown"


class StatusKind(str, Enum):
    STATUS = "status"
    SELECT = "select"
    UNKNOWN = "unknown"


@dataclass(frozen=True)
class ResolvedStatus:
    kind: StatusKind
    name: str


def _option_name(prop: Dict[str, Any], key: str) -> Optional[str]:
    option = prop.get(key)
    if isinstance(option, dict):
        name = option.get("name")
        if isinstance(name, str) and name:
            return name
    return None


def resolve_status(prop: Any) -> ResolvedStatus:
    """
    プロパティ値からステータス名を解決する。

    優先順: status 型 → select 型 → "Unknown"
    """
    if isinstance(prop, dict):
        name = _option_name(prop, "status")
        if name is not None:
            return ResolvedStatus(StatusKind.STATUS, name)

        name = _option_name(prop, "select")
        if name is not None:
            return ResolvedStatus(StatusKind.SELECT, name)

    return ResolvedStatus(StatusKind.UNKNOWN, UNKNOWN_STATUS)


def extract_page_status(page: Dict[str, Any], property_name: str) -> ResolvedStatus:
    """Notion ページオブジェクトから指定プロパティのステータスを取り出す。"""
    properties = page.get("properties") if isinstance(page, dict) else None
    if not isinstance(properties, dict):
        return resolve_status(None)
    return resolve_status(properties.get(property_name))
