# backend/app/utils/config.py

"""
環境変数読み取り用のユーティリティ。
Notion 集計設定（app.notion.config）から共通利用する。
"""

import logging
import os
from typing import Optional, Sequence, Tuple

logger = logging.getLogger(__name__)


class EnvVarMissingError(RuntimeError):
    """必須環境変数が設定されていない場合に投げる例外。"""

    def __init__(self, name: str) -> None:
        super().__init__(f"Required environment variable '{name}' is not set.")
        self.name = name


def get_env(
    name: str,
    default: Optional[str] = None,
    *,
    required: bool = True,
) -> str:
    """
    環境変数を取得するヘルパー。

    :param name: 環境変数名
    :param default: デフォルト値（required=False の場合のみ使用）
    :param required: True の場合、未設定なら例外を投げる
    :return: 文字列値
    """
    value = os.getenv(name)

    if value is None or value == "":
        if required:
            raise EnvVarMissingError(name)
        return default

    return value


def get_env_int(name: str, default: int) -> int:
    """
    整数の環境変数を取得するユーティリティ。

    - 未設定 or パース不能の場合は default を返す。
    """
    raw = get_env(name, required=False)
    if raw is None:
        return default

    try:
        return int(raw.strip())
    except ValueError:
        logger.warning("Invalid integer for %s: %r; using default %s.", name, raw, default)
        return default


def get_env_list(name: str, default: Sequence[str]) -> Tuple[str, ...]:
    """
    カンマ区切りの環境変数をタプルとして取得する。

    空要素は捨てる。結果が空なら default を返す。
    """
    raw = get_env(name, required=False)
    if raw is None:
        return tuple(default)

    items = tuple(item.strip() for item in raw.split(",") if item.strip())
    return items or tuple(default)
