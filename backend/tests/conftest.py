# backend/tests/conftest.py
"""
Pytest configuration for Notion status counts backend tests.

- Ensures that the project root (backend/) is added to sys.path
  so that `import app.*` works correctly in tests.
- Clears Notion related environment variables and the cached config so
  that a developer's real settings never leak into tests.
"""

import sys
from pathlib import Path

import pytest


def _ensure_project_root_in_sys_path() -> None:
    # This file is located at: backend/tests/conftest.py
    # parents[1] -> backend/
    project_root = Path(__file__).resolve().parents[1]
    project_root_str = str(project_root)

    if project_root_str not in sys.path:
        # Insert at the beginning so it has priority over site-packages, etc.
        sys.path.insert(0, project_root_str)


_ensure_project_root_in_sys_path()

_NOTION_ENV_VARS = (
    "NOTION_TOKEN",
    "DATABASE_ID",
    "STATUS_PROP",
    "SHARED_KEY",
    "NOTION_STATUSES",
    "NOTION_API_BASE_URL",
    "NOTION_API_VERSION",
    "NOTION_PAGE_SIZE",
    "NOTION_MAX_PAGES",
    "NOTION_TIMEOUT_SECONDS",
)


@pytest.fixture(autouse=True)
def _isolated_notion_env(monkeypatch):
    from app.notion.config import get_notion_counts_config

    for name in _NOTION_ENV_VARS:
        monkeypatch.delenv(name, raising=False)
    get_notion_counts_config.cache_clear()
    yield
    get_notion_counts_config.cache_clear()
