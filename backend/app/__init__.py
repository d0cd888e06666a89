# backend/app/__init__.py
"""
Notion status counts backend application package.

This package contains:
- main: FastAPI application entrypoint
- notion: Notion database status aggregation
- utils: environment variable helpers
"""
