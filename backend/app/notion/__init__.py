# backend/app/notion/__init__.py

"""
Notion 連携用モジュール群。

主な責務:
- Notion API からデータベースを cursor でページングして読み取る
- レコードのステータスプロパティを解決し、件数を集計する
- 集計結果を /api/notion-counts として公開する
"""
