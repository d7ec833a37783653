from __future__ import annotations

import logging
import re
from pathlib import Path
from typing import Iterator

import mysql.connector

from .connection import DBConfig

logger = logging.getLogger(__name__)

# schema.sql may carry its own CREATE DATABASE / USE lines; the target
# database always comes from DB_CONFIG instead.
_DATABASE_SELECTION = re.compile(r"(?im)^\s*(?:CREATE\s+DATABASE|USE)\b.*?;\s*$")
_LINE_COMMENT = re.compile(r"(?m)^\s*--.*$")
# A quoted literal (with backslash escapes), or a run of anything else but ';'.
_SQL_TOKEN = re.compile(r"'(?:\\.|[^'\\])*'|\"(?:\\.|[^\"\\])*\"|[^'\";]+|;|['\"]", re.S)


def _strip_create_db_and_use(sql: str) -> str:
    return _DATABASE_SELECTION.sub("", sql)


def _strip_line_comments(sql: str) -> str:
    return _LINE_COMMENT.sub("", sql)


def _iter_sql_statements(sql: str) -> Iterator[str]:
    """Split on top-level ``;``. Semicolons inside quoted literals are kept."""

    current: list[str] = []
    for token in _SQL_TOKEN.findall(sql):
        if token != ";":
            current.append(token)
            continue
        stmt = "".join(current).strip()
        current = []
        if stmt:
            yield stmt

    tail = "".join(current).strip()
    if tail:
        yield tail


def _connect(target: DBConfig, *, with_database: bool = True):
    kwargs = dict(
        host=target.host,
        port=target.port,
        user=target.user,
        password=target.password,
        connection_timeout=target.connection_timeout,
        use_pure=True,
    )
    if with_database:
        kwargs["database"] = target.database
    return mysql.connector.connect(**kwargs)


def _run_sql_file(target: DBConfig, path: str | Path) -> int:
    sql = _strip_line_comments(_strip_create_db_and_use(Path(path).read_text(encoding="utf-8")))
    conn = _connect(target)
    executed = 0
    try:
        cur = conn.cursor()
        for stmt in _iter_sql_statements(sql):
            cur.execute(stmt)
            executed += 1
        conn.commit()
    finally:
        conn.close()
    return executed


def ensure_database_exists(db_config: dict) -> None:
    target = DBConfig.from_dict(db_config)
    conn = _connect(target, with_database=False)
    try:
        cur = conn.cursor()
        cur.execute(
            f"CREATE DATABASE IF NOT EXISTS `{target.database}` CHARACTER SET utf8mb4 COLLATE utf8mb4_unicode_ci;"
        )
        conn.commit()
    finally:
        conn.close()


def apply_schema(db_config: dict, *, schema_path: str | Path) -> None:
    ensure_database_exists(db_config)
    count = _run_sql_file(DBConfig.from_dict(db_config), schema_path)
    logger.info("Applied %d schema statements from %s", count, schema_path)


def apply_seed_sql(db_config: dict, *, seed_path: str | Path) -> None:
    count = _run_sql_file(DBConfig.from_dict(db_config), seed_path)
    logger.info("Applied %d seed statements from %s", count, seed_path)


def list_tables(db_config: dict) -> list[str]:
    conn = _connect(DBConfig.from_dict(db_config))
    try:
        cur = conn.cursor()
        cur.execute("SHOW TABLES")
        return [row[0] for row in cur.fetchall()]
    finally:
        conn.close()
