"""Create the database and apply ``database/schema.sql``.

Used by ``scripts/init_db.py`` and by ``create_app`` when AUTO_INIT_DB is on.
Every statement in the schema is idempotent, so reapplying it is safe.
"""

from __future__ import annotations

import logging
import re
from pathlib import Path
from typing import Iterable, Mapping

import mysql.connector

from ..core.exceptions import StoreError
from .connection import DBConfig

logger = logging.getLogger(__name__)

_CREATE_DB = re.compile(r"(?im)^\s*CREATE\s+DATABASE\b.*?;\s*$")
_USE_DB = re.compile(r"(?im)^\s*USE\b.*?;\s*$")
_LINE_COMMENT = re.compile(r"(?m)^\s*--.*$")


def _connect(config: DBConfig, *, with_database: bool = True):
    kwargs = dict(
        host=config.host,
        port=config.port,
        user=config.user,
        password=config.password,
        connection_timeout=config.connect_timeout,
    )
    if with_database:
        kwargs["database"] = config.database
    return mysql.connector.connect(**kwargs)


def prepare_schema_sql(sql: str) -> str:
    """Drop comments and any CREATE DATABASE / USE lines so the configured name wins."""
    for pattern in (_LINE_COMMENT, _CREATE_DB, _USE_DB):
        sql = pattern.sub("", sql)
    return sql


def iter_sql_statements(sql: str) -> Iterable[str]:
    """Split on ``;`` outside quoted strings."""
    buf: list[str] = []
    quote = None
    escaped = False

    for ch in sql:
        buf.append(ch)
        if escaped:
            escaped = False
        elif ch == "\\":
            escaped = True
        elif quote:
            if ch == quote:
                quote = None
        elif ch in ("'", '"'):
            quote = ch
        elif ch == ";":
            stmt = "".join(buf[:-1]).strip()
            buf.clear()
            if stmt:
                yield stmt

    tail = "".join(buf).strip()
    if tail:
        yield tail


def ensure_database_exists(config: DBConfig) -> None:
    conn = _connect(config, with_database=False)
    try:
        cur = conn.cursor()
        cur.execute(
            f"CREATE DATABASE IF NOT EXISTS `{config.database}` CHARACTER SET utf8mb4 COLLATE utf8mb4_unicode_ci"
        )
        conn.commit()
    finally:
        conn.close()


def apply_schema(db_config: Mapping, *, schema_path: str | Path) -> int:
    """Apply the schema file; returns how many statements ran."""
    config = DBConfig.from_settings(db_config)
    sql = prepare_schema_sql(Path(schema_path).read_text(encoding="utf-8"))

    try:
        ensure_database_exists(config)
        conn = _connect(config)
    except mysql.connector.Error as e:
        logger.error("Cannot reach %s: %s", config.describe(), e)
        raise StoreError("Database unavailable") from e

    try:
        cur = conn.cursor()
        count = 0
        for stmt in iter_sql_statements(sql):
            cur.execute(stmt)
            count += 1
        conn.commit()
    except mysql.connector.Error as e:
        conn.rollback()
        logger.error("Schema statement failed on %s: %s", config.describe(), e)
        raise StoreError(str(e)) from e
    finally:
        conn.close()

    logger.info("Applied %d schema statements to %s", count, config.describe())
    return count


def list_tables(db_config: Mapping) -> list[str]:
    conn = _connect(DBConfig.from_settings(db_config))
    try:
        cur = conn.cursor()
        cur.execute("SHOW TABLES")
        return [row[0] for row in cur.fetchall()]
    finally:
        conn.close()
