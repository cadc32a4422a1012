import logging
import os
from pathlib import Path
from typing import Optional

from psycopg_pool import AsyncConnectionPool

from portfolio_contact.core.db import db_conn

log = logging.getLogger("uvicorn.error")
_REPO_ROOT = Path(__file__).resolve().parents[3]
_DEFAULT_SQL_PATH = _REPO_ROOT / "db" / "init" / "01_contact_submissions.sql"


def _sql_candidates() -> tuple[list[Path], Optional[Path]]:
    env_path = os.environ.get("CONTACT_SCHEMA_FILE")
    candidates: list[Path] = []
    if env_path:
        candidates.append(Path(env_path))
    candidates.append(_DEFAULT_SQL_PATH)

    for candidate in candidates:
        if candidate.exists():
            return candidates, candidate

    return candidates, None


async def ensure_contact_schema(pool: AsyncConnectionPool) -> bool:
    """
    Create contact_submissions if it does not exist yet.

    The SQL file only uses IF NOT EXISTS statements, so running it against an
    already provisioned database is a no-op. Returns False when no SQL file
    could be found.
    """
    candidates, sql_path = _sql_candidates()
    if not sql_path:
        log.warning(
            "Contact schema file not found, tried %s",
            ", ".join(str(p) for p in candidates),
        )
        return False

    sql = sql_path.read_text()
    if not sql.strip():
        return False

    async with db_conn(pool) as (conn, cur):
        log.info("Ensuring contact_submissions schema exists using %s", sql_path.name)
        await cur.execute(sql)
        await conn.commit()
    return True
