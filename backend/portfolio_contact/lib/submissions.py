import logging
from datetime import datetime, timezone
from typing import Optional

import psycopg
from psycopg_pool import AsyncConnectionPool

from portfolio_contact.core.db import db_conn
from portfolio_contact.core.errors import StorageError
from portfolio_contact.core.models import ContactPayload, Submission
from portfolio_contact.core.result import Err, Ok, Result

log = logging.getLogger("uvicorn.error")


class SubmissionStore:
    """Insert-and-return and count queries on contact_submissions."""

    def __init__(self, pool: AsyncConnectionPool):
        self._pool = pool

    @property
    def pool(self) -> AsyncConnectionPool:
        return self._pool

    async def insert(self, payload: ContactPayload, created_at: Optional[datetime] = None) -> Result:
        created_at = created_at or datetime.now(timezone.utc)
        try:
            async with db_conn(self._pool) as (conn, cur):
                await cur.execute(
                    """
                    INSERT INTO contact_submissions (name, email, message, created_at)
                    VALUES (%s, %s, %s, %s)
                    RETURNING id, name, email, message, created_at
                    """,
                    (payload.name, payload.email, payload.message, created_at),
                )
                row = await cur.fetchone()
                if row is None:
                    return Err(StorageError("Insert returned no row"))
                await conn.commit()
        except (psycopg.Error, UnicodeError) as exc:
            log.error(f"[submissions] insert failed: {exc}")
            return Err(StorageError("Failed to save submission to database", exc))

        submission = Submission(
            id=row[0], name=row[1], email=row[2], message=row[3], created_at=row[4],
        )
        log.info(f"[submissions] stored submission {submission.id}")
        return Ok(submission)

    async def count(self) -> Result:
        try:
            async with db_conn(self._pool) as (conn, cur):
                await cur.execute("SELECT count(*) FROM contact_submissions")
                row = await cur.fetchone()
        except psycopg.Error as exc:
            log.error(f"[submissions] count failed: {exc}")
            return Err(StorageError("Failed to count submissions", exc))
        return Ok(int(row[0]) if row else 0)

    async def table_exists(self) -> bool:
        async with db_conn(self._pool) as (conn, cur):
            await cur.execute("SELECT to_regclass('public.contact_submissions')")
            row = await cur.fetchone()
        return bool(row and row[0] is not None)
