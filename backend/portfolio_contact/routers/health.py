# portfolio_contact/routers/health.py
import logging
from datetime import datetime, timezone

import psycopg
from fastapi import APIRouter, Depends
from fastapi.responses import JSONResponse

from portfolio_contact.core.db import db_conn
from portfolio_contact.dependencies import get_store
from portfolio_contact.lib.submissions import SubmissionStore

router = APIRouter(prefix="/api/health", tags=["health"])
log = logging.getLogger("uvicorn.error")

@router.get("")
async def health_root():
    return {
        "status": "OK",
        "message": "Contact API is running",
        "timestamp": datetime.now(timezone.utc).isoformat(),
    }

@router.get("/db")
async def health_db(store: SubmissionStore = Depends(get_store)):
    try:
        async with db_conn(store.pool) as (conn, cur):
            await cur.execute("SELECT current_database(), current_user, version()")
            db_name, db_user, pg_version = await cur.fetchone()
        has_table = await store.table_exists()
    except psycopg.Error as exc:
        log.warning(f"[health] database probe failed: {exc}")
        return JSONResponse(status_code=503, content={"ok": False, "error": "Database unreachable"})

    return {
        "ok": True,
        "database": db_name,
        "user": db_user,
        "server_version": pg_version,
        "tables": {"contact_submissions": has_table},
    }
