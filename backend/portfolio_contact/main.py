# portfolio_contact/main.py
from contextlib import asynccontextmanager
from fastapi import FastAPI
from fastapi.middleware.cors import CORSMiddleware
import logging

import psycopg

from portfolio_contact.core.db import close_pool, open_pool
from portfolio_contact.core.migrations import ensure_contact_schema
from portfolio_contact.core.settings import settings
from portfolio_contact.lib.submissions import SubmissionStore
from portfolio_contact.routers.contact import router as contact_router
from portfolio_contact.routers.health import router as health_router

log = logging.getLogger("uvicorn.error")


async def check_store(store: SubmissionStore) -> bool:
    """Log whether contact_submissions is reachable. Never fails startup."""
    try:
        exists = await store.table_exists()
    except psycopg.Error as exc:
        log.error(f"[main] database connection failed: {exc}")
        return False
    if exists:
        log.info("[main] database connection ok, contact_submissions is reachable")
    else:
        log.warning("[main] connected, but contact_submissions does not exist yet; run scripts.setup_db")
    return exists


@asynccontextmanager
async def lifespan(app: FastAPI):
    pool = await open_pool()
    app.state.db_pool = pool
    if settings.auto_create_schema:
        await ensure_contact_schema(pool)
    await check_store(SubmissionStore(pool))
    if not settings.email_configured:
        log.warning("[main] EMAIL_HOST/EMAIL_FROM/EMAIL_TO not set; notifications will be skipped")
    try:
        yield
    finally:
        app.state.db_pool = None
        await close_pool()


app = FastAPI(title=settings.api_title, lifespan=lifespan)

app.add_middleware(
    CORSMiddleware,
    allow_origins=settings.cors_origin_list(),
    allow_credentials=True,
    allow_methods=["*"],
    allow_headers=["*"],
)

# Routers
app.include_router(contact_router)
app.include_router(health_router)

