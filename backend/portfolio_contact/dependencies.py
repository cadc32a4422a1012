# backend/portfolio_contact/dependencies.py
from fastapi import HTTPException, Request

from portfolio_contact.core.settings import settings
from portfolio_contact.lib.notify import EmailNotifier
from portfolio_contact.lib.submissions import SubmissionStore


def get_store(request: Request) -> SubmissionStore:
    pool = getattr(request.app.state, "db_pool", None)
    if pool is None:
        raise HTTPException(status_code=503, detail="Database pool is not initialized")
    return SubmissionStore(pool)


def get_notifier() -> EmailNotifier:
    return EmailNotifier(settings)
