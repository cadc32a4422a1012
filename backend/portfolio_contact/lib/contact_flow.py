"""
Contact submission workflow.

received -> validated -> persisted -> notified (best effort) -> responded

Each step hands back an Ok/Err result. Only validation and persistence can
end the request early; the notification outcome is attached to a 201 as
metadata and never changes the status.
"""
import logging
from datetime import datetime, timezone
from typing import Any, Optional, Protocol

from starlette.concurrency import run_in_threadpool

from portfolio_contact.core.models import ContactPayload, ContactResponse, Stats
from portfolio_contact.core.result import Err, Result
from portfolio_contact.lib.notify import notification_outcome
from portfolio_contact.lib.validation import validate_submission

log = logging.getLogger("uvicorn.error")

SUCCESS_MESSAGE = "Thank you for your message! I'll get back to you soon."
VALIDATION_FAILED = "Validation failed"
SUBMISSION_FAILED = "Failed to process contact form submission"
GENERIC_RETRY = "Please try again later"
STATS_FAILED = "Failed to fetch statistics"


class Store(Protocol):
    async def insert(self, payload: ContactPayload, created_at: Optional[datetime] = None) -> Result: ...

    async def count(self) -> Result: ...


class Notifier(Protocol):
    def send(self, payload: ContactPayload, submitted_at: Optional[datetime] = None) -> Result: ...


async def process_submission(
    raw: Any,
    store: Store,
    notifier: Notifier,
    expose_errors: bool = False,
) -> ContactResponse:
    validated = validate_submission(raw)
    if isinstance(validated, Err):
        return ContactResponse(
            status_code=400,
            body={"error": VALIDATION_FAILED, "details": validated.error.messages},
        )
    payload: ContactPayload = validated.value

    stored = await store.insert(payload)
    if isinstance(stored, Err):
        log.error(f"[contact] submission failed: {stored.error}")
        return ContactResponse(
            status_code=500,
            body={
                "error": SUBMISSION_FAILED,
                "message": stored.error.message if expose_errors else GENERIC_RETRY,
            },
        )
    submission = stored.value

    # smtplib blocks; keep it off the event loop but still strictly after the insert
    sent = await run_in_threadpool(notifier.send, payload, submission.created_at)
    outcome = notification_outcome(sent)

    return ContactResponse(
        status_code=201,
        body={
            "success": True,
            "message": SUCCESS_MESSAGE,
            "data": submission.public_dict(),
            "notification": outcome.as_dict(),
        },
    )


async def report_stats(store: Store, now: Optional[datetime] = None) -> ContactResponse:
    counted = await store.count()
    if isinstance(counted, Err):
        log.error(f"[contact] stats failed: {counted.error}")
        return ContactResponse(status_code=500, body={"error": STATS_FAILED})
    stats = Stats(total_submissions=counted.value or 0, timestamp=now or datetime.now(timezone.utc))
    return ContactResponse(status_code=200, body=stats.as_dict())
