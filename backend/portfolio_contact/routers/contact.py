import json

from fastapi import APIRouter, Depends, Request
from fastapi.responses import JSONResponse

from portfolio_contact.core.models import ContactResponse
from portfolio_contact.core.settings import settings
from portfolio_contact.dependencies import get_notifier, get_store
from portfolio_contact.lib.contact_flow import process_submission, report_stats
from portfolio_contact.lib.notify import EmailNotifier
from portfolio_contact.lib.submissions import SubmissionStore

router = APIRouter(prefix="/api/contact", tags=["contact"])


def _to_json(resp: ContactResponse) -> JSONResponse:
    return JSONResponse(status_code=resp.status_code, content=resp.body)


async def _read_body(request: Request):
    # malformed or non-object bodies are validated as an empty form
    try:
        body = await request.json()
    except (json.JSONDecodeError, UnicodeDecodeError):
        return {}
    return body if isinstance(body, dict) else {}


@router.post("")
async def submit_contact(
    request: Request,
    store: SubmissionStore = Depends(get_store),
    notifier: EmailNotifier = Depends(get_notifier),
):
    body = await _read_body(request)
    resp = await process_submission(body, store, notifier, expose_errors=settings.is_development)
    return _to_json(resp)


@router.get("/stats")
async def contact_stats(store: SubmissionStore = Depends(get_store)):
    # no auth: put an authorization check in front of this in production
    return _to_json(await report_stats(store))
