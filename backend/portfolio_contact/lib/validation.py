import re
from typing import Any, List, Mapping

from portfolio_contact.core.errors import ValidationError
from portfolio_contact.core.models import ContactPayload
from portfolio_contact.core.result import Err, Ok, Result

NAME_MIN_LENGTH = 2
MESSAGE_MIN_LENGTH = 10

NAME_ERROR = "Name must be at least 2 characters long"
EMAIL_ERROR = "Please provide a valid email address"
MESSAGE_ERROR = "Message must be at least 10 characters long"

# local@domain.tld shape only, not full RFC 5322
_EMAIL_RE = re.compile(r"[^\s@]+@[^\s@]+\.[^\s@]+")


def _is_text(value: Any) -> bool:
    # lone surrogates are valid JSON but cannot be stored or mailed
    if not isinstance(value, str):
        return False
    try:
        value.encode("utf-8")
    except UnicodeEncodeError:
        return False
    return True


def _trimmed(value: Any) -> str | None:
    if not _is_text(value):
        return None
    return value.strip()


def is_valid_email(value: Any) -> bool:
    return _is_text(value) and _EMAIL_RE.fullmatch(value) is not None


def validate_submission(raw: Any) -> Result:
    """
    Check name, email and message independently.

    Returns Ok(ContactPayload) with trimmed fields, or Err(ValidationError)
    whose messages follow the order name -> email -> message.
    """
    data: Mapping[str, Any] = raw if isinstance(raw, Mapping) else {}
    errors: List[str] = []

    name = _trimmed(data.get("name"))
    if name is None or len(name) < NAME_MIN_LENGTH:
        errors.append(NAME_ERROR)

    raw_email = data.get("email")
    if not is_valid_email(raw_email):
        errors.append(EMAIL_ERROR)

    message = _trimmed(data.get("message"))
    if message is None or len(message) < MESSAGE_MIN_LENGTH:
        errors.append(MESSAGE_ERROR)

    if errors:
        return Err(ValidationError(errors))

    return Ok(ContactPayload(name=name, email=raw_email.strip(), message=message))
