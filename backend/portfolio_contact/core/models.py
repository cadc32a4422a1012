from dataclasses import dataclass
from datetime import datetime
from typing import Any, Dict, Optional
from uuid import UUID


@dataclass(frozen=True)
class ContactPayload:
    """Validated, trimmed contact form fields."""
    name: str
    email: str
    message: str


@dataclass(frozen=True)
class Submission:
    """One persisted row of contact_submissions."""
    id: UUID | str
    name: str
    email: str
    message: str
    created_at: datetime

    def public_dict(self) -> Dict[str, Any]:
        return {
            "id": str(self.id),
            "name": self.name,
            "email": self.email,
            "created_at": self.created_at.isoformat(),
        }


@dataclass(frozen=True)
class NotificationOutcome:
    email_sent: bool
    email_error: Optional[str] = None

    def as_dict(self) -> Dict[str, Any]:
        out: Dict[str, Any] = {"email_sent": self.email_sent}
        if self.email_error:
            out["email_error"] = self.email_error
        return out


@dataclass(frozen=True)
class Stats:
    total_submissions: int
    timestamp: datetime

    def as_dict(self) -> Dict[str, Any]:
        return {"total_submissions": self.total_submissions, "timestamp": self.timestamp.isoformat()}


@dataclass(frozen=True)
class ContactResponse:
    """Status code and JSON body produced by the contact workflow."""
    status_code: int
    body: Dict[str, Any]
