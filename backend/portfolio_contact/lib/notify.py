# portfolio_contact/lib/notify.py
import html
import logging
import smtplib
from datetime import datetime, timezone
from email.mime.multipart import MIMEMultipart
from email.mime.text import MIMEText
from email.utils import formataddr
from typing import Optional

from portfolio_contact.core.errors import NotificationError
from portfolio_contact.core.models import ContactPayload, NotificationOutcome
from portfolio_contact.core.result import Err, Ok, Result
from portfolio_contact.core.settings import Settings

log = logging.getLogger("uvicorn.error")

SENDER_DISPLAY_NAME = "Portfolio Contact"

_EMAIL_TEMPLATE = """\
<!DOCTYPE html>
<html>
  <head>
    <style>
      body {{ font-family: Arial, sans-serif; line-height: 1.6; color: #333; }}
      .container {{ max-width: 600px; margin: 0 auto; padding: 20px; }}
      .header {{ background: #2563eb; color: white; padding: 20px; text-align: center; border-radius: 8px 8px 0 0; }}
      .content {{ background: #f8fafc; padding: 30px; border-radius: 0 0 8px 8px; }}
      .field {{ margin-bottom: 20px; }}
      .label {{ font-weight: bold; color: #2563eb; }}
      .value {{ margin-top: 5px; padding: 10px; background: white; border-radius: 4px; border-left: 4px solid #2563eb; white-space: pre-wrap; }}
    </style>
  </head>
  <body>
    <div class="container">
      <div class="header">
        <h1>New Portfolio Contact Form Submission</h1>
        <p>From: {name}</p>
      </div>
      <div class="content">
        <div class="field">
          <div class="label">Name:</div>
          <div class="value">{name}</div>
        </div>
        <div class="field">
          <div class="label">Email:</div>
          <div class="value">{email}</div>
        </div>
        <div class="field">
          <div class="label">Message:</div>
          <div class="value">{message}</div>
        </div>
        <div class="field">
          <div class="label">Submitted At:</div>
          <div class="value">{submitted_at}</div>
        </div>
      </div>
    </div>
  </body>
</html>
"""


def format_submitted_at(when: datetime) -> str:
    if when.tzinfo is None:
        when = when.replace(tzinfo=timezone.utc)
    return when.strftime("%Y-%m-%d %H:%M:%S %Z")


def render_email_html(payload: ContactPayload, submitted_at: datetime) -> str:
    """Render the operator notification. All user values are HTML-escaped."""
    return _EMAIL_TEMPLATE.format(
        name=html.escape(payload.name),
        email=html.escape(payload.email),
        message=html.escape(payload.message),
        submitted_at=html.escape(format_submitted_at(submitted_at)),
    )


def render_email_subject(payload: ContactPayload) -> str:
    # header injection guard: subjects must be single-line
    name = " ".join(payload.name.split())
    return f"New Contact Form Submission from {name}"


def build_message(payload: ContactPayload, sender: str, recipient: str, submitted_at: datetime) -> MIMEMultipart:
    msg = MIMEMultipart("alternative")
    msg["Subject"] = render_email_subject(payload)
    msg["From"] = formataddr((SENDER_DISPLAY_NAME, sender))
    msg["To"] = recipient
    msg["Reply-To"] = payload.email
    msg.attach(MIMEText(render_email_html(payload, submitted_at), "html", "utf-8"))
    return msg


def notification_outcome(result: Result) -> NotificationOutcome:
    if isinstance(result, Ok):
        return NotificationOutcome(email_sent=True)
    return NotificationOutcome(email_sent=False, email_error=result.error.message)


class EmailNotifier:
    """Delivers contact notifications to the operator through an SMTP relay."""

    def __init__(self, config: Settings):
        self._config = config

    @property
    def implicit_tls(self) -> bool:
        return self._config.email_port == 465

    def _connect(self) -> smtplib.SMTP:
        host, port = self._config.email_host, self._config.email_port
        if self.implicit_tls:
            return smtplib.SMTP_SSL(host, port)
        return smtplib.SMTP(host, port)

    def _upgrade(self, smtp: smtplib.SMTP) -> None:
        smtp.ehlo()
        if smtp.has_extn("starttls"):
            smtp.starttls()
            smtp.ehlo()

    def send(self, payload: ContactPayload, submitted_at: Optional[datetime] = None) -> Result:
        """Blocking send. Failures come back as Err(NotificationError), never raised."""
        if not self._config.email_configured:
            log.warning("[notify] email relay is not configured; skipping notification")
            return Err(NotificationError("Email relay is not configured"))

        submitted_at = submitted_at or datetime.now(timezone.utc)
        try:
            msg = build_message(payload, self._config.email_from, self._config.email_to, submitted_at)
            with self._connect() as smtp:
                if not self.implicit_tls:
                    self._upgrade(smtp)
                if self._config.email_user and self._config.email_pass:
                    smtp.login(self._config.email_user, self._config.email_pass)
                smtp.send_message(msg)
        except (smtplib.SMTPException, OSError, UnicodeError, ValueError) as exc:
            log.warning(f"[notify] email sending failed: {exc}")
            return Err(NotificationError(str(exc) or exc.__class__.__name__))

        log.info(f"[notify] notification sent to {self._config.email_to}")
        return Ok(None)
