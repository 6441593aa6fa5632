"""Download-request validation and acknowledgment.

Requests are validated, logged for audit and acknowledged as pending
review. They are not persisted and no email is sent: the notifier below is
the extension point where a mail service would be plugged in.
"""
import logging
import random
import re
import string
import time
from dataclasses import dataclass, asdict
from datetime import datetime, timezone
from typing import Any, Dict, List, Mapping, Optional

from .audit import AuditLogger
from .exceptions import ValidationFailure

logger = logging.getLogger(__name__)
audit_log = logging.getLogger("portfolio.audit")

EMAIL_RE = re.compile(r"^[^\s@]+@[^\s@]+\.[^\s@]+\Z")
REQUIRED_FIELDS = ("name", "email", "purpose", "publicationId", "agreeToTerms")

MISSING_FIELDS_ERROR = "Missing required fields"
INVALID_EMAIL_ERROR = "Invalid email address"
SUCCESS_MESSAGE = "Request received. You will receive a confirmation email shortly."
NEXT_STEPS = "Your request is under review. You will receive download instructions via email if approved."

_BASE36 = string.digits + string.ascii_lowercase


@dataclass
class DownloadRequest:
    name: str
    email: str
    purpose: str
    publication_id: str
    agree_to_terms: bool
    institution: Optional[str] = None


@dataclass
class NotificationMessage:
    to: str
    subject: str
    text: str


class Notifier:
    """Delivery hook for request notifications.

    The default implementation only logs; nothing leaves the process.
    """

    def send(self, message: NotificationMessage) -> None:
        logger.debug(f"Notification not sent (no mail service): to={message.to!r} subject={message.subject!r}")


def is_valid_email(email: str) -> bool:
    return bool(EMAIL_RE.match(email))


def validate_download_request(payload: Mapping[str, Any]) -> DownloadRequest:
    """Check required fields and email shape.

    Raises:
        ValidationFailure: with a generic cause, never naming the field.
    """
    if not isinstance(payload, Mapping):
        raise ValidationFailure(MISSING_FIELDS_ERROR)
    if any(not payload.get(key) for key in REQUIRED_FIELDS):
        raise ValidationFailure(MISSING_FIELDS_ERROR)

    email = str(payload["email"])
    if not is_valid_email(email):
        raise ValidationFailure(INVALID_EMAIL_ERROR)

    institution = payload.get("institution")
    return DownloadRequest(
        name=str(payload["name"]),
        email=email,
        purpose=str(payload["purpose"]),
        publication_id=str(payload["publicationId"]),
        agree_to_terms=True,
        institution=str(institution) if institution else None,
    )


def generate_request_id() -> str:
    """``REQ-<epoch ms>-<9 random base36 chars>``."""
    suffix = "".join(random.SystemRandom().choice(_BASE36) for _ in range(9))
    return f"REQ-{int(time.time() * 1000)}-{suffix}"


def build_notifications(req: DownloadRequest, request_id: str, timestamp: str,
                        admin_email: str, dashboard_url: str) -> List[NotificationMessage]:
    """Admin alert and requester confirmation for one request."""
    admin = NotificationMessage(
        to=admin_email,
        subject=f"New Download Request: {req.publication_id}",
        text=(
            "New download request received:\n\n"
            f"Request ID: {request_id}\n"
            f"Publication: {req.publication_id}\n"
            f"Name: {req.name}\n"
            f"Email: {req.email}\n"
            f"Institution: {req.institution or ''}\n"
            f"Purpose: {req.purpose}\n"
            f"Timestamp: {timestamp}\n\n"
            f"Review and approve at: {dashboard_url}\n"
        ),
    )
    confirmation = NotificationMessage(
        to=req.email,
        subject="Download Request Received",
        text=(
            f"Dear {req.name},\n\n"
            f'Your request to download "{req.publication_id}" has been received.\n\n'
            f"Request ID: {request_id}\n"
            "Status: Pending Review\n\n"
            "Our team will review your request and contact you within 3-5 business days.\n"
            "Approved requests will receive a time-limited download link via email.\n\n"
            "Please note: All downloads are tracked and subject to our terms of use.\n"
        ),
    )
    return [admin, confirmation]


class DownloadRequestService:
    """Validates a submitted request and produces the acknowledgment."""

    def __init__(self, audit: AuditLogger, notifier: Optional[Notifier] = None,
                 admin_email: str = "", dashboard_url: str = ""):
        self.audit = audit
        self.notifier = notifier or Notifier()
        self.admin_email = admin_email
        self.dashboard_url = dashboard_url

    def process(self, payload: Mapping[str, Any], client_ip: Optional[str] = None) -> Dict[str, Any]:
        """Validate, log and acknowledge a request.

        The publication id is not checked against the catalog.

        Raises:
            ValidationFailure: missing fields or malformed email.
        """
        req = validate_download_request(payload)
        request_id = generate_request_id()
        timestamp = datetime.now(timezone.utc).isoformat()

        record = {"requestId": request_id, **asdict(req), "timestamp": timestamp, "ip": client_ip}
        audit_log.info(f"Download request: {record}")
        self.audit.log_event("download_requested", record)

        for message in build_notifications(req, request_id, timestamp,
                                           self.admin_email, self.dashboard_url):
            self.notifier.send(message)

        return {
            "success": True,
            "requestId": request_id,
            "message": SUCCESS_MESSAGE,
            "nextSteps": NEXT_STEPS,
        }
