"""Contact form validation and hand-off to the transactional email service."""

import base64
import binascii
import html
import logging
import re
from datetime import datetime, timezone
from typing import Optional

import httpx

from txintel.config import Settings, get_settings
from txintel.models.schemas import ContactSubmission

logger = logging.getLogger(__name__)

EMAIL_PATTERN = re.compile(r"^[^\s@]+@[^\s@]+\.[^\s@]+$")
RESEND_EMAILS_URL = "https://api.resend.com/emails"


class ContactError(Exception):
    """Raised when a contact email cannot be delivered."""

    pass


def attachment_size(content: str) -> Optional[int]:
    """Decoded size of a base64 attachment, or None if it is not valid base64."""
    try:
        return len(base64.b64decode(content, validate=True))
    except (binascii.Error, ValueError):
        return None


def validate_submission(submission: ContactSubmission, max_attachment_bytes: int) -> Optional[str]:
    """
    Check a submission.

    Returns:
        An error message for the caller, or None when the submission is valid.
    """
    if not (submission.name or "").strip() or not (submission.email or "").strip() or not (
        submission.message or ""
    ).strip():
        return "Name, email, and message are required"

    if not EMAIL_PATTERN.match(submission.email.strip()):
        return "Invalid email address"

    if submission.attachment is not None:
        size = attachment_size(submission.attachment.content)
        if size is None:
            return "Attachment could not be decoded"
        if size > max_attachment_bytes:
            return f"Attachment exceeds {max_attachment_bytes // (1024 * 1024)} MB limit"

    return None


def render_email(submission: ContactSubmission) -> str:
    """Minimal HTML body for the notification email."""

    def field(value: Optional[str], default: str = "Not provided") -> str:
        return html.escape(value) if value else default

    timestamp = datetime.now(timezone.utc).strftime("%Y-%m-%d %H:%M UTC")
    return (
        "<h2>New Contact Form Submission</h2>"
        f"<p><strong>Name:</strong> {field(submission.name)}</p>"
        f"<p><strong>Email:</strong> {field(submission.email)}</p>"
        f"<p><strong>Phone:</strong> {field(submission.phone)}</p>"
        f"<p><strong>Company:</strong> {field(submission.company)}</p>"
        f"<p><strong>Project Type:</strong> {field(submission.project_type, 'Not specified')}</p>"
        f"<h3>Message:</h3><p style=\"white-space: pre-wrap\">{field(submission.message)}</p>"
        f"<p>Received {timestamp}</p>"
    )


class ContactNotifier:
    """Sends contact submissions through the Resend HTTP API."""

    def __init__(self, settings: Optional[Settings] = None, timeout: float = 15.0):
        self.settings = settings or get_settings()
        self.timeout = timeout

    async def send(self, submission: ContactSubmission) -> None:
        """
        Deliver one submission.

        Raises:
            ContactError: If delivery is not configured or the API rejects it.
        """
        if not self.settings.has_email_delivery:
            raise ContactError("RESEND_API_KEY is not configured")

        payload = {
            "from": self.settings.contact_sender,
            "to": [self.settings.contact_recipient],
            "reply_to": submission.email,
            "subject": f"New Contact Form: {submission.project_type or 'General Inquiry'}",
            "html": render_email(submission),
        }
        if submission.attachment is not None:
            payload["attachments"] = [
                {
                    "filename": submission.attachment.filename,
                    "content": submission.attachment.content,
                }
            ]

        async with httpx.AsyncClient(timeout=httpx.Timeout(self.timeout)) as client:
            response = await client.post(
                RESEND_EMAILS_URL,
                json=payload,
                headers={"Authorization": f"Bearer {self.settings.resend_api_key}"},
            )

        if response.status_code >= 400:
            raise ContactError(f"Email API returned status {response.status_code}")

        logger.info("Contact email sent")
