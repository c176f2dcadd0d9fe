"""Tests for contact form validation and delivery."""

import base64
from unittest.mock import AsyncMock, MagicMock, patch

import pytest

from txintel.config import Settings
from txintel.contact import (
    RESEND_EMAILS_URL,
    ContactError,
    ContactNotifier,
    attachment_size,
    render_email,
    validate_submission,
)
from txintel.models.schemas import ContactAttachment, ContactSubmission

MAX_BYTES = 1024


def _submission(**overrides):
    fields = {"name": "Jordan Reyes", "email": "jordan@example.com", "message": "Hello"}
    fields.update(overrides)
    return ContactSubmission(**fields)


class TestValidateSubmission:
    """Tests for validate_submission."""

    def test_valid(self):
        assert validate_submission(_submission(), MAX_BYTES) is None

    @pytest.mark.parametrize("field", ["name", "email", "message"])
    def test_required_fields(self, field):
        error = validate_submission(_submission(**{field: "   "}), MAX_BYTES)
        assert error == "Name, email, and message are required"

    @pytest.mark.parametrize("email", ["jordan", "jordan@example", "jo rdan@example.com"])
    def test_invalid_email(self, email):
        assert validate_submission(_submission(email=email), MAX_BYTES) == "Invalid email address"

    def test_attachment_within_limit(self):
        attachment = ContactAttachment(
            filename="site.pdf", content=base64.b64encode(b"x" * MAX_BYTES).decode()
        )
        assert validate_submission(_submission(attachment=attachment), MAX_BYTES) is None

    def test_attachment_over_limit(self):
        attachment = ContactAttachment(
            filename="site.pdf", content=base64.b64encode(b"x" * (MAX_BYTES + 1)).decode()
        )
        assert "limit" in validate_submission(_submission(attachment=attachment), MAX_BYTES)

    def test_attachment_not_base64(self):
        attachment = ContactAttachment(filename="site.pdf", content="not base64!!")
        error = validate_submission(_submission(attachment=attachment), MAX_BYTES)
        assert error == "Attachment could not be decoded"
        assert attachment_size("not base64!!") is None


def test_render_email_escapes_input():
    body = render_email(_submission(message="<script>alert(1)</script>"))
    assert "<script>" not in body
    assert "&lt;script&gt;" in body
    assert "Not specified" in body


class TestContactNotifier:
    """Tests for ContactNotifier."""

    @pytest.mark.asyncio
    async def test_requires_api_key(self):
        notifier = ContactNotifier(settings=Settings(resend_api_key=None))
        with pytest.raises(ContactError):
            await notifier.send(_submission())

    @pytest.mark.asyncio
    async def test_posts_to_email_api(self):
        settings = Settings(resend_api_key="re_test", contact_recipient="team@example.com")
        notifier = ContactNotifier(settings=settings)

        response = MagicMock(status_code=200)
        client = AsyncMock()
        client.post = AsyncMock(return_value=response)
        client.__aenter__.return_value = client

        with patch("txintel.contact.httpx.AsyncClient", return_value=client):
            await notifier.send(_submission(project_type="Permitting"))

        args, kwargs = client.post.call_args
        assert args[0] == RESEND_EMAILS_URL
        assert kwargs["json"]["to"] == ["team@example.com"]
        assert kwargs["json"]["reply_to"] == "jordan@example.com"
        assert kwargs["json"]["subject"] == "New Contact Form: Permitting"
        assert kwargs["headers"]["Authorization"] == "Bearer re_test"

    @pytest.mark.asyncio
    async def test_rejected_by_email_api(self):
        notifier = ContactNotifier(settings=Settings(resend_api_key="re_test"))

        client = AsyncMock()
        client.post = AsyncMock(return_value=MagicMock(status_code=422))
        client.__aenter__.return_value = client

        with patch("txintel.contact.httpx.AsyncClient", return_value=client):
            with pytest.raises(ContactError):
                await notifier.send(_submission())
