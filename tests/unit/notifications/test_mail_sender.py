"""Unit tests for ``DjangoMailSender`` (locmem email backend)."""

from __future__ import annotations

import smtplib
from datetime import datetime, timezone
from decimal import Decimal
from unittest.mock import patch

import pytest
from django.core import mail

from modules.notifications.dtos import OrderConfirmationMail
from modules.notifications.exceptions import MailDeliveryError
from modules.notifications.mail import (
    ORDER_CONFIRMATION_SUBJECT,
    OTP_SUBJECT,
    DjangoMailSender,
)

pytestmark = pytest.mark.unit


@pytest.fixture()
def confirmation():
    return OrderConfirmationMail(
        to_email="reader@example.com",
        full_name="Ana Reader",
        claim_code="AB12CD34",
        order_date=datetime(2026, 3, 1, 12, 0, tzinfo=timezone.utc),
        total_books=6,
        subtotal=Decimal("60.00"),
        discount=Decimal("3.00"),
        final_amount=Decimal("57.00"),
    )


class TestDjangoMailSender:
    def test_order_confirmation_is_sent(self, confirmation):
        DjangoMailSender(from_email="shop@example.com").send_order_confirmation(
            confirmation
        )

        assert len(mail.outbox) == 1
        message = mail.outbox[0]
        assert message.subject == ORDER_CONFIRMATION_SUBJECT
        assert message.to == ["reader@example.com"]
        assert message.from_email == "shop@example.com"
        assert "AB12CD34" in message.body
        assert "57.00" in message.body
        html, mimetype = message.alternatives[0]
        assert mimetype == "text/html"
        assert "Ana Reader" in html

    def test_otp_is_sent(self):
        DjangoMailSender().send_otp("new@example.com", "New Reader", "493021")

        assert len(mail.outbox) == 1
        assert mail.outbox[0].subject == OTP_SUBJECT
        assert "493021" in mail.outbox[0].body

    def test_smtp_failure_is_wrapped(self, confirmation):
        with patch(
            "django.core.mail.EmailMultiAlternatives.send",
            side_effect=smtplib.SMTPServerDisconnected("gone"),
        ):
            with pytest.raises(MailDeliveryError, match="Error sending email"):
                DjangoMailSender().send_order_confirmation(confirmation)
