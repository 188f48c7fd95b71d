"""Transactional email.

``DjangoMailSender`` renders HTML templates with the Django template
engine and delivers them through ``django.core.mail`` (SMTP settings come
from the environment, see ``config.settings``).
"""

from __future__ import annotations

import smtplib
from abc import ABC, abstractmethod

import structlog
from django.conf import settings
from django.core.mail import EmailMultiAlternatives
from django.template.loader import render_to_string
from django.utils.html import strip_tags

from modules.notifications.dtos import OrderConfirmationMail
from modules.notifications.exceptions import MailDeliveryError

logger = structlog.get_logger(__name__)

ORDER_CONFIRMATION_SUBJECT = "Your Order Confirmation"
OTP_SUBJECT = "Get Your Registration OTP"


class IMailSender(ABC):
    """Mail sender contract consumed by the workflows."""

    @abstractmethod
    def send_order_confirmation(self, mail: OrderConfirmationMail) -> None:
        """Send the order confirmation; raises ``MailDeliveryError``."""

    @abstractmethod
    def send_otp(self, to_email: str, full_name: str, otp: str) -> None:
        """Send a registration OTP; raises ``MailDeliveryError``.

        Registration and OTP verification live outside this service; this
        is the hook their flow calls, nothing in the order workflow does.
        """


class DjangoMailSender(IMailSender):
    def __init__(self, from_email: str | None = None) -> None:
        self._from_email = from_email or settings.DEFAULT_FROM_EMAIL

    def send_order_confirmation(self, mail: OrderConfirmationMail) -> None:
        html = render_to_string(
            "notifications/order_confirmation.html",
            {
                "full_name": mail.full_name,
                "claim_code": mail.claim_code,
                "order_date": mail.order_date,
                "total_books": mail.total_books,
                "subtotal": mail.subtotal,
                "discount": mail.discount,
                "final_amount": mail.final_amount,
            },
        )
        self._send(mail.to_email, ORDER_CONFIRMATION_SUBJECT, html)
        logger.info("mail.order_confirmation_sent", claim_code=mail.claim_code)

    def send_otp(self, to_email: str, full_name: str, otp: str) -> None:
        html = render_to_string(
            "notifications/otp.html", {"full_name": full_name, "otp": otp}
        )
        self._send(to_email, OTP_SUBJECT, html)
        logger.info("mail.otp_sent")

    def _send(self, to_email: str, subject: str, html: str) -> None:
        message = EmailMultiAlternatives(
            subject=subject,
            body=strip_tags(html),
            from_email=self._from_email,
            to=[to_email],
        )
        message.attach_alternative(html, "text/html")
        try:
            message.send(fail_silently=False)
        except (smtplib.SMTPException, OSError) as exc:
            logger.warning("mail.delivery_failed", subject=subject, error=str(exc))
            raise MailDeliveryError("Error sending email") from exc
