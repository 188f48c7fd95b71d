from __future__ import annotations

from datetime import timedelta
from decimal import Decimal

import pytest
from django.contrib.auth import get_user_model
from django.utils import timezone
from rest_framework.test import APIClient

from modules.accounts.repositories.django_repository import UserDjangoRepository
from modules.carts.repositories.django_repository import CartDjangoRepository
from modules.catalog.models import Book
from modules.catalog.repositories.django_repository import BookDjangoRepository
from modules.notifications.exceptions import (
    MailDeliveryError,
    NotificationDeliveryError,
)
from modules.notifications.mail import IMailSender
from modules.notifications.sinks import INotificationSink
from modules.orders.repositories.django_repository import OrderDjangoRepository
from modules.orders.services import OrderService

User = get_user_model()


@pytest.fixture(autouse=True)
def _use_db(db):
    """Automatically use the test database for all tests."""


# ---------------------------------------------------------------------------
# Collaborator fakes
# ---------------------------------------------------------------------------


class RecordingMailSender(IMailSender):
    def __init__(self, fail: bool = False) -> None:
        self.fail = fail
        self.confirmations = []
        self.otps = []

    def send_order_confirmation(self, mail) -> None:
        self.confirmations.append(mail)
        if self.fail:
            raise MailDeliveryError("Error sending email")

    def send_otp(self, to_email, full_name, otp) -> None:
        self.otps.append((to_email, full_name, otp))
        if self.fail:
            raise MailDeliveryError("Error sending email")


class RecordingSink(INotificationSink):
    def __init__(self, fail: bool = False) -> None:
        self.fail = fail
        self.broadcasts = []

    def broadcast(self, notification) -> None:
        self.broadcasts.append(notification)
        if self.fail:
            raise NotificationDeliveryError("connection refused")


@pytest.fixture()
def mail_sender():
    return RecordingMailSender()


@pytest.fixture()
def sink():
    return RecordingSink()


@pytest.fixture()
def order_service(mail_sender, sink):
    return OrderService(
        order_repository=OrderDjangoRepository(),
        book_repository=BookDjangoRepository(),
        cart_repository=CartDjangoRepository(),
        user_repository=UserDjangoRepository(),
        mail_sender=mail_sender,
        notification_sink=sink,
        reprice_from_catalog=False,
    )


# ---------------------------------------------------------------------------
# Data
# ---------------------------------------------------------------------------


@pytest.fixture()
def user():
    return User.objects.create_user(
        username="reader",
        email="reader@example.com",
        password="testpass123",
        full_name="Ana Reader",
    )


@pytest.fixture()
def other_user():
    user = User.objects.create_user(
        username="collector",
        email="collector@example.com",
        password="testpass123",
        full_name="Bruno Collector",
    )
    User.objects.filter(id=user.id).update(
        created_at=timezone.now() - timedelta(days=30)
    )
    user.refresh_from_db()
    return user


@pytest.fixture()
def book():
    return Book.objects.create(
        title="Fluent Python",
        isbn="9781492056355",
        author="Luciano Ramalho",
        genre="Programming",
        price=Decimal("10.00"),
        stock=20,
    )


@pytest.fixture()
def second_book():
    return Book.objects.create(
        title="Dune",
        isbn="9780441172719",
        author="Frank Herbert",
        genre="Science Fiction",
        price=Decimal("12.50"),
        stock=0,
    )


# ---------------------------------------------------------------------------
# HTTP clients
# ---------------------------------------------------------------------------


@pytest.fixture()
def api_client():
    """DRF APIClient for testing API endpoints."""
    return APIClient()


@pytest.fixture()
def auth_client(user):
    """APIClient force-authenticated as ``user``."""
    client = APIClient()
    client.force_authenticate(user=user)
    return client
