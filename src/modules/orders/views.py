"""Order API views.

Exposes the ``OrderService`` via HTTP using a DRF ViewSet.
Domain exceptions are caught and translated into envelope responses
with the matching status code; the view never swallows generic
exceptions.

Pending/completed listings, claim-code look-up and completion are open
to anonymous callers (pickup counter and back-office screens); the rest
requires a bearer token.
"""

from __future__ import annotations

from pydantic import ValidationError as DTOValidationError
from rest_framework import status
from rest_framework.decorators import action
from rest_framework.permissions import AllowAny
from rest_framework.request import Request
from rest_framework.response import Response
from rest_framework.throttling import BaseThrottle
from rest_framework.viewsets import GenericViewSet

from modules.accounts.repositories.django_repository import UserDjangoRepository
from modules.carts.repositories.django_repository import CartDjangoRepository
from modules.catalog.repositories.django_repository import BookDjangoRepository
from modules.core.responses import envelope
from modules.notifications.mail import DjangoMailSender
from modules.notifications.sinks import RedisNotificationSink
from modules.orders.dtos import CreateOrderDTO, CreateOrderItemDTO
from modules.orders.exceptions import (
    InvalidOrderRequest,
    InvalidOrderStatus,
    OrderNotFound,
    UserNotAuthenticated,
    UserProfileIncomplete,
)
from modules.orders.repositories.django_repository import OrderDjangoRepository
from modules.orders.serializers import (
    CompleteOrderSerializer,
    CreateOrderSerializer,
    NotificationSerializer,
    OrderSerializer,
)
from modules.orders.services import OrderService

PUBLIC_ACTIONS = {
    "list_pending_orders",
    "list_completed_orders",
    "get_order_by_code",
    "complete_order_by_claim_code",
}


def _caller_id(request: Request) -> str | None:
    if request.user and request.user.is_authenticated:
        return str(request.user.pk)
    return None


class OrderViewSet(GenericViewSet):
    """ViewSet for Order operations.

    Uses ``OrderService`` with injected repositories (DIP).
    Does **not** extend ``ModelViewSet``; all ORM access goes through
    the service/repository layer.
    """

    serializer_class = OrderSerializer

    def __init__(self, **kwargs) -> None:
        super().__init__(**kwargs)
        self._service = OrderService(
            order_repository=OrderDjangoRepository(),
            book_repository=BookDjangoRepository(),
            cart_repository=CartDjangoRepository(),
            user_repository=UserDjangoRepository(),
            mail_sender=DjangoMailSender(),
            notification_sink=RedisNotificationSink(),
        )

    def get_permissions(self):
        if self.action in PUBLIC_ACTIONS:
            return [AllowAny()]
        return super().get_permissions()

    def get_throttles(self) -> list[BaseThrottle]:
        """Throttle scopes per action."""
        throttle_scope: str | None
        if self.action == "create_order":
            throttle_scope = "order_creation"
        elif self.action == "complete_order_by_claim_code":
            throttle_scope = "order_completion"
        elif self.action in {
            "list_pending_orders",
            "list_completed_orders",
            "get_order_by_id",
            "get_order_by_code",
        }:
            throttle_scope = "order_listing"
        else:
            throttle_scope = None
        self.throttle_scope = throttle_scope
        return super().get_throttles()

    # ------------------------------------------------------------------
    # Create
    # ------------------------------------------------------------------

    @action(detail=False, methods=["post"], url_path="CreateOrder")
    def create_order(self, request: Request) -> Response:
        """POST /api/Orders/CreateOrder"""
        serializer = CreateOrderSerializer(data=request.data)
        serializer.is_valid(raise_exception=True)

        try:
            dto = CreateOrderDTO(
                user_id=_caller_id(request),
                items=[
                    CreateOrderItemDTO(
                        book_id=item["bookId"],
                        quantity=item["quantity"],
                        unit_price=item["unitPrice"],
                    )
                    for item in serializer.validated_data["items"]
                ],
            )
        except DTOValidationError:
            return envelope("Invalid request.", status_code=status.HTTP_400_BAD_REQUEST)

        try:
            placement = self._service.create_order(dto)
        except UserNotAuthenticated as exc:
            return envelope(str(exc), status_code=status.HTTP_401_UNAUTHORIZED)
        except InvalidOrderRequest as exc:
            return envelope(str(exc), status_code=status.HTTP_400_BAD_REQUEST)

        return envelope(
            f"Order placed successfully. {placement.discount_summary}",
            {
                "orderId": placement.order_id,
                "claimCode": placement.claim_code,
                "subtotal": str(placement.subtotal),
                "discount": str(placement.discount),
                "totalAmount": str(placement.total_amount),
            },
        )

    # ------------------------------------------------------------------
    # Listing / look-up
    # ------------------------------------------------------------------

    @action(detail=False, methods=["get"], url_path="ListPendingOrders")
    def list_pending_orders(self, request: Request) -> Response:
        """GET /api/Orders/ListPendingOrders"""
        orders = self._service.list_pending()
        return envelope("Pending orders.", OrderSerializer(orders, many=True).data)

    @action(detail=False, methods=["get"], url_path="ListCompletedOrders")
    def list_completed_orders(self, request: Request) -> Response:
        """GET /api/Orders/ListCompletedOrders"""
        orders = self._service.list_completed()
        return envelope("Completed orders.", OrderSerializer(orders, many=True).data)

    @action(detail=False, methods=["get"], url_path="GetOrderById")
    def get_order_by_id(self, request: Request) -> Response:
        """GET /api/Orders/GetOrderById

        Lists every order owned by the caller.
        """
        try:
            orders = self._service.list_for_user(_caller_id(request))
        except UserNotAuthenticated as exc:
            return envelope(str(exc), status_code=status.HTTP_401_UNAUTHORIZED)
        return envelope("Your orders.", OrderSerializer(orders, many=True).data)

    @action(
        detail=False,
        methods=["get"],
        url_path=r"GetOrderByCode/(?P<claim_code>[^/]+)",
    )
    def get_order_by_code(self, request: Request, claim_code: str) -> Response:
        """GET /api/Orders/GetOrderByCode/{code}"""
        try:
            order = self._service.get_by_claim_code(claim_code)
        except OrderNotFound as exc:
            return envelope(str(exc), status_code=status.HTTP_404_NOT_FOUND)
        return envelope("Order found.", OrderSerializer(order).data)

    # ------------------------------------------------------------------
    # Status transitions
    # ------------------------------------------------------------------

    @action(
        detail=False,
        methods=["put"],
        url_path=r"CancelOrder/(?P<order_id>\d+)",
    )
    def cancel_order(self, request: Request, order_id: str) -> Response:
        """PUT /api/Orders/CancelOrder/{id}"""
        try:
            order = self._service.cancel_order(_caller_id(request), int(order_id))
        except UserNotAuthenticated as exc:
            return envelope(str(exc), status_code=status.HTTP_401_UNAUTHORIZED)
        except OrderNotFound as exc:
            return envelope(str(exc), status_code=status.HTTP_404_NOT_FOUND)
        except InvalidOrderStatus as exc:
            return envelope(str(exc), status_code=status.HTTP_409_CONFLICT)
        return envelope("Order cancelled.", order.id)

    @action(detail=False, methods=["post"], url_path="CompleteOrderByClaimCode")
    def complete_order_by_claim_code(self, request: Request) -> Response:
        """POST /api/Orders/CompleteOrderByClaimCode"""
        serializer = CompleteOrderSerializer(data=request.data)
        serializer.is_valid(raise_exception=True)

        try:
            order = self._service.complete_by_claim_code(
                serializer.validated_data["claimCode"]
            )
        except OrderNotFound as exc:
            return envelope(str(exc), status_code=status.HTTP_404_NOT_FOUND)
        except InvalidOrderStatus as exc:
            return envelope(str(exc), status_code=status.HTTP_409_CONFLICT)
        return envelope("Order completed.", str(order.user_id))

    # ------------------------------------------------------------------
    # Notification feed
    # ------------------------------------------------------------------

    @action(detail=False, methods=["get"], url_path="GetOrderNotification")
    def get_order_notification(self, request: Request) -> Response:
        """GET /api/Orders/GetOrderNotification"""
        try:
            notifications = self._service.notification_feed(_caller_id(request))
        except UserNotAuthenticated as exc:
            return envelope(str(exc), status_code=status.HTTP_401_UNAUTHORIZED)
        except UserProfileIncomplete as exc:
            return envelope(str(exc), status_code=status.HTTP_404_NOT_FOUND)
        return envelope(
            "Notifications.",
            NotificationSerializer(notifications, many=True).data,
        )
