"""Order service layer (Use Cases).

Orchestrates order placement, look-up, cancellation, completion and the
notification feed.  The order and its items are written in one
transaction together with the outbox events; the confirmation email,
cart cleanup and realtime broadcast run afterwards as best-effort side
effects whose failures are logged and never reach the caller.

Business rules enforced:
- Every order has at least one item and every book id is positive and
  present in the catalog; otherwise the whole order is rejected.
- Discounts follow ``modules.orders.pricing``.
- Status transitions are validated against the state machine in
  ``modules.orders.constants``.  Re-applying the current terminal status
  is a no-op; any other move out of a terminal status is rejected.
- Orders owned by someone else are reported exactly like missing ones.
"""

from __future__ import annotations

from typing import TYPE_CHECKING, List, Optional

import structlog
from django.conf import settings
from django.db import DatabaseError, transaction
from django.utils import timezone

from modules.notifications.dtos import (
    NotificationDTO,
    OrderConfirmationMail,
    stable_notification_id,
)
from modules.notifications.exceptions import (
    MailDeliveryError,
    NotificationDeliveryError,
)
from modules.orders import pricing
from modules.orders.constants import (
    NOTIFICATION_TYPE,
    ORDER_COMPLETED_CONTENT,
    OrderStatus,
)
from modules.orders.dtos import CreateOrderItemDTO, OrderPlacementDTO
from modules.orders.events import OrderCancelled, OrderCompleted, OrderCreated
from modules.orders.exceptions import (
    InvalidOrderRequest,
    InvalidOrderStatus,
    OrderNotFound,
    UserNotAuthenticated,
    UserProfileIncomplete,
)

if TYPE_CHECKING:
    from modules.accounts.repositories.interfaces import IUserRepository
    from modules.carts.repositories.interfaces import ICartRepository
    from modules.catalog.repositories.interfaces import IBookRepository
    from modules.notifications.mail import IMailSender
    from modules.notifications.sinks import INotificationSink
    from modules.orders.dtos import CreateOrderDTO
    from modules.orders.models import Order
    from modules.orders.repositories.interfaces import IOrderRepository

logger = structlog.get_logger(__name__)

NOT_FOUND_OR_FORBIDDEN = "Order not found or access denied."


def completion_notification_id(order: Order) -> str:
    return stable_notification_id(NOTIFICATION_TYPE, order.id, OrderStatus.COMPLETED)


class OrderService:
    """Application service for Order use-cases.

    Receives repositories and side-effect collaborators via constructor
    injection (DIP).
    """

    def __init__(
        self,
        order_repository: IOrderRepository,
        book_repository: IBookRepository,
        cart_repository: ICartRepository,
        user_repository: IUserRepository,
        mail_sender: IMailSender,
        notification_sink: INotificationSink,
        reprice_from_catalog: Optional[bool] = None,
    ) -> None:
        self._order_repo = order_repository
        self._book_repo = book_repository
        self._cart_repo = cart_repository
        self._user_repo = user_repository
        self._mail_sender = mail_sender
        self._sink = notification_sink
        if reprice_from_catalog is None:
            reprice_from_catalog = getattr(settings, "ORDER_REPRICE_FROM_CATALOG", False)
        self._reprice = reprice_from_catalog

    # ------------------------------------------------------------------
    # Commands
    # ------------------------------------------------------------------

    def create_order(self, dto: CreateOrderDTO) -> OrderPlacementDTO:
        """Validate, price and persist a new order, then notify the buyer.

        Steps:
        1. Validate caller and items (nothing is written on failure).
        2. Price items and compute the discount from completed-order history.
        3. Persist order + items + ``OrderCreated`` outbox event atomically.
        4. Send the confirmation email (failure is logged).
        5. Remove the ordered books from the caller's cart (failure is logged).

        Raises:
            UserNotAuthenticated: no caller identity.
            InvalidOrderRequest: empty item list, non-positive or unknown book id.
        """
        if not dto.user_id:
            raise UserNotAuthenticated("User is not authenticated.")

        log = logger.bind(user_id=dto.user_id)
        log.info("order.creation_started", item_count=len(dto.items))

        items = self._validate_items(dto.items)
        prior_completed = self._order_repo.count_completed_for_user(dto.user_id)
        quote = pricing.quote(items, prior_completed)

        with transaction.atomic():
            order = self._order_repo.create(
                {
                    "user_id": dto.user_id,
                    "items": [
                        {
                            "book_id": item.book_id,
                            "quantity": item.quantity,
                            "unit_price": item.unit_price,
                        }
                        for item in items
                    ],
                    "total_amount": quote.total_amount,
                    "discount_applied": quote.discount,
                }
            )
            order.add_domain_event(OrderCreated(aggregate_id=order.id))
            self._order_repo.save(order)

        log = log.bind(order_id=order.id, claim_code=order.claim_code)
        log.info(
            "order.created",
            subtotal=str(quote.subtotal),
            discount=str(quote.discount),
            total_amount=str(quote.total_amount),
        )

        self._send_confirmation(order, quote)
        self._clear_cart(dto.user_id, [item.book_id for item in items])

        return OrderPlacementDTO(
            order_id=order.id,
            claim_code=order.claim_code,
            subtotal=quote.subtotal,
            discount=quote.discount,
            total_amount=quote.total_amount,
            discount_messages=quote.messages,
        )

    def cancel_order(self, user_id: Optional[str], order_id: int) -> Order:
        """Cancel one of the caller's pending orders.

        Cancelling an already cancelled order returns it unchanged.

        Raises:
            UserNotAuthenticated: no caller identity.
            OrderNotFound: order missing or owned by another user.
            InvalidOrderStatus: the order is already completed.
        """
        if not user_id:
            raise UserNotAuthenticated("User is not authenticated.")

        with transaction.atomic():
            order = self._order_repo.get_for_update(order_id)
            if not order or str(order.user_id) != str(user_id):
                logger.info("order.cancel_rejected", order_id=order_id, user_id=user_id)
                raise OrderNotFound(NOT_FOUND_OR_FORBIDDEN)

            log = logger.bind(order_id=order.id, current_status=order.status)
            if order.status == OrderStatus.CANCELLED:
                log.info("order.cancel_noop")
                return order
            if not order.can_transition_to(OrderStatus.CANCELLED):
                log.warning("order.invalid_transition", new_status=OrderStatus.CANCELLED)
                raise InvalidOrderStatus(
                    f"Cannot cancel order in status {order.status}."
                )

            order.status = OrderStatus.CANCELLED
            order.add_domain_event(OrderCancelled(aggregate_id=order.id))
            self._order_repo.save(order)

        log.info("order.cancelled")
        return order

    def complete_by_claim_code(self, claim_code: str) -> Order:
        """Mark the order collected and broadcast the completion.

        Completing an already completed order returns it unchanged, with
        no new timestamp and no second broadcast.

        Raises:
            OrderNotFound: no order carries this claim code.
            InvalidOrderStatus: the order was cancelled.
        """
        with transaction.atomic():
            order = self._order_repo.get_by_claim_code_for_update(claim_code)
            if not order:
                raise OrderNotFound("Order not found.")

            log = logger.bind(order_id=order.id, current_status=order.status)
            if order.status == OrderStatus.COMPLETED:
                log.info("order.complete_noop")
                return order
            if not order.can_transition_to(OrderStatus.COMPLETED):
                log.warning("order.invalid_transition", new_status=OrderStatus.COMPLETED)
                raise InvalidOrderStatus(
                    f"Cannot complete order in status {order.status}."
                )

            order.status = OrderStatus.COMPLETED
            order.completed_at = timezone.now()
            order.add_domain_event(OrderCompleted(aggregate_id=order.id))
            self._order_repo.save(order)

        log.info("order.completed")
        self._broadcast_completion(order)
        return order

    # ------------------------------------------------------------------
    # Queries
    # ------------------------------------------------------------------

    def list_pending(self) -> List[Order]:
        return self._order_repo.list({"status": OrderStatus.PENDING})

    def list_completed(self) -> List[Order]:
        return self._order_repo.list({"status": OrderStatus.COMPLETED})

    def list_for_user(self, user_id: Optional[str]) -> List[Order]:
        if not user_id:
            raise UserNotAuthenticated("User is not authenticated.")
        return self._order_repo.list({"user_id": user_id})

    def get_by_claim_code(self, claim_code: str) -> Order:
        """Raises ``OrderNotFound`` for unknown claim codes."""
        order = self._order_repo.get_by_claim_code(claim_code)
        if not order:
            raise OrderNotFound("Order not found.")
        return order

    def notification_feed(self, user_id: Optional[str]) -> List[NotificationDTO]:
        """Orders other users completed since the caller signed up.

        Raises:
            UserNotAuthenticated: no caller identity.
            UserProfileIncomplete: the caller's sign-up date is unknown.
        """
        if not user_id:
            raise UserNotAuthenticated("User is not authenticated.")

        user = self._user_repo.get_by_id(user_id)
        if not user or user.created_at is None:
            logger.warning("order.feed_profile_incomplete", user_id=user_id)
            raise UserProfileIncomplete("User data incomplete.")

        return [
            NotificationDTO(
                type=NOTIFICATION_TYPE,
                content=ORDER_COMPLETED_CONTENT,
                id=completion_notification_id(order),
                timestamp=order.completed_at,
                title=ORDER_COMPLETED_CONTENT,
                description=(
                    f"Order by {order.user_id} completed at "
                    f"{order.completed_at:%Y-%m-%d %H:%M:%S}"
                ),
            )
            for order in self._order_repo.list_completed_since(
                user.created_at, user_id
            )
        ]

    # ------------------------------------------------------------------
    # Helpers
    # ------------------------------------------------------------------

    def _validate_items(
        self, items: List[CreateOrderItemDTO]
    ) -> List[CreateOrderItemDTO]:
        if not items:
            raise InvalidOrderRequest("Order must contain at least one item.")

        invalid = [item.book_id for item in items if item.book_id <= 0]
        if invalid:
            raise InvalidOrderRequest(f"Invalid book id: {invalid[0]}.")

        book_ids = [item.book_id for item in items]
        missing = sorted(set(book_ids) - self._book_repo.existing_ids(book_ids))
        if missing:
            raise InvalidOrderRequest(f"Book {missing[0]} does not exist.")

        if not self._reprice:
            return list(items)

        prices = self._book_repo.prices_for(book_ids)
        return [
            item.model_copy(update={"unit_price": prices[item.book_id]})
            for item in items
        ]

    # ------------------------------------------------------------------
    # Side effects
    # ------------------------------------------------------------------

    def _send_confirmation(self, order: Order, quote: pricing.Quote) -> None:
        user = self._user_repo.get_by_id(order.user_id)
        if not user or not user.email:
            logger.warning("order.confirmation_skipped", order_id=order.id)
            return
        mail = OrderConfirmationMail(
            to_email=user.email,
            full_name=user.display_name,
            claim_code=order.claim_code,
            order_date=order.order_date,
            total_books=quote.total_quantity,
            subtotal=quote.subtotal,
            discount=quote.discount,
            final_amount=quote.total_amount,
        )
        try:
            self._mail_sender.send_order_confirmation(mail)
        except MailDeliveryError as exc:
            logger.error(
                "order.confirmation_failed", order_id=order.id, error=str(exc)
            )

    def _clear_cart(self, user_id: str, book_ids: List[int]) -> None:
        try:
            removed = self._cart_repo.remove_books(user_id, book_ids)
        except DatabaseError as exc:
            logger.error("order.cart_cleanup_failed", user_id=user_id, error=str(exc))
            return
        logger.info("order.cart_cleaned", user_id=user_id, removed=removed)

    def _broadcast_completion(self, order: Order) -> None:
        user = self._user_repo.get_by_id(order.user_id)
        name = user.display_name if user else str(order.user_id)
        notification = NotificationDTO(
            type=NOTIFICATION_TYPE,
            content=ORDER_COMPLETED_CONTENT,
            id=completion_notification_id(order),
            timestamp=order.completed_at,
            title=ORDER_COMPLETED_CONTENT,
            description=f"Order for {name} completed.",
        )
        try:
            self._sink.broadcast(notification)
        except NotificationDeliveryError as exc:
            logger.error(
                "order.broadcast_failed", order_id=order.id, error=str(exc)
            )
