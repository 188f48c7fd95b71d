"""Cart API views (bearer-authenticated)."""

from __future__ import annotations

from rest_framework import status
from rest_framework.decorators import action
from rest_framework.request import Request
from rest_framework.response import Response
from rest_framework.viewsets import GenericViewSet

from modules.carts.dtos import AddToCartDTO
from modules.carts.exceptions import CartBookNotFound, CartEntryNotFound
from modules.carts.repositories.django_repository import CartDjangoRepository
from modules.carts.serializers import AddToCartSerializer, CartEntrySerializer
from modules.carts.services import CartService
from modules.catalog.repositories.django_repository import BookDjangoRepository
from modules.core.responses import envelope


class CartViewSet(GenericViewSet):
    serializer_class = CartEntrySerializer

    def __init__(self, **kwargs) -> None:
        super().__init__(**kwargs)
        self._service = CartService(
            cart_repository=CartDjangoRepository(),
            book_repository=BookDjangoRepository(),
        )

    @action(detail=False, methods=["get"], url_path="GetCart")
    def get_cart(self, request: Request) -> Response:
        """GET /api/Cart/GetCart"""
        entries = self._service.get_cart(str(request.user.pk))
        return envelope("Cart items.", CartEntrySerializer(entries, many=True).data)

    @action(detail=False, methods=["post"], url_path="AddToCart")
    def add_to_cart(self, request: Request) -> Response:
        """POST /api/Cart/AddToCart"""
        serializer = AddToCartSerializer(data=request.data)
        serializer.is_valid(raise_exception=True)

        dto = AddToCartDTO(
            user_id=str(request.user.pk),
            book_id=serializer.validated_data["bookId"],
            quantity=serializer.validated_data["quantity"],
        )
        try:
            entry = self._service.add_to_cart(dto)
        except CartBookNotFound:
            return envelope("Book not found.", status_code=status.HTTP_404_NOT_FOUND)
        return envelope("Book added to cart.", CartEntrySerializer(entry).data)

    @action(
        detail=False,
        methods=["delete"],
        url_path=r"RemoveFromCart/(?P<book_id>\d+)",
    )
    def remove_from_cart(self, request: Request, book_id: str) -> Response:
        """DELETE /api/Cart/RemoveFromCart/{bookId}"""
        try:
            self._service.remove_from_cart(str(request.user.pk), int(book_id))
        except CartEntryNotFound:
            return envelope(
                "Cart item not found.", status_code=status.HTTP_404_NOT_FOUND
            )
        return envelope("Book removed from cart.", int(book_id))
