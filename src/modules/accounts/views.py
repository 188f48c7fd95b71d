"""Account views."""

from __future__ import annotations

from rest_framework.permissions import IsAuthenticated
from rest_framework.request import Request
from rest_framework.response import Response
from rest_framework.views import APIView

from modules.accounts.serializers import ProfileSerializer
from modules.core.responses import envelope


class MeView(APIView):
    """Return the profile of the bearer-token owner.

    * No token  -> 401
    * Bad token -> 401
    * Valid JWT -> 200
    """

    permission_classes = [IsAuthenticated]

    def get(self, request: Request) -> Response:
        return envelope("Authenticated user.", ProfileSerializer(request.user).data)
