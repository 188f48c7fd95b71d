"""Django ORM implementation of the User repository."""

from __future__ import annotations

from typing import Any, Dict, List, Optional

import structlog
from django.core.exceptions import ValidationError
from django.db import transaction

from modules.accounts.models import User
from modules.accounts.repositories.interfaces import IUserRepository

logger = structlog.get_logger(__name__)


class UserDjangoRepository(IUserRepository):
    def get_by_id(self, id: Any) -> Optional[User]:
        try:
            return User.objects.filter(id=id).first()
        except (TypeError, ValueError, ValidationError):
            return None

    def list(self, filters: Optional[Dict[str, Any]] = None) -> List[User]:
        queryset = User.objects.all()
        if filters:
            queryset = queryset.filter(**filters)
        return list(queryset)

    @transaction.atomic
    def save(self, entity: User) -> User:
        entity.save()
        logger.info("user.saved", user_id=str(entity.id))
        return entity
