"""Django ORM implementation of ``IAccountRepository``."""

from __future__ import annotations

from typing import Any, Dict, List, Optional

from django.contrib.auth import get_user_model
from django.db import IntegrityError, models, transaction

from modules.accounts.exceptions import UserAlreadyExists
from modules.accounts.models import Profile
from modules.accounts.repositories.interfaces import IAccountRepository

User = get_user_model()


class AccountDjangoRepository(IAccountRepository):
    def get_by_id(self, id: str) -> Optional[Any]:
        try:
            return User.objects.get(pk=id, is_active=True)
        except (User.DoesNotExist, ValueError, TypeError):
            return None

    def get_by_username(self, username: str) -> Optional[Any]:
        return User.objects.filter(username=username, is_active=True).first()

    def list(self, filters: Optional[Dict[str, Any]] = None) -> models.QuerySet:
        qs = User.objects.filter(is_active=True).select_related("profile")
        if filters:
            qs = qs.filter(**filters)
        return qs.order_by("username")

    def save(self, entity: Any) -> Any:
        entity.save()
        return entity

    def exists(
        self, username: str, email: str, exclude_id: Optional[int] = None
    ) -> bool:
        q = models.Q(email__iexact=email)
        if username:
            q |= models.Q(username__iexact=username)
        qs = User.objects.filter(q)
        if exclude_id is not None:
            qs = qs.exclude(pk=exclude_id)
        return qs.exists()

    def create_user(self, username: str, email: str, password: str) -> Any:
        try:
            with transaction.atomic():
                return User.objects.create_user(
                    username=username, email=email, password=password
                )
        except IntegrityError as exc:
            raise UserAlreadyExists("Username or email already exists.") from exc

    def get_profile(self, user) -> Profile:
        profile, _ = Profile.objects.get_or_create(user=user)
        return profile

    def save_profile(self, profile: Profile) -> Profile:
        profile.save()
        return profile

    def search(self, query: str, exclude_id: int, limit: int) -> List[Any]:
        return list(
            User.objects.filter(username__icontains=query, is_active=True)
            .exclude(pk=exclude_id)
            .select_related("profile")
            .order_by("username")[:limit]
        )
