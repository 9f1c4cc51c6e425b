"""Account service layer.

Registration, the caller's own profile and username search for starting
a conversation. Credentials are handled by ``auth.User``; tokens are
issued by simplejwt.
"""

from __future__ import annotations

from typing import TYPE_CHECKING, Any, List, Tuple

import structlog
from django.db import transaction

from modules.accounts.exceptions import UserAlreadyExists

if TYPE_CHECKING:
    from modules.accounts.dtos import RegisterDTO, UpdateProfileDTO
    from modules.accounts.models import Profile
    from modules.accounts.repositories.interfaces import IAccountRepository

logger = structlog.get_logger(__name__)

SEARCH_LIMIT = 20


class AccountService:
    def __init__(self, repository: IAccountRepository) -> None:
        self._repo = repository

    @transaction.atomic
    def register(self, dto: RegisterDTO) -> Any:
        """Create the user and its profile.

        Raises:
            UserAlreadyExists: username or email already registered.
        """
        if self._repo.exists(dto.username, dto.email):
            logger.warning("accounts.duplicate_registration")
            raise UserAlreadyExists("Username or email already exists.")

        user = self._repo.create_user(dto.username, dto.email, dto.password)
        profile = self._repo.get_profile(user)
        profile.name = dto.name
        profile.phone = dto.phone or ""
        self._repo.save_profile(profile)

        logger.info("accounts.user_registered", user_id=user.pk)
        return user

    def get_profile(self, user) -> Tuple[Any, Profile]:
        return user, self._repo.get_profile(user)

    @transaction.atomic
    def update_profile(self, user, dto: UpdateProfileDTO) -> Tuple[Any, Profile]:
        """Apply supplied fields to the user and profile.

        Raises:
            UserAlreadyExists: new email belongs to another account.
        """
        profile = self._repo.get_profile(user)
        changes = dto.model_dump(exclude_unset=True)

        email = changes.pop("email", None)
        if email is not None and email.lower() != (user.email or "").lower():
            if self._repo.exists("", email, exclude_id=user.pk):
                raise UserAlreadyExists("Username or email already exists.")
            user.email = email
            self._repo.save(user)

        for field in ("name", "phone"):
            if field in changes:
                setattr(profile, field, changes[field] or "")
        self._repo.save_profile(profile)

        logger.info("accounts.profile_updated", user_id=user.pk)
        return user, profile

    def search_users(self, user, query: str) -> List[Any]:
        """Up to 20 users matching ``query``, never the caller."""
        query = (query or "").strip()
        if not query:
            return []
        return self._repo.search(query, exclude_id=user.pk, limit=SEARCH_LIMIT)
