"""Unit tests for AccountService and account DTOs."""

from __future__ import annotations

import pytest
from django.contrib.auth import get_user_model
from pydantic import ValidationError

from modules.accounts.dtos import RegisterDTO, UpdateProfileDTO
from modules.accounts.exceptions import UserAlreadyExists
from modules.accounts.models import Profile
from modules.accounts.repositories import AccountDjangoRepository
from modules.accounts.services import SEARCH_LIMIT, AccountService

pytestmark = pytest.mark.unit

User = get_user_model()


@pytest.fixture()
def service():
    return AccountService(repository=AccountDjangoRepository())


def _register(**overrides) -> RegisterDTO:
    data = {
        "username": "newbie",
        "password": "longenough",
        "email": "newbie@example.com",
        "name": "New Bie",
        "phone": "(555) 123-4567",
    }
    data.update(overrides)
    return RegisterDTO(**data)


class TestRegisterDTO:
    @pytest.mark.parametrize(
        "overrides",
        [
            {"username": "ab"},
            {"password": "short"},
            {"email": "not-an-email"},
            {"phone": "12345"},
            {"username": "has space"},
        ],
    )
    def test_rejects_invalid_input(self, overrides):
        with pytest.raises(ValidationError):
            _register(**overrides)

    def test_phone_is_optional(self):
        assert _register(phone=None).phone is None


class TestRegister:
    def test_creates_user_and_profile(self, service):
        user = service.register(_register())

        assert user.check_password("longenough")
        profile = Profile.objects.get(user=user)
        assert profile.name == "New Bie"
        assert profile.phone == "(555) 123-4567"

    @pytest.mark.parametrize(
        "overrides",
        [
            {"email": "other@example.com"},
            {"username": "NEWBIE", "email": "other@example.com"},
            {"username": "someone", "email": "NEWBIE@example.com"},
        ],
    )
    def test_duplicates_rejected(self, service, overrides):
        service.register(_register())
        with pytest.raises(UserAlreadyExists):
            service.register(_register(**overrides))
        assert User.objects.count() == 1


class TestProfile:
    def test_profile_created_lazily(self, service, user):
        _, profile = service.get_profile(user)
        assert profile.user == user
        assert profile.name == ""

    def test_update_profile(self, service, user):
        user, profile = service.update_profile(
            user, UpdateProfileDTO(name="Ada", email="ada@example.com")
        )
        user.refresh_from_db()
        assert user.email == "ada@example.com"
        assert profile.name == "Ada"

    def test_update_email_taken(self, service, user, other_user):
        with pytest.raises(UserAlreadyExists):
            service.update_profile(user, UpdateProfileDTO(email=other_user.email))

    def test_keeping_own_email_is_fine(self, service, user):
        service.update_profile(user, UpdateProfileDTO(email=user.email.upper()))

    def test_blank_phone_clears(self, service, user):
        service.update_profile(user, UpdateProfileDTO(phone="5551234567"))
        _, profile = service.update_profile(user, UpdateProfileDTO(phone=""))
        assert profile.phone == ""


class TestSearch:
    def test_excludes_self_and_matches_substring(self, service, user, other_user):
        results = service.search_users(user, "ist")
        assert results == [other_user]
        assert service.search_users(other_user, "lister") == []

    def test_blank_query_returns_nothing(self, service, user, other_user):
        assert service.search_users(user, "  ") == []

    def test_limit(self, service, user):
        User.objects.bulk_create(
            User(username=f"farmer{i:02d}", email=f"f{i}@example.com")
            for i in range(25)
        )
        assert len(service.search_users(user, "farmer")) == SEARCH_LIMIT

    def test_inactive_users_hidden(self, service, user, other_user):
        other_user.is_active = False
        other_user.save()
        assert service.search_users(user, "lister") == []
