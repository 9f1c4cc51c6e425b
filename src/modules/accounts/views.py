"""Account API views.

Registration is public and throttled; token issue and refresh are
delegated to simplejwt. Profile and search require a bearer token.
"""

from __future__ import annotations

from types import SimpleNamespace

from pydantic import ValidationError as PydanticValidationError
from rest_framework import status
from rest_framework.permissions import AllowAny, IsAuthenticated
from rest_framework.request import Request
from rest_framework.response import Response
from rest_framework.views import APIView

from modules.accounts.dtos import RegisterDTO, UpdateProfileDTO
from modules.accounts.exceptions import UserAlreadyExists
from modules.accounts.repositories import AccountDjangoRepository
from modules.accounts.serializers import (
    ProfileSerializer,
    ProfileUpdateSerializer,
    RegisterSerializer,
    UserSummarySerializer,
)
from modules.accounts.services import AccountService
from modules.core.exceptions import Conflict, validation_error_from_pydantic


def _duplicate() -> Conflict:
    return Conflict("Username or email already exists.", code="duplicate_user")


def _profile_response(user, profile) -> Response:
    return Response(ProfileSerializer(SimpleNamespace(user=user, profile=profile)).data)


class _AccountView(APIView):
    def __init__(self, **kwargs) -> None:
        super().__init__(**kwargs)
        self._service = AccountService(repository=AccountDjangoRepository())


class RegisterView(_AccountView):
    """POST /api/v1/auth/register"""

    permission_classes = [AllowAny]
    authentication_classes: list = []
    throttle_scope = "registration"

    def post(self, request: Request) -> Response:
        serializer = RegisterSerializer(data=request.data)
        serializer.is_valid(raise_exception=True)
        try:
            dto = RegisterDTO(**serializer.validated_data)
        except PydanticValidationError as exc:
            raise validation_error_from_pydantic(exc) from exc

        try:
            user = self._service.register(dto)
        except UserAlreadyExists as exc:
            raise _duplicate() from exc

        return Response(
            {"message": "User registered successfully", "id": user.pk},
            status=status.HTTP_201_CREATED,
        )


class ProfileView(_AccountView):
    """GET/PUT/PATCH /api/v1/users/me"""

    permission_classes = [IsAuthenticated]

    def get(self, request: Request) -> Response:
        user, profile = self._service.get_profile(request.user)
        return _profile_response(user, profile)

    def put(self, request: Request) -> Response:
        serializer = ProfileUpdateSerializer(data=request.data, partial=True)
        serializer.is_valid(raise_exception=True)
        try:
            dto = UpdateProfileDTO(**serializer.validated_data)
        except PydanticValidationError as exc:
            raise validation_error_from_pydantic(exc) from exc

        try:
            user, profile = self._service.update_profile(request.user, dto)
        except UserAlreadyExists as exc:
            raise _duplicate() from exc
        return _profile_response(user, profile)

    def patch(self, request: Request) -> Response:
        return self.put(request)


class UserSearchView(_AccountView):
    """GET /api/v1/users/search?q=<fragment>"""

    permission_classes = [IsAuthenticated]

    def get(self, request: Request) -> Response:
        query = request.query_params.get("q", "")
        users = self._service.search_users(request.user, query)
        return Response(UserSummarySerializer(users, many=True).data)
