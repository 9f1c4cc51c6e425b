"""Bearer JWT authentication backend for Django REST Framework.

Access tokens are issued by SimpleJWT (``/api/v1/auth/token``) and verified
here with PyJWT against the shared HS256 secret (``JWT_SIGNING_KEY``).

Security decisions
------------------
* **Fail Closed**: any decode / validation error returns 401.
* ``algorithms`` is pinned to the configured value. Never derived from
  the incoming token (prevents algorithm-confusion attacks).
* Only ``token_type == "access"`` is accepted; refresh tokens are rejected.
* Every failure carries a stable code so clients can tell an expired
  session (re-login) from a broken credential.
"""

import jwt as pyjwt
import structlog
from django.conf import settings
from django.contrib.auth import get_user_model
from jwt.exceptions import ExpiredSignatureError, PyJWTError

from rest_framework.authentication import BaseAuthentication
from rest_framework.exceptions import AuthenticationFailed

logger = structlog.get_logger(__name__)


class BearerTokenAuthentication(BaseAuthentication):
    """DRF authentication class that validates HS256 Bearer tokens."""

    keyword = "Bearer"

    # ------------------------------------------------------------------
    # Public API (DRF contract)
    # ------------------------------------------------------------------

    def authenticate(self, request):
        """Return ``(User, token)`` or ``None`` (no credentials)."""
        header = request.META.get("HTTP_AUTHORIZATION", "")
        if not header:
            return None  # no credentials, DRF answers 401 not_authenticated

        token = self._extract_token(header)
        payload = self._decode_token(token)
        user = self._get_user(payload)
        logger.info("jwt_authenticated", user_id=user.pk)
        return (user, token)

    def authenticate_header(self, request):
        """Value for the ``WWW-Authenticate`` response header on 401."""
        return f'{self.keyword} realm="api"'

    # ------------------------------------------------------------------
    # Internal helpers
    # ------------------------------------------------------------------

    @staticmethod
    def _extract_token(header: str) -> str:
        parts = header.split()
        if len(parts) != 2 or parts[0].lower() != "bearer":
            raise AuthenticationFailed(
                "Malformed Authorization header.", code="malformed_header"
            )
        return parts[1]

    @staticmethod
    def _decode_token(token: str) -> dict:
        try:
            payload = pyjwt.decode(
                token,
                settings.JWT_SIGNING_KEY,
                algorithms=[settings.JWT_ALGORITHM],
                options={"require": ["exp", "token_type"]},
            )
        except ExpiredSignatureError as exc:
            logger.info("jwt_expired")
            raise AuthenticationFailed("Token expired.", code="token_expired") from exc
        except PyJWTError as exc:
            logger.warning("jwt_validation_failed", error=str(exc))
            raise AuthenticationFailed("Invalid token.", code="invalid_token") from exc

        if payload.get("token_type") != "access":
            raise AuthenticationFailed("Invalid token.", code="invalid_token")
        return payload

    @staticmethod
    def _get_user(payload: dict):
        user_id = payload.get(settings.SIMPLE_JWT.get("USER_ID_CLAIM", "user_id"))
        if user_id is None:
            raise AuthenticationFailed("Invalid token.", code="invalid_token")

        User = get_user_model()
        user = User.objects.filter(pk=user_id).first()
        if user is None or not user.is_active:
            logger.warning("jwt_unknown_user", user_id=user_id)
            raise AuthenticationFailed("Invalid token.", code="invalid_token")
        return user
