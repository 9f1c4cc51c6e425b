from rest_framework.permissions import BasePermission


def is_admin(user) -> bool:
    """Administrative actor: an authenticated staff user."""
    return bool(user and user.is_authenticated and user.is_staff)


class IsAdminActor(BasePermission):
    """Allows access only to administrative actors (``is_staff``)."""

    def has_permission(self, request, view) -> bool:
        return is_admin(request.user)
