"""Account repository interface."""

from __future__ import annotations

from abc import abstractmethod
from typing import TYPE_CHECKING, Any, List, Optional

from modules.core.repositories.interfaces import IRepository

if TYPE_CHECKING:
    from modules.accounts.models import Profile


class IAccountRepository(IRepository[Any]):
    """Repository contract for users and their profiles."""

    @abstractmethod
    def get_by_username(self, username: str) -> Optional[Any]:
        """Active user with this exact username, or ``None``."""

    @abstractmethod
    def exists(
        self, username: str, email: str, exclude_id: Optional[int] = None
    ) -> bool:
        """Whether the username or the email (case-insensitive) is taken."""

    @abstractmethod
    def create_user(self, username: str, email: str, password: str) -> Any:
        """Create a user with a hashed password.

        Raises:
            UserAlreadyExists: username uniqueness violated at insert time.
        """

    @abstractmethod
    def get_profile(self, user) -> Profile:
        """The user's profile, created empty if absent."""

    @abstractmethod
    def save_profile(self, profile: Profile) -> Profile:
        ...

    @abstractmethod
    def search(self, query: str, exclude_id: int, limit: int) -> List[Any]:
        """Active users whose username contains ``query``."""
