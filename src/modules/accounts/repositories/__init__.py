"""Accounts repositories package."""

from modules.accounts.repositories.django_repository import AccountDjangoRepository
from modules.accounts.repositories.interfaces import IAccountRepository

__all__ = ["IAccountRepository", "AccountDjangoRepository"]
