"""Account profile.

Django's ``auth.User`` carries credentials, username and email; the
``Profile`` adds the marketplace display name and an optional phone.
"""

from __future__ import annotations

from django.conf import settings
from django.db import models

from modules.core.models import BaseModel


class Profile(BaseModel):
    user = models.OneToOneField(
        settings.AUTH_USER_MODEL,
        on_delete=models.CASCADE,
        related_name="profile",
    )
    name = models.CharField(max_length=150, blank=True, default="")
    phone = models.CharField(max_length=20, blank=True, default="")

    class Meta:
        db_table = "profiles"

    def __str__(self) -> str:
        return self.name or str(self.user_id)
