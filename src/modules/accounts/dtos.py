"""Account DTOs (Pydantic v2, immutable)."""

from __future__ import annotations

import re
from typing import Optional

from pydantic import BaseModel, ConfigDict, EmailStr, Field, field_validator

_NON_DIGITS = re.compile(r"\D")


def _normalize_phone(v: Optional[str]) -> Optional[str]:
    if v is None or not v.strip():
        return None if v is None else ""
    digits = _NON_DIGITS.sub("", v)
    if not 10 <= len(digits) <= 15:
        raise ValueError("Invalid phone number.")
    return v.strip()


class RegisterDTO(BaseModel):
    """New account.

    Username >= 3 chars, password >= 8 chars, valid email; the phone is
    optional but must hold 10 to 15 digits when given.
    """

    model_config = ConfigDict(frozen=True)

    username: str = Field(min_length=3, max_length=150)
    password: str = Field(min_length=8, max_length=128)
    email: EmailStr
    name: str = Field(default="", max_length=150)
    phone: Optional[str] = None

    @field_validator("username", "name", mode="before")
    @classmethod
    def strip_text(cls, v):
        return v.strip() if isinstance(v, str) else v

    @field_validator("username")
    @classmethod
    def username_charset(cls, v: str) -> str:
        if not re.fullmatch(r"[\w.@+-]+", v):
            raise ValueError(
                "Username may contain only letters, digits and @/./+/-/_ characters."
            )
        return v

    @field_validator("phone")
    @classmethod
    def phone_format(cls, v: Optional[str]) -> Optional[str]:
        return _normalize_phone(v)


class UpdateProfileDTO(BaseModel):
    """Partial profile update; only supplied fields change."""

    model_config = ConfigDict(frozen=True, str_strip_whitespace=True)

    name: Optional[str] = Field(default=None, max_length=150)
    email: Optional[EmailStr] = None
    phone: Optional[str] = None

    @field_validator("phone")
    @classmethod
    def phone_format(cls, v: Optional[str]) -> Optional[str]:
        return _normalize_phone(v)
