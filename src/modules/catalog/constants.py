"""Catalog constants."""

from django.db import models


class UnitType(models.TextChoices):
    UNIT = "unit", "Per unit"
    SIZE = "size", "Per size / weight"


MAX_CERTIFICATIONS = 20
