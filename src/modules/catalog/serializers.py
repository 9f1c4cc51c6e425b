"""Catalog DRF serializers.

Wire format is camelCase (``imageUri``, ``unitType`` ...) to match the
mobile client; ``source=`` maps each field to its model attribute.
"""

from __future__ import annotations

from decimal import Decimal

from rest_framework import serializers

from modules.catalog.constants import MAX_CERTIFICATIONS, UnitType
from modules.catalog.dtos import measure_error
from modules.catalog.models import FoodItem

WIRE_NAMES = {
    "image_uri": "imageUri",
    "expiry_date": "expiryDate",
    "contact_info": "contactInfo",
    "contact_method": "contactMethod",
    "unit_type": "unitType",
    "size_measurement": "sizeMeasurement",
    "share_location": "shareLocation",
}


# ---------------------------------------------------------------------------
# Input Serializers
# ---------------------------------------------------------------------------


class LocationSerializer(serializers.Serializer):
    """GeoJSON point: ``{"type": "Point", "coordinates": [lng, lat]}``."""

    type = serializers.ChoiceField(choices=["Point"])
    coordinates = serializers.ListField(
        child=serializers.FloatField(), min_length=2, max_length=2
    )

    def validate_coordinates(self, value):
        longitude, latitude = value
        if not -180 <= longitude <= 180 or not -90 <= latitude <= 90:
            raise serializers.ValidationError("Coordinates out of range.")
        return value


class FoodItemWriteSerializer(serializers.Serializer):
    """Validates listing create / update payloads (``partial`` for updates)."""

    title = serializers.CharField(max_length=200)
    producer = serializers.CharField(max_length=200)
    price = serializers.DecimalField(
        max_digits=10, decimal_places=2, min_value=Decimal("0")
    )
    description = serializers.CharField(required=False, allow_blank=True)
    imageUri = serializers.CharField(
        source="image_uri", max_length=500, required=False, allow_blank=True
    )
    origin = serializers.CharField(max_length=200, required=False, allow_blank=True)
    certifications = serializers.ListField(
        child=serializers.CharField(max_length=100),
        required=False,
        max_length=MAX_CERTIFICATIONS,
    )
    expiryDate = serializers.DateField(
        source="expiry_date", required=False, allow_null=True
    )
    contactInfo = serializers.CharField(
        source="contact_info", max_length=255, required=False, allow_blank=True
    )
    contactMethod = serializers.CharField(
        source="contact_method", max_length=50, required=False, allow_blank=True
    )
    unitType = serializers.ChoiceField(
        source="unit_type", choices=UnitType.choices, default=UnitType.UNIT
    )
    quantity = serializers.IntegerField(min_value=1, required=False, allow_null=True)
    sizeMeasurement = serializers.CharField(
        source="size_measurement", max_length=100, required=False, allow_blank=True
    )
    shareLocation = serializers.BooleanField(source="share_location", required=False)
    location = LocationSerializer(required=False, allow_null=True)

    def validate(self, attrs):
        location = attrs.pop("location", None)
        if location:
            longitude, latitude = location["coordinates"]
            attrs["longitude"] = Decimal(str(round(longitude, 6)))
            attrs["latitude"] = Decimal(str(round(latitude, 6)))

        # Partial updates are checked against the merged listing by the service
        if not self.partial:
            error = measure_error(
                attrs.get("unit_type", UnitType.UNIT),
                attrs.get("quantity"),
                attrs.get("size_measurement"),
            )
            if error:
                field, message = error
                raise serializers.ValidationError(
                    {WIRE_NAMES.get(field, field): message}
                )
        return attrs


# ---------------------------------------------------------------------------
# Output Serializers (Read)
# ---------------------------------------------------------------------------


class FoodItemSerializer(serializers.ModelSerializer):
    """Read serializer for listings."""

    imageUri = serializers.CharField(source="image_uri", read_only=True)
    expiryDate = serializers.DateField(source="expiry_date", read_only=True)
    contactInfo = serializers.CharField(source="contact_info", read_only=True)
    contactMethod = serializers.CharField(source="contact_method", read_only=True)
    unitType = serializers.CharField(source="unit_type", read_only=True)
    sizeMeasurement = serializers.CharField(source="size_measurement", read_only=True)
    shareLocation = serializers.BooleanField(source="share_location", read_only=True)
    location = serializers.SerializerMethodField()
    userId = serializers.IntegerField(source="lister_id", read_only=True)
    listerUsername = serializers.CharField(source="lister.username", read_only=True)
    createdAt = serializers.DateTimeField(source="created_at", read_only=True)
    updatedAt = serializers.DateTimeField(source="updated_at", read_only=True)

    class Meta:
        model = FoodItem
        fields = [
            "id",
            "title",
            "producer",
            "price",
            "description",
            "imageUri",
            "origin",
            "certifications",
            "expiryDate",
            "contactInfo",
            "contactMethod",
            "unitType",
            "quantity",
            "sizeMeasurement",
            "shareLocation",
            "location",
            "userId",
            "listerUsername",
            "createdAt",
            "updatedAt",
        ]
        read_only_fields = fields

    def get_location(self, obj: FoodItem):
        if not obj.share_location or obj.latitude is None or obj.longitude is None:
            return None
        return {
            "type": "Point",
            "coordinates": [float(obj.longitude), float(obj.latitude)],
        }
