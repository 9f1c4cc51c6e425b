"""Catalog API views.

Marketplace reads are public; writes require a bearer token and are
restricted to the lister. Domain exceptions are translated into DRF
exceptions so every error shares the standardized format.
"""

from __future__ import annotations

from django_filters.rest_framework import DjangoFilterBackend
from pydantic import ValidationError as PydanticValidationError
from rest_framework import status
from rest_framework.decorators import action
from rest_framework.exceptions import NotFound, PermissionDenied, ValidationError
from rest_framework.filters import OrderingFilter, SearchFilter
from rest_framework.mixins import ListModelMixin
from rest_framework.permissions import AllowAny, IsAuthenticated
from rest_framework.request import Request
from rest_framework.response import Response
from rest_framework.viewsets import GenericViewSet

from modules.catalog.dtos import CreateFoodItemDTO, UpdateFoodItemDTO
from modules.catalog.exceptions import FoodItemNotFound, InvalidListing, NotListingOwner
from modules.catalog.filters import FoodItemFilter
from modules.catalog.models import FoodItem
from modules.catalog.repositories.django_repository import FoodItemDjangoRepository
from modules.catalog.serializers import (
    WIRE_NAMES,
    FoodItemSerializer,
    FoodItemWriteSerializer,
)
from modules.catalog.services import CatalogService
from modules.core.exceptions import validation_error_from_pydantic


class FoodItemViewSet(ListModelMixin, GenericViewSet):
    """Listings resource.

    Uses ``CatalogService`` with ``FoodItemDjangoRepository`` (DIP).
    ``list`` is the public marketplace feed.
    """

    queryset = FoodItem.objects.none()
    serializer_class = FoodItemSerializer
    filterset_class = FoodItemFilter
    search_fields = ["title", "producer", "description"]
    ordering_fields = ["created_at", "price", "expiry_date"]
    ordering = ["-created_at", "-id"]
    filter_backends = [DjangoFilterBackend, SearchFilter, OrderingFilter]

    def __init__(self, **kwargs) -> None:
        super().__init__(**kwargs)
        self._service = CatalogService(repository=FoodItemDjangoRepository())

    def get_permissions(self):
        if self.action in {"list", "retrieve"}:
            return [AllowAny()]
        return [IsAuthenticated()]

    def get_queryset(self):
        return self._service.list_marketplace()

    # ------------------------------------------------------------------
    # Read
    # ------------------------------------------------------------------

    def retrieve(self, request: Request, pk: str | None = None) -> Response:
        """GET /api/v1/listings/{pk}"""
        try:
            item = self._service.get_listing(pk)
        except FoodItemNotFound as exc:
            raise NotFound("Listing not found.", code="listing_not_found") from exc
        return Response(FoodItemSerializer(item).data)

    @action(detail=False, methods=["get"])
    def mine(self, request: Request) -> Response:
        """GET /api/v1/listings/mine"""
        items = self._service.list_my_listings(request.user)
        return Response(FoodItemSerializer(items, many=True).data)

    # ------------------------------------------------------------------
    # Create / Update / Destroy
    # ------------------------------------------------------------------

    def create(self, request: Request) -> Response:
        """POST /api/v1/listings"""
        serializer = FoodItemWriteSerializer(data=request.data)
        serializer.is_valid(raise_exception=True)
        try:
            dto = CreateFoodItemDTO(**serializer.validated_data)
        except PydanticValidationError as exc:
            raise validation_error_from_pydantic(exc, WIRE_NAMES) from exc

        item = self._service.create_listing(request.user, dto)
        return Response(FoodItemSerializer(item).data, status=status.HTTP_201_CREATED)

    def update(self, request: Request, pk: str | None = None) -> Response:
        """PUT/PATCH /api/v1/listings/{pk}"""
        serializer = FoodItemWriteSerializer(data=request.data, partial=True)
        serializer.is_valid(raise_exception=True)
        try:
            dto = UpdateFoodItemDTO(**serializer.validated_data)
        except PydanticValidationError as exc:
            raise validation_error_from_pydantic(exc, WIRE_NAMES) from exc

        try:
            item = self._service.update_listing(request.user, pk, dto)
        except FoodItemNotFound as exc:
            raise NotFound("Listing not found.", code="listing_not_found") from exc
        except NotListingOwner as exc:
            raise PermissionDenied(
                "You can only modify your own listings.", code="not_listing_owner"
            ) from exc
        except InvalidListing as exc:
            raise ValidationError(
                {WIRE_NAMES.get(exc.field, exc.field): [exc.message]}
            ) from exc
        return Response(FoodItemSerializer(item).data)

    def partial_update(self, request: Request, pk: str | None = None) -> Response:
        return self.update(request, pk)

    def destroy(self, request: Request, pk: str | None = None) -> Response:
        """DELETE /api/v1/listings/{pk}"""
        try:
            self._service.delete_listing(request.user, pk)
        except FoodItemNotFound as exc:
            raise NotFound("Listing not found.", code="listing_not_found") from exc
        except NotListingOwner as exc:
            raise PermissionDenied(
                "You can only delete your own listings.", code="not_listing_owner"
            ) from exc
        return Response(status=status.HTTP_204_NO_CONTENT)
