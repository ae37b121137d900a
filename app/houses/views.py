"""
API views for house listings.

URL Structure:
    /api/v1/houses/               GET (list), POST (sellers)
    /api/v1/houses/<id>/          GET, PATCH, PUT, DELETE (owner or admin)
    /api/v1/houses/<id>/images/   PUT (owner or admin)
    /api/v1/houses/<id>/rate/     PATCH (anyone but the owner)
"""

from __future__ import annotations

from django_filters.rest_framework import DjangoFilterBackend
from drf_spectacular.utils import OpenApiResponse, extend_schema, extend_schema_view
from rest_framework import status, viewsets
from rest_framework.decorators import action
from rest_framework.exceptions import NotFound
from rest_framework.filters import OrderingFilter, SearchFilter
from rest_framework.parsers import FormParser, JSONParser, MultiPartParser
from rest_framework.permissions import IsAuthenticated
from rest_framework.response import Response

from authentication.permissions import IsOwnerOrAdmin, IsSeller
from authentication.serializers import PublicUserSerializer
from core.helpers import parse_uuid
from houses.filters import HouseFilter
from houses.models import House
from houses.serializers import (
    HouseCreateSerializer,
    HouseImagesSerializer,
    HouseSerializer,
    HouseUpdateSerializer,
    RateOwnerSerializer,
)
from houses.services import HouseService

ERROR_STATUS = {
    "TOO_MANY_IMAGES": status.HTTP_400_BAD_REQUEST,
    "INVALID_SCORE": status.HTTP_400_BAD_REQUEST,
    "SELF_RATING": status.HTTP_409_CONFLICT,
}


def failure_response(result) -> Response:
    return Response(
        result.to_response(),
        status=ERROR_STATUS.get(result.error_code, status.HTTP_400_BAD_REQUEST),
    )


@extend_schema_view(
    list=extend_schema(summary="List houses", tags=["Houses"]),
    retrieve=extend_schema(summary="Get a house", tags=["Houses"]),
    partial_update=extend_schema(
        summary="Edit a house",
        request=HouseUpdateSerializer,
        responses={200: HouseSerializer},
        tags=["Houses"],
    ),
    update=extend_schema(
        summary="Replace a house's details",
        request=HouseUpdateSerializer,
        responses={200: HouseSerializer},
        tags=["Houses"],
    ),
    destroy=extend_schema(summary="Delete a house", tags=["Houses"]),
)
class HouseViewSet(viewsets.ModelViewSet):
    """
    House listings.

    Anyone signed in can browse; sellers publish; owners (and admins) edit,
    delete and replace pictures.
    """

    serializer_class = HouseSerializer
    parser_classes = [MultiPartParser, FormParser, JSONParser]
    filter_backends = [DjangoFilterBackend, SearchFilter, OrderingFilter]
    filterset_class = HouseFilter
    search_fields = ["title", "location"]
    ordering_fields = ["price", "created_at"]
    ordering = ["-created_at"]

    def get_queryset(self):
        return House.objects.select_related("owner").prefetch_related("images")

    def get_permissions(self):
        if self.action == "create":
            return [IsAuthenticated(), IsSeller()]
        if self.action in ("update", "partial_update", "destroy", "images"):
            return [IsAuthenticated(), IsOwnerOrAdmin()]
        return [IsAuthenticated()]

    def get_serializer_class(self):
        if self.action == "create":
            return HouseCreateSerializer
        if self.action in ("update", "partial_update"):
            return HouseUpdateSerializer
        return HouseSerializer

    def get_object(self):
        house_id = parse_uuid(self.kwargs[self.lookup_field])
        house = self.get_queryset().filter(pk=house_id).first() if house_id else None
        if house is None:
            raise NotFound({"error": "House not found", "error_code": "HOUSE_NOT_FOUND"})

        self.check_object_permissions(self.request, house)
        return house

    def _render(self, house: House) -> dict:
        house = self.get_queryset().get(pk=house.pk)
        return HouseSerializer(house, context=self.get_serializer_context()).data

    @extend_schema(
        summary="Publish a house",
        request=HouseCreateSerializer,
        responses={
            201: OpenApiResponse(response=HouseSerializer),
            400: OpenApiResponse(description="Invalid fields or too many images"),
            403: OpenApiResponse(description="Only sellers can publish"),
        },
        tags=["Houses"],
    )
    def create(self, request, *args, **kwargs):
        serializer = self.get_serializer(data=request.data)
        serializer.is_valid(raise_exception=True)

        data = dict(serializer.validated_data)
        sub_images = data.pop("sub_images", [])
        result = HouseService.create_house(request.user, data, sub_images)
        if not result.success:
            return failure_response(result)

        return Response(self._render(result.data), status=status.HTTP_201_CREATED)

    def update(self, request, *args, **kwargs):
        partial = kwargs.pop("partial", False)
        house = self.get_object()
        serializer = self.get_serializer(house, data=request.data, partial=partial)
        serializer.is_valid(raise_exception=True)
        serializer.save()
        return Response(self._render(house))

    def perform_destroy(self, instance):
        HouseService.delete_house(instance)

    @extend_schema(
        summary="Replace a house's pictures",
        request=HouseImagesSerializer,
        responses={
            200: OpenApiResponse(response=HouseSerializer),
            400: OpenApiResponse(description="No pictures or too many images"),
            403: OpenApiResponse(description="Not the owner"),
        },
        tags=["Houses"],
    )
    @action(detail=True, methods=["put"], url_path="images")
    def images(self, request, pk=None):
        house = self.get_object()
        serializer = HouseImagesSerializer(data=request.data)
        serializer.is_valid(raise_exception=True)

        result = HouseService.replace_images(
            house,
            main_image=serializer.validated_data.get("main_image"),
            sub_images=serializer.validated_data.get("sub_images"),
        )
        if not result.success:
            return failure_response(result)

        return Response(self._render(house))

    @extend_schema(
        summary="Rate a house's owner",
        request=RateOwnerSerializer,
        responses={
            200: OpenApiResponse(response=PublicUserSerializer),
            400: OpenApiResponse(description="Score outside 1..5"),
            409: OpenApiResponse(description="Owners cannot rate themselves"),
        },
        tags=["Houses"],
    )
    @action(detail=True, methods=["patch"], url_path="rate")
    def rate(self, request, pk=None):
        house = self.get_object()
        serializer = RateOwnerSerializer(data=request.data)
        serializer.is_valid(raise_exception=True)

        result = HouseService.rate_owner(
            request.user, house, serializer.validated_data["amount"]
        )
        if not result.success:
            return failure_response(result)

        return Response(
            PublicUserSerializer(
                result.data.ratee, context=self.get_serializer_context()
            ).data
        )
