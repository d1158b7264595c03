"""
Views para gestión de ventas
"""
from django.core.exceptions import ValidationError
from django.db.models import Max
from drf_spectacular.utils import extend_schema
from rest_framework import mixins, permissions, status, viewsets
from rest_framework.decorators import action
from rest_framework.response import Response

from ..core.api_responses import validation_error_response
from ..core.constants import ROLES_MANAGEMENT
from ..core.services import create_sale, record_sale_status
from ..models import Sale, SaleStatusEvent
from ..permissions import IsManagementOrReadOnly, IsSellerOwnerOrManagement, has_any_role
from .serializers import (
    SaleCreateSerializer,
    SaleReadSerializer,
    SaleStatusCreateSerializer,
    SaleStatusEventSerializer,
)


@extend_schema(tags=["Sales"])
class SaleViewSet(viewsets.ModelViewSet):
    """
    ViewSet para gestión de ventas

    - Vendedores: ven y cargan sus propias ventas
    - Roles de gestión: ven y modifican todas
    - Al crear una venta se registra el estado PENDIENTE_DE_CARGA
    """

    permission_classes = [permissions.IsAuthenticated, IsSellerOwnerOrManagement]
    filterset_fields = ["sds", "chip", "plan", "promotion", "seller"]
    search_fields = ["sds", "stl", "customer"]
    ordering_fields = ["created_at", "updated_at", "sds"]
    ordering = ["-created_at"]

    def get_queryset(self):
        queryset = Sale.objects.select_related("plan", "promotion", "seller").all()
        if has_any_role(self.request.user, ROLES_MANAGEMENT):
            return queryset
        return queryset.filter(seller=self.request.user)

    def get_serializer_class(self):
        if self.action in ["list", "retrieve"]:
            return SaleReadSerializer
        return SaleCreateSerializer

    def create(self, request, *args, **kwargs):
        serializer = self.get_serializer(data=request.data)
        serializer.is_valid(raise_exception=True)

        data = dict(serializer.validated_data)
        # Solo gestion puede cargar ventas a nombre de otro vendedor
        if not has_any_role(request.user, ROLES_MANAGEMENT):
            data["seller"] = request.user

        try:
            sale = create_sale(data, user=request.user)
        except ValidationError as e:
            return validation_error_response(
                e,
                default_detail="No se pudo crear la venta",
                default_code="SALE_CREATE_FAILED",
            )
        return Response(SaleReadSerializer(sale).data, status=status.HTTP_201_CREATED)

    @action(detail=True, methods=["get"])
    def history(self, request, pk=None):
        """Historial de estados de la venta"""
        sale = self.get_object()
        events = sale.status_events.order_by("-id")
        return Response(SaleStatusEventSerializer(events, many=True).data)


@extend_schema(tags=["SaleStatuses"])
class SaleStatusViewSet(
    mixins.ListModelMixin,
    mixins.RetrieveModelMixin,
    mixins.CreateModelMixin,
    viewsets.GenericViewSet,
):
    """
    ViewSet para estados de venta (solo alta y consulta)
    """
    queryset = SaleStatusEvent.objects.select_related("sale").all()
    permission_classes = [permissions.IsAuthenticated, IsManagementOrReadOnly]
    filterset_fields = ["sale", "status", "actor_id"]

    def get_serializer_class(self):
        if self.action == "create":
            return SaleStatusCreateSerializer
        return SaleStatusEventSerializer

    def create(self, request, *args, **kwargs):
        serializer = self.get_serializer(data=request.data)
        serializer.is_valid(raise_exception=True)
        try:
            event = record_sale_status(user=request.user, **serializer.validated_data)
        except ValidationError as e:
            return validation_error_response(
                e,
                default_detail="No se pudo registrar el estado",
                default_code="SALE_STATUS_CREATE_FAILED",
            )
        return Response(SaleStatusEventSerializer(event).data, status=status.HTTP_201_CREATED)

    @action(detail=False, methods=["get"], url_path="latest")
    def latest(self, request):
        """Último estado de cada venta"""
        latest_ids = (
            SaleStatusEvent.objects
            .order_by()
            .values("sale")
            .annotate(last_id=Max("id"))
            .values("last_id")
        )
        events = SaleStatusEvent.objects.filter(id__in=latest_ids).order_by("-id")
        page = self.paginate_queryset(events)
        if page is not None:
            return self.get_paginated_response(SaleStatusEventSerializer(page, many=True).data)
        return Response(SaleStatusEventSerializer(events, many=True).data)
