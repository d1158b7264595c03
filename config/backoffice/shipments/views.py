"""
Views para gestión de correos
"""
from django.core.exceptions import ValidationError
from drf_spectacular.utils import extend_schema
from rest_framework import mixins, permissions, status, viewsets
from rest_framework.decorators import action
from rest_framework.response import Response

from ..core.api_responses import error_response, validation_error_response
from ..core.services import create_shipment, record_shipment_status
from ..models import Shipment, ShipmentStatusEvent
from ..permissions import IsManagementOrReadOnly
from .serializers import (
    ShipmentSerializer,
    ShipmentStatusCreateSerializer,
    ShipmentStatusEventSerializer,
)


@extend_schema(tags=['Shipments'])
class ShipmentViewSet(viewsets.ModelViewSet):
    """
    ViewSet para gestión de correos

    - Lectura: Usuarios autenticados
    - Escritura: Roles de gestión
    - Al crear un correo se registra el estado INICIAL
    """
    queryset = Shipment.objects.all()
    serializer_class = ShipmentSerializer
    permission_classes = [permissions.IsAuthenticated, IsManagementOrReadOnly]
    filterset_fields = ["sap_id", "locality", "department"]
    search_fields = ["sap_id", "recipient"]
    ordering_fields = ["created_at", "deadline"]

    def perform_create(self, serializer):
        serializer.instance = create_shipment(serializer.validated_data, user=self.request.user)

    @action(detail=True, methods=['get'])
    def history(self, request, pk=None):
        """Historial de estados de la guía del correo"""
        shipment = self.get_object()
        events = ShipmentStatusEvent.objects.filter(shipment_key=shipment.sap_id).order_by("-id")
        return Response(ShipmentStatusEventSerializer(events, many=True).data)


@extend_schema(tags=['ShipmentStatuses'])
class ShipmentStatusViewSet(
    mixins.ListModelMixin,
    mixins.RetrieveModelMixin,
    mixins.CreateModelMixin,
    viewsets.GenericViewSet,
):
    """
    ViewSet para estados de correo (solo alta y consulta)
    """
    queryset = ShipmentStatusEvent.objects.all()
    permission_classes = [permissions.IsAuthenticated, IsManagementOrReadOnly]
    filterset_fields = ["shipment_key", "status", "actor_id"]

    def get_serializer_class(self):
        if self.action == "create":
            return ShipmentStatusCreateSerializer
        return ShipmentStatusEventSerializer

    def create(self, request, *args, **kwargs):
        serializer = self.get_serializer(data=request.data)
        serializer.is_valid(raise_exception=True)
        try:
            event = record_shipment_status(user=request.user, **serializer.validated_data)
        except ValidationError as e:
            return validation_error_response(
                e,
                default_detail="No se pudo registrar el estado",
                default_code="SHIPMENT_STATUS_CREATE_FAILED",
            )
        return Response(ShipmentStatusEventSerializer(event).data, status=status.HTTP_201_CREATED)

    @action(detail=False, methods=['get'])
    def latest(self, request):
        """Último estado de una guía (?shipment_key=)"""
        shipment_key = request.query_params.get("shipment_key")
        if not shipment_key:
            return error_response(
                detail="Se requiere shipment_key",
                code="MISSING_SHIPMENT_KEY",
                http_status=status.HTTP_400_BAD_REQUEST,
            )

        event = ShipmentStatusEvent.objects.filter(shipment_key=shipment_key).order_by("-id").first()
        if event is None:
            return error_response(
                detail="La guía no tiene estados",
                code="SHIPMENT_STATUS_NOT_FOUND",
                http_status=status.HTTP_404_NOT_FOUND,
            )
        return Response(ShipmentStatusEventSerializer(event).data)
