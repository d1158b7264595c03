"""
Views para planes y promociones
"""
from drf_spectacular.utils import extend_schema
from rest_framework import viewsets

from ..models import Plan, Promotion
from ..permissions import IsManagementOrReadOnly
from .serializers import PlanSerializer, PromotionSerializer


@extend_schema(tags=['Plans'])
class PlanViewSet(viewsets.ModelViewSet):
    """
    ViewSet para gestión de planes

    - Lectura: Usuarios autenticados
    - Escritura: Roles de gestión
    """
    queryset = Plan.objects.all()
    serializer_class = PlanSerializer
    permission_classes = [IsManagementOrReadOnly]
    filterset_fields = ["active"]
    search_fields = ["name"]
    ordering_fields = ["name", "price", "gigabytes"]


@extend_schema(tags=['Promotions'])
class PromotionViewSet(viewsets.ModelViewSet):
    """
    ViewSet para gestión de promociones

    - Lectura: Usuarios autenticados
    - Escritura: Roles de gestión
    """
    queryset = Promotion.objects.all()
    serializer_class = PromotionSerializer
    permission_classes = [IsManagementOrReadOnly]
    filterset_fields = ["active", "target_company"]
    search_fields = ["name", "target_company"]
