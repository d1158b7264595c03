"""
URL configuration for the Back Office project.

All API endpoints live under /api/ and are registered on a DRF router.
"""

from django.contrib import admin
from django.urls import include, path
from drf_spectacular.utils import extend_schema
from drf_spectacular.views import SpectacularAPIView, SpectacularSwaggerView
from rest_framework import routers
from rest_framework_simplejwt.views import TokenObtainPairView, TokenRefreshView

from backoffice.catalog.views import PlanViewSet, PromotionViewSet
from backoffice.reconciliation.views import ReconciliationViewSet
from backoffice.sales.views import SaleStatusViewSet, SaleViewSet
from backoffice.shipments.views import ShipmentStatusViewSet, ShipmentViewSet
from backoffice.users.views import RoleViewSet, UserViewSet


class CustomTokenObtainPairView(TokenObtainPairView):
    """
    View para obtener el token de acceso usando las credenciales del usuario.
    """
    @extend_schema(
        tags=['Authentication'],
        summary='Obtener token de acceso',
        description='Devuelve un par de tokens (access y refresh) para las credenciales del usuario.'
    )
    def post(self, request, *args, **kwargs):
        return super().post(request, *args, **kwargs)


class CustomTokenRefreshView(TokenRefreshView):
    """
    View para renovar el token de acceso usando el token de refresh.
    """
    @extend_schema(
        tags=['Authentication'],
        summary='Renovar token de acceso',
        description='Devuelve un nuevo token de acceso a partir del token de refresh.'
    )
    def post(self, request, *args, **kwargs):
        return super().post(request, *args, **kwargs)


router = routers.DefaultRouter()
router.register(r"users", UserViewSet, basename="users")
router.register(r"roles", RoleViewSet, basename="roles")
router.register(r"plans", PlanViewSet, basename="plans")
router.register(r"promotions", PromotionViewSet, basename="promotions")
router.register(r"shipments", ShipmentViewSet, basename="shipments")
router.register(r"shipment-statuses", ShipmentStatusViewSet, basename="shipment-statuses")
router.register(r"sales", SaleViewSet, basename="sales")
router.register(r"sale-statuses", SaleStatusViewSet, basename="sale-statuses")
router.register(r"actualizar", ReconciliationViewSet, basename="actualizar")

urlpatterns = [
    path("admin/", admin.site.urls),
    # JWT Authentication
    path("api/token/", CustomTokenObtainPairView.as_view(), name="token_obtain_pair"),
    path("api/token/refresh/", CustomTokenRefreshView.as_view(), name="token_refresh"),
    # API endpoints
    path("api/", include(router.urls)),
    # API Documentation
    path("api/schema/", SpectacularAPIView.as_view(), name="schema"),
    path(
        "api/docs/",
        SpectacularSwaggerView.as_view(url_name="schema"),
        name="swagger-ui",
    ),
]
