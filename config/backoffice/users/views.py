"""
Views para gestión de usuarios y roles
"""
from django.contrib.auth.models import Group, User
from drf_spectacular.utils import extend_schema
from rest_framework import permissions, viewsets
from rest_framework.decorators import action
from rest_framework.response import Response

from ..core.constants import ROLES
from ..permissions import IsAdminRoleOrReadOnly
from .serializers import RoleSerializer, UserCreateSerializer, UserMeSerializer, UserSerializer


@extend_schema(tags=['Users'])
class UserViewSet(viewsets.ModelViewSet):
    """
    ViewSet para gestión de usuarios

    - Lectura: Usuarios autenticados
    - Escritura: BACK_OFFICE o staff
    """
    queryset = User.objects.prefetch_related("groups").order_by("username")
    permission_classes = [permissions.IsAuthenticated, IsAdminRoleOrReadOnly]
    search_fields = ["username", "first_name", "last_name", "email"]

    def get_serializer_class(self):
        if self.action in ["create", "update", "partial_update"]:
            return UserCreateSerializer
        return UserSerializer

    @action(detail=False, methods=['get'], permission_classes=[permissions.IsAuthenticated])
    def me(self, request):
        """Información del usuario actual"""
        return Response(UserMeSerializer(request.user).data)

    @me.mapping.patch
    def me_patch(self, request):
        serializer = UserMeSerializer(request.user, data=request.data, partial=True)
        serializer.is_valid(raise_exception=True)
        serializer.save()
        return Response(serializer.data)


@extend_schema(tags=['Roles'])
class RoleViewSet(viewsets.ModelViewSet):
    """
    ViewSet para roles del sistema (SUPERVISOR, BACK_OFFICE, VENDEDOR, SUPERADMIN, ADMIN)
    """
    queryset = Group.objects.filter(name__in=ROLES).order_by("name")
    serializer_class = RoleSerializer
    permission_classes = [permissions.IsAuthenticated, IsAdminRoleOrReadOnly]
