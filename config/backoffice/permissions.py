from rest_framework import permissions

from .core.constants import ROLES_ADMIN, ROLES_MANAGEMENT


def has_any_role(user, roles) -> bool:
    """El usuario pertenece a alguno de los grupos indicados (o es superusuario)"""
    if not user or not user.is_authenticated:
        return False
    if user.is_superuser:
        return True
    return user.groups.filter(name__in=roles).exists()


class HasManagementRole(permissions.BasePermission):
    """
    Permite acceso a SUPERVISOR, BACK_OFFICE, SUPERADMIN y ADMIN.
    """

    message = "Acceso denegado. Se requiere uno de los siguientes roles: " + ", ".join(ROLES_MANAGEMENT)

    def has_permission(self, request, view):
        return has_any_role(request.user, ROLES_MANAGEMENT)


class IsManagementOrReadOnly(permissions.BasePermission):
    """
    Lectura para usuarios autenticados, escritura solo para roles de gestión.
    """

    def has_permission(self, request, view):
        if request.method in permissions.SAFE_METHODS:
            return request.user.is_authenticated
        return has_any_role(request.user, ROLES_MANAGEMENT)


class IsAdminRoleOrReadOnly(permissions.BasePermission):
    """
    Lectura para usuarios autenticados, escritura para BACK_OFFICE o staff.
    """

    def has_permission(self, request, view):
        if request.method in permissions.SAFE_METHODS:
            return request.user.is_authenticated
        return request.user.is_authenticated and (
            request.user.is_staff or has_any_role(request.user, ROLES_ADMIN)
        )


class IsSellerOwnerOrManagement(permissions.BasePermission):
    """
    Un vendedor solo ve sus ventas; los roles de gestión ven todas.
    """

    def has_object_permission(self, request, view, obj):
        if has_any_role(request.user, ROLES_MANAGEMENT):
            return True

        seller_id = getattr(obj, "seller_id", None)
        if seller_id is None and hasattr(obj, "sale"):
            seller_id = obj.sale.seller_id
        return seller_id == request.user.id
