"""
Constantes de roles del sistema.

Cada rol es un Group de Django con el mismo nombre.
"""

ROLE_SUPERVISOR = "SUPERVISOR"
ROLE_BACK_OFFICE = "BACK_OFFICE"
ROLE_VENDEDOR = "VENDEDOR"
ROLE_SUPERADMIN = "SUPERADMIN"
ROLE_ADMIN = "ADMIN"

ROLES = (
    ROLE_SUPERVISOR,
    ROLE_BACK_OFFICE,
    ROLE_VENDEDOR,
    ROLE_SUPERADMIN,
    ROLE_ADMIN,
)

# Roles con permisos de gestion (importaciones, catalogos, usuarios)
ROLES_MANAGEMENT = (ROLE_SUPERVISOR, ROLE_BACK_OFFICE, ROLE_SUPERADMIN, ROLE_ADMIN)

# Solo BACK_OFFICE administra usuarios y roles
ROLES_ADMIN = (ROLE_BACK_OFFICE,)

ROLES_ALL = ROLES
