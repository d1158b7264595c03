"""
Comando de Django para crear los roles del sistema y sus permisos
Ejecutar con: python manage.py setup_roles
"""

from django.contrib.auth.models import Group, Permission
from django.core.management.base import BaseCommand

from backoffice.core.constants import (
    ROLE_ADMIN,
    ROLE_BACK_OFFICE,
    ROLE_SUPERADMIN,
    ROLE_SUPERVISOR,
    ROLE_VENDEDOR,
)

CATALOG_PERMISSIONS = [
    'backoffice.view_plan',
    'backoffice.add_plan',
    'backoffice.change_plan',
    'backoffice.view_promotion',
    'backoffice.add_promotion',
    'backoffice.change_promotion',
]

OPERATIONS_PERMISSIONS = [
    'backoffice.view_sale',
    'backoffice.add_sale',
    'backoffice.change_sale',
    'backoffice.view_salestatusevent',
    'backoffice.add_salestatusevent',
    'backoffice.view_shipment',
    'backoffice.add_shipment',
    'backoffice.change_shipment',
    'backoffice.view_shipmentstatusevent',
    'backoffice.add_shipmentstatusevent',
]

USER_PERMISSIONS = [
    'auth.view_user',
    'auth.add_user',
    'auth.change_user',
    'auth.view_group',
    'auth.add_group',
    'auth.change_group',
]

ROLE_PERMISSIONS = {
    ROLE_VENDEDOR: [
        'backoffice.view_plan',
        'backoffice.view_promotion',
        'backoffice.view_sale',
        'backoffice.add_sale',
        'backoffice.view_salestatusevent',
    ],
    ROLE_SUPERVISOR: CATALOG_PERMISSIONS + OPERATIONS_PERMISSIONS,
    ROLE_BACK_OFFICE: CATALOG_PERMISSIONS + OPERATIONS_PERMISSIONS + USER_PERMISSIONS,
    ROLE_ADMIN: CATALOG_PERMISSIONS + OPERATIONS_PERMISSIONS,
    ROLE_SUPERADMIN: CATALOG_PERMISSIONS + OPERATIONS_PERMISSIONS + USER_PERMISSIONS,
}


class Command(BaseCommand):
    help = 'Crea los roles del sistema (grupos) y asigna sus permisos'

    def handle(self, *args, **options):
        self.stdout.write('Configurando roles...')

        for role_name, permission_names in ROLE_PERMISSIONS.items():
            group, created = Group.objects.get_or_create(name=role_name)
            self.stdout.write(f"Rol '{role_name}' {'creado' if created else 'ya existe'}")

            group.permissions.clear()
            for permission_name in permission_names:
                app_label, codename = permission_name.split('.')
                permission = Permission.objects.filter(
                    content_type__app_label=app_label,
                    codename=codename,
                ).first()
                if permission is None:
                    self.stderr.write(f"  Permiso '{permission_name}' no encontrado")
                    continue
                group.permissions.add(permission)

            self.stdout.write(f"  {group.permissions.count()} permisos asignados")

        self.stdout.write(self.style.SUCCESS('Roles configurados'))
