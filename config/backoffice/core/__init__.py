"""
Módulo core - Funcionalidades compartidas
"""

from .constants import ROLES, ROLES_ADMIN, ROLES_ALL, ROLES_MANAGEMENT

__all__ = [
    # Roles
    'ROLES',
    'ROLES_MANAGEMENT',
    'ROLES_ADMIN',
    'ROLES_ALL',
]
