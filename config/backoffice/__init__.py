"""
Back Office App - Gestion de ventas de lineas y correos
Ventas, correos, planes, promociones y conciliacion de estados desde planillas
"""

# Version de la app
__version__ = '1.0.0'

APP_NAME = 'Back Office'
APP_DESCRIPTION = 'Sistema de back office para ventas de lineas y seguimiento de correos'
