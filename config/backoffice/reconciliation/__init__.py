"""
Conciliacion de estados de correos y ventas desde planillas externas
"""

from .errors import (
    EmptyTableError,
    MissingColumnError,
    ReconciliationError,
    UnsupportedFileError,
)
from .orchestrator import reconcile_sale_statuses, reconcile_shipment_statuses
from .tables import parse_uploaded_table

__all__ = [
    'ReconciliationError',
    'EmptyTableError',
    'MissingColumnError',
    'UnsupportedFileError',
    'reconcile_shipment_statuses',
    'reconcile_sale_statuses',
    'parse_uploaded_table',
]
