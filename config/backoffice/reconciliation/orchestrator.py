"""
Conciliacion de estados a partir de planillas externas.

Cada lote lee una sola vez la tabla completa de correos o ventas, resuelve
cada fila por su codigo de negocio y agrega un nuevo estado cuando la
politica de transicion lo acepta. Las filas se procesan en orden y una
fila rechazada nunca corta el lote. El resultado es la cantidad de estados
agregados.
"""
from __future__ import annotations

import logging
from typing import Mapping, Sequence

from django.conf import settings

from ..models import (
    AUTOMATED_ACTOR_ID,
    SaleStatus,
    SaleStatusEvent,
    ShipmentStatus,
    ShipmentStatusEvent,
)
from .columns import SALE_COLUMNS, SHIPMENT_COLUMNS, cell, resolve_columns
from .errors import EmptyTableError
from .gateway import DjangoStatusGateway, StatusGateway
from .matching import SaleIndex, ShipmentIndex
from .policy import SALE_POLICY, SHIPMENT_POLICY

logger = logging.getLogger(__name__)

DEFAULT_SNAPSHOT_LIMIT = 100_000

Table = Sequence[Sequence[str]]


def _snapshot_limit() -> int:
    return int(getattr(settings, "RECONCILIATION_SNAPSHOT_LIMIT", DEFAULT_SNAPSHOT_LIMIT))


def _headers(table: Table) -> Sequence[str]:
    if not table:
        raise EmptyTableError()
    return table[0]


def reconcile_shipment_statuses(
    table: Table,
    overrides: Mapping[str, int | None] | None = None,
    gateway: StatusGateway | None = None,
) -> int:
    """
    Importa estados de guia desde la exportacion del correo

    Columnas: "Guia", "Estado Guia", "Ultimo Evento Nombre", "Ubicacion".
    Una guia compartida por varios correos se aplica a cada uno.

    Args:
        table: Filas de la planilla, la primera es de encabezados
        overrides: Posicion de columna por campo (shipment_key, status,
            description, location)
        gateway: Acceso a datos (por defecto el ORM)

    Returns:
        int: Cantidad de estados agregados
    """
    gateway = gateway or DjangoStatusGateway()
    columns = resolve_columns(_headers(table), SHIPMENT_COLUMNS, overrides)

    shipments = gateway.fetch_all_shipments(_snapshot_limit())
    if not shipments:
        logger.info("Sin correos registrados, no hay estados para conciliar")
        return 0
    index = ShipmentIndex(shipments)

    rows = table[1:]
    logger.info("Conciliando %s filas de correo contra %s correos", len(rows), len(index))

    count = 0
    for row_number, row in enumerate(rows, start=2):
        key = cell(row, columns["shipment_key"])
        matches = index.match(key)
        if not matches:
            logger.debug("Fila %s: guia %r sin correo", row_number, key)
            continue

        status = cell(row, columns["status"])
        if not status:
            logger.debug("Fila %s: sin estado", row_number)
            continue
        if status not in ShipmentStatus.values:
            logger.warning("Fila %s: estado de guia desconocido %r", row_number, status)
            continue

        for shipment in matches:
            proposed = ShipmentStatusEvent(
                shipment_key=key,
                shipment=shipment,
                status=status,
                description=cell(row, columns["description"]) or "",
                actor_id=AUTOMATED_ACTOR_ID,
                location=cell(row, columns["location"]) or "",
            )
            latest = gateway.get_latest_shipment_event(key)
            if SHIPMENT_POLICY.should_append(latest, proposed):
                gateway.append_shipment_event(proposed)
                count += 1

    logger.info("Conciliacion de correos: %s estados agregados", count)
    return count


def reconcile_sale_statuses(
    table: Table,
    overrides: Mapping[str, int | None] | None = None,
    gateway: StatusGateway | None = None,
) -> int:
    """
    Importa estados de venta desde la exportacion del sistema de ventas

    Columnas: "SDS" y "DESCRIPCION ESTADO" (obligatorias), "DESCRIPCION
    RECHAZOS". Los encabezados se comparan sin espacios sobrantes. Si el
    codigo SDS se repite se usa la ultima venta con ese codigo.

    Args:
        table: Filas de la planilla, la primera es de encabezados
        overrides: Posicion de columna por campo (sale_code, status, description)
        gateway: Acceso a datos (por defecto el ORM)

    Returns:
        int: Cantidad de estados agregados

    Raises:
        MissingColumnError: Si no se encuentra SDS o DESCRIPCION ESTADO
    """
    gateway = gateway or DjangoStatusGateway()
    columns = resolve_columns(_headers(table), SALE_COLUMNS, overrides, strip=True)

    sales = gateway.fetch_all_sales(_snapshot_limit())
    if not sales:
        logger.info("Sin ventas registradas, no hay estados para conciliar")
        return 0
    index = SaleIndex(sales)

    rows = table[1:]
    logger.info("Conciliando %s filas de ventas contra %s ventas", len(rows), len(index))

    count = 0
    for row_number, row in enumerate(rows, start=2):
        code = cell(row, columns["sale_code"])
        sale = index.match(code)
        if sale is None:
            logger.debug("Fila %s: SDS %r sin venta", row_number, code)
            continue

        status = cell(row, columns["status"])
        if not status:
            logger.debug("Fila %s: sin estado", row_number)
            continue
        if status not in SaleStatus.values:
            logger.warning("Fila %s: estado de venta desconocido %r", row_number, status)
            continue

        proposed = SaleStatusEvent(
            sale=sale,
            status=status,
            description=cell(row, columns["description"]) or "",
            actor_id=AUTOMATED_ACTOR_ID,
        )
        latest = gateway.get_latest_sale_event(sale.id)
        if SALE_POLICY.should_append(latest, proposed):
            gateway.append_sale_event(proposed)
            count += 1

    logger.info("Conciliacion de ventas: %s estados agregados", count)
    return count
