"""
Acceso a datos que usa la conciliacion de estados.

``StatusGateway`` es el contrato; ``DjangoStatusGateway`` lo implementa con el
ORM. Cada alta se confirma por separado: si el lote falla a mitad de camino
los estados ya agregados quedan guardados.
"""
from __future__ import annotations

from typing import Protocol, runtime_checkable

from ..models import Sale, SaleStatusEvent, Shipment, ShipmentStatusEvent


@runtime_checkable
class StatusGateway(Protocol):
    """Contrato de persistencia para la conciliacion"""

    def fetch_all_shipments(self, page_size: int) -> list[Shipment]: ...

    def fetch_all_sales(self, page_size: int) -> list[Sale]: ...

    def get_latest_shipment_event(self, shipment_key: str) -> ShipmentStatusEvent | None: ...

    def get_latest_sale_event(self, sale_id: int) -> SaleStatusEvent | None: ...

    def append_shipment_event(self, event: ShipmentStatusEvent) -> ShipmentStatusEvent: ...

    def append_sale_event(self, event: SaleStatusEvent) -> SaleStatusEvent: ...


class DjangoStatusGateway:
    """Implementacion sobre el ORM de Django"""

    def fetch_all_shipments(self, page_size: int) -> list[Shipment]:
        return list(Shipment.objects.order_by("id")[:page_size])

    def fetch_all_sales(self, page_size: int) -> list[Sale]:
        return list(Sale.objects.order_by("id")[:page_size])

    def get_latest_shipment_event(self, shipment_key: str) -> ShipmentStatusEvent | None:
        return (
            ShipmentStatusEvent.objects
            .filter(shipment_key=shipment_key)
            .order_by("-id")
            .first()
        )

    def get_latest_sale_event(self, sale_id: int) -> SaleStatusEvent | None:
        return (
            SaleStatusEvent.objects
            .filter(sale_id=sale_id)
            .order_by("-id")
            .first()
        )

    def append_shipment_event(self, event: ShipmentStatusEvent) -> ShipmentStatusEvent:
        event.save(force_insert=True)
        return event

    def append_sale_event(self, event: SaleStatusEvent) -> SaleStatusEvent:
        event.save(force_insert=True)
        return event
