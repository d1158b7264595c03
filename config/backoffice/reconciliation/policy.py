"""
Reglas para decidir si un estado importado se agrega al historial
"""
from __future__ import annotations

from dataclasses import dataclass

from ..models import AUTOMATED_ACTOR_ID, SaleStatus, ShipmentStatus


@dataclass(frozen=True)
class TransitionPolicy:
    """
    Politica de transicion para un tipo de registro

    ``open_statuses`` son los estados iniciales desde los que cualquier estado
    importado se acepta. Fuera de ellos solo se reemplaza un estado automatico
    por otro automatico distinto; los estados cargados a mano no se pisan.
    """

    open_statuses: frozenset[str]

    def should_append(self, latest, proposed) -> bool:
        if latest is None:
            return False

        if latest.status in self.open_statuses:
            return True

        if latest.actor_id == AUTOMATED_ACTOR_ID and proposed.actor_id == AUTOMATED_ACTOR_ID:
            return latest.status != proposed.status

        return False


SHIPMENT_POLICY = TransitionPolicy(
    open_statuses=frozenset({ShipmentStatus.INICIAL.value}),
)

SALE_POLICY = TransitionPolicy(
    open_statuses=frozenset({
        SaleStatus.PENDIENTE_DE_CARGA.value,
        SaleStatus.CREADO_DOCU_OK.value,
    }),
)
