"""
Servicios de negocio para Back Office
"""
import logging

from django.core.exceptions import ValidationError
from django.db import transaction

from ..models import (
    AUTOMATED_ACTOR_ID,
    Sale,
    SaleStatus,
    SaleStatusEvent,
    Shipment,
    ShipmentStatus,
    ShipmentStatusEvent,
)

logger = logging.getLogger(__name__)


def actor_id_for(user) -> str:
    """Identificador con el que un usuario firma los estados que registra"""
    if user is None or not getattr(user, "is_authenticated", False):
        return AUTOMATED_ACTOR_ID
    return str(user.pk)


def create_shipment(data: dict, user=None) -> Shipment:
    """
    Crear correo y su primer estado (INICIAL)

    Args:
        data: Campos validados del correo
        user: Usuario que realiza la acción

    Returns:
        Shipment: Correo creado
    """
    with transaction.atomic():
        shipment = Shipment.objects.create(
            created_by=user.username if user else "system",
            **data,
        )
        ShipmentStatusEvent.objects.create(
            shipment_key=shipment.sap_id,
            shipment=shipment,
            status=ShipmentStatus.INICIAL,
            description="Correo creado",
            actor_id=actor_id_for(user),
        )

    logger.info("Correo %s creado por %s", shipment.sap_id, shipment.created_by)
    return shipment


def create_sale(data: dict, user=None) -> Sale:
    """
    Crear venta y su primer estado (PENDIENTE_DE_CARGA)

    Args:
        data: Campos validados de la venta (seller opcional, por defecto el usuario)
        user: Usuario que realiza la acción

    Returns:
        Sale: Venta creada
    """
    data = dict(data)
    if "seller" not in data:
        if user is None:
            raise ValidationError("La venta requiere un vendedor")
        data["seller"] = user

    with transaction.atomic():
        sale = Sale.objects.create(**data)
        SaleStatusEvent.objects.create(
            sale=sale,
            status=SaleStatus.PENDIENTE_DE_CARGA,
            description="Venta registrada",
            actor_id=actor_id_for(user),
        )

    logger.info("Venta %s (SDS %s) creada", sale.id, sale.sds)
    return sale


def record_shipment_status(shipment_key: str, status: str, user=None, description: str = "", location: str = "") -> ShipmentStatusEvent:
    """
    Registrar manualmente un estado de correo

    Raises:
        ValidationError: Si el estado no existe o la guia no corresponde a ningun correo
    """
    if status not in ShipmentStatus.values:
        raise ValidationError(f"Estado de correo invalido: {status}")

    shipment = Shipment.objects.filter(sap_id=shipment_key).order_by("-id").first()
    if shipment is None:
        raise ValidationError(f"No existe un correo con guia {shipment_key}")

    return ShipmentStatusEvent.objects.create(
        shipment_key=shipment_key,
        shipment=shipment,
        status=status,
        description=description or "",
        location=location or "",
        actor_id=actor_id_for(user),
    )


def record_sale_status(sale: Sale, status: str, user=None, description: str = "") -> SaleStatusEvent:
    """
    Registrar manualmente un estado de venta

    Raises:
        ValidationError: Si el estado no existe
    """
    if status not in SaleStatus.values:
        raise ValidationError(f"Estado de venta invalido: {status}")

    return SaleStatusEvent.objects.create(
        sale=sale,
        status=status,
        description=description or "",
        actor_id=actor_id_for(user),
    )
