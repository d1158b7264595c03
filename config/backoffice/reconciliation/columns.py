"""
Resolucion de columnas de una planilla a partir de su fila de encabezados
"""
from __future__ import annotations

from dataclasses import dataclass
from typing import Mapping, Sequence

from .errors import MissingColumnError


@dataclass(frozen=True)
class ColumnSpec:
    field: str
    label: str
    required: bool = False


# Exportacion de seguimiento del correo
SHIPMENT_COLUMNS = (
    ColumnSpec("shipment_key", "Guia"),
    ColumnSpec("status", "Estado Guia"),
    ColumnSpec("description", "Ultimo Evento Nombre"),
    ColumnSpec("location", "Ubicacion"),
)

# Exportacion del sistema de ventas
SALE_COLUMNS = (
    ColumnSpec("sale_code", "SDS", required=True),
    ColumnSpec("status", "DESCRIPCION ESTADO", required=True),
    ColumnSpec("description", "DESCRIPCION RECHAZOS"),
)


def resolve_columns(
    headers: Sequence[str],
    columns: Sequence[ColumnSpec],
    overrides: Mapping[str, int | None] | None = None,
    *,
    strip: bool = False,
) -> dict[str, int]:
    """
    Obtiene la posicion de cada campo en la planilla

    Si un encabezado se repite gana la ultima aparicion. Una posicion indicada
    en ``overrides`` reemplaza siempre a la encontrada. Los campos no
    encontrados quedan en la columna 0, salvo los obligatorios.

    Args:
        headers: Fila de encabezados
        columns: Campos esperados
        overrides: Posiciones indicadas por el usuario, por nombre de campo
        strip: Comparar los encabezados sin espacios al inicio y al final

    Returns:
        dict: Nombre de campo -> indice de columna

    Raises:
        MissingColumnError: Si falta un campo obligatorio sin posicion indicada
    """
    overrides = overrides or {}

    found: dict[str, int] = {}
    for index, header in enumerate(headers):
        value = header.strip() if strip and isinstance(header, str) else header
        for column in columns:
            if value == column.label:
                found[column.field] = index

    mapping: dict[str, int] = {}
    missing: list[str] = []
    for column in columns:
        override = overrides.get(column.field)
        if override is not None:
            mapping[column.field] = int(override)
        elif column.field in found:
            mapping[column.field] = found[column.field]
        else:
            if column.required:
                missing.append(column.label)
            mapping[column.field] = 0

    if missing:
        raise MissingColumnError(missing)
    return mapping


def cell(row: Sequence[str], index: int) -> str | None:
    """Valor de la celda o None si la fila no llega a esa columna"""
    if 0 <= index < len(row):
        return row[index]
    return None
