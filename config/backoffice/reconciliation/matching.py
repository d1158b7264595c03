"""
Busqueda de los registros a los que apunta cada fila de la planilla.

Los indices se arman una vez por lote a partir de la lectura completa de la
tabla, asi cada fila se resuelve sin ir a la base de datos.
"""
from collections import defaultdict


class ShipmentIndex:
    """Correos por guia. Una guia repetida devuelve todos sus correos."""

    def __init__(self, shipments):
        self._by_key = defaultdict(list)
        for shipment in shipments:
            self._by_key[shipment.sap_id].append(shipment)

    def __len__(self):
        return sum(len(items) for items in self._by_key.values())

    def match(self, key):
        if key is None:
            return []
        return list(self._by_key.get(key, ()))


class SaleIndex:
    """Ventas por codigo SDS. Si el codigo se repite gana la ultima venta leida."""

    def __init__(self, sales):
        self._by_code = {}
        for sale in sales:
            self._by_code[sale.sds] = sale

    def __len__(self):
        return len(self._by_code)

    def match(self, code):
        if code is None:
            return None
        return self._by_code.get(code)
