"""
Serializers para las importaciones de estados
"""
from rest_framework import serializers


class ShipmentStatusUploadSerializer(serializers.Serializer):
    """Planilla de seguimiento del correo con posiciones de columna opcionales"""
    file = serializers.FileField()
    guia = serializers.IntegerField(required=False, allow_null=True, min_value=0)
    estado = serializers.IntegerField(required=False, allow_null=True, min_value=0)
    descripcion = serializers.IntegerField(required=False, allow_null=True, min_value=0)
    ubicacion = serializers.IntegerField(required=False, allow_null=True, min_value=0)

    def column_overrides(self):
        data = self.validated_data
        return {
            "shipment_key": data.get("guia"),
            "status": data.get("estado"),
            "description": data.get("descripcion"),
            "location": data.get("ubicacion"),
        }


class SaleStatusUploadSerializer(serializers.Serializer):
    """Planilla del sistema de ventas con posiciones de columna opcionales"""
    file = serializers.FileField()
    sds = serializers.IntegerField(required=False, allow_null=True, min_value=0)
    estado = serializers.IntegerField(required=False, allow_null=True, min_value=0)
    descripcion = serializers.IntegerField(required=False, allow_null=True, min_value=0)

    def column_overrides(self):
        data = self.validated_data
        return {
            "sale_code": data.get("sds"),
            "status": data.get("estado"),
            "description": data.get("descripcion"),
        }
