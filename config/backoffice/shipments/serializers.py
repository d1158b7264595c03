"""
Serializers para correos y estados de correo
"""
from rest_framework import serializers

from ..models import Shipment, ShipmentStatus, ShipmentStatusEvent


class ShipmentStatusEventSerializer(serializers.ModelSerializer):
    """Serializer de lectura para estados de correo"""
    is_automated = serializers.BooleanField(read_only=True)

    class Meta:
        model = ShipmentStatusEvent
        fields = [
            "id", "shipment_key", "shipment", "status", "description",
            "actor_id", "is_automated", "location", "created_at",
        ]
        read_only_fields = fields


class ShipmentStatusCreateSerializer(serializers.Serializer):
    """Serializer para registrar manualmente un estado de correo"""
    shipment_key = serializers.CharField(max_length=25)
    status = serializers.ChoiceField(choices=ShipmentStatus.choices)
    description = serializers.CharField(required=False, allow_blank=True, default="")
    location = serializers.CharField(required=False, allow_blank=True, default="")


class ShipmentSerializer(serializers.ModelSerializer):
    """Serializer para correos"""
    current_status = serializers.SerializerMethodField()

    class Meta:
        model = Shipment
        fields = [
            "id", "sap_id", "recipient", "contact_phone", "alternative_phone",
            "authorized_person", "address", "house_number", "between_streets",
            "neighborhood", "locality", "department", "postal_code",
            "deadline", "created_at", "created_by", "current_status",
        ]
        read_only_fields = ["created_at", "created_by", "current_status"]

    def validate_sap_id(self, value):
        return value.strip().upper()

    def get_current_status(self, obj):
        latest = (
            ShipmentStatusEvent.objects
            .filter(shipment_key=obj.sap_id)
            .order_by("-id")
            .first()
        )
        return latest.status if latest else None
