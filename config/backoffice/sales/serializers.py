"""
Serializers para ventas y estados de venta
"""
from django.contrib.auth.models import User
from rest_framework import serializers

from ..models import Plan, Promotion, Sale, SaleStatus, SaleStatusEvent


class SaleStatusEventSerializer(serializers.ModelSerializer):
    """Serializer de lectura para estados de venta"""
    is_automated = serializers.BooleanField(read_only=True)

    class Meta:
        model = SaleStatusEvent
        fields = ["id", "sale", "status", "description", "actor_id", "is_automated", "created_at"]
        read_only_fields = fields


class SaleStatusCreateSerializer(serializers.Serializer):
    """Serializer para registrar manualmente un estado de venta"""
    sale = serializers.PrimaryKeyRelatedField(queryset=Sale.objects.all())
    status = serializers.ChoiceField(choices=SaleStatus.choices)
    description = serializers.CharField(required=False, allow_blank=True, default="")


class SaleCreateSerializer(serializers.ModelSerializer):
    """Serializer para crear y editar ventas"""
    plan = serializers.PrimaryKeyRelatedField(queryset=Plan.objects.filter(active=True))
    promotion = serializers.PrimaryKeyRelatedField(
        queryset=Promotion.objects.filter(active=True),
        required=False,
        allow_null=True,
    )
    seller = serializers.PrimaryKeyRelatedField(queryset=User.objects.all(), required=False)
    back_office = serializers.PrimaryKeyRelatedField(
        queryset=User.objects.all(),
        required=False,
        allow_null=True,
    )

    class Meta:
        model = Sale
        fields = [
            "id", "sds", "stl", "chip", "customer", "seller", "back_office",
            "plan", "promotion", "shipment_sap",
        ]

    def validate_sds(self, value):
        return value.strip()


class SaleReadSerializer(serializers.ModelSerializer):
    """Serializer para leer ventas con su estado actual"""
    plan_name = serializers.CharField(source="plan.name", read_only=True)
    plan_price = serializers.DecimalField(source="plan.price", max_digits=6, decimal_places=2, read_only=True)
    promotion_name = serializers.CharField(source="promotion.name", read_only=True, default=None)
    seller_username = serializers.CharField(source="seller.username", read_only=True)
    current_status = serializers.CharField(read_only=True)

    class Meta:
        model = Sale
        fields = [
            "id", "sds", "stl", "chip", "customer", "seller", "seller_username",
            "back_office", "plan", "plan_name", "plan_price", "promotion",
            "promotion_name", "shipment_sap", "current_status",
            "created_at", "updated_at",
        ]
