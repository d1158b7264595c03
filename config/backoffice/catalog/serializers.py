"""
Serializers para planes y promociones
"""
from rest_framework import serializers

from ..models import Plan, Promotion


class PlanSerializer(serializers.ModelSerializer):
    """Serializer para planes"""

    class Meta:
        model = Plan
        fields = [
            "id", "name", "price", "gigabytes", "calls", "messages",
            "benefits", "active", "created_at",
        ]
        read_only_fields = ["created_at"]

    def validate_price(self, value):
        if value <= 0:
            raise serializers.ValidationError("El precio debe ser mayor a cero")
        return value


class PromotionSerializer(serializers.ModelSerializer):
    """Serializer para promociones"""

    class Meta:
        model = Promotion
        fields = ["id", "name", "percentage", "target_company", "active", "created_at"]
        read_only_fields = ["created_at"]
