"""
Serializers para gestión de usuarios y roles
"""
from django.contrib.auth.models import Group, User
from rest_framework import serializers

from ..core.constants import ROLES


class RoleSerializer(serializers.ModelSerializer):
    """Serializer para roles (grupos de Django)"""
    users_count = serializers.IntegerField(source="user_set.count", read_only=True)

    class Meta:
        model = Group
        fields = ["id", "name", "users_count"]

    def validate_name(self, value):
        name = value.strip().upper()
        if name not in ROLES:
            raise serializers.ValidationError(
                f"Rol invalido. Roles validos: {', '.join(ROLES)}"
            )
        return name


class UserSerializer(serializers.ModelSerializer):
    """Serializer básico para usuarios"""
    roles = serializers.SerializerMethodField()

    class Meta:
        model = User
        fields = ["id", "username", "email", "first_name", "last_name", "roles"]

    def get_roles(self, obj):
        return list(obj.groups.values_list("name", flat=True))


class UserCreateSerializer(serializers.ModelSerializer):
    """Serializer para crear usuarios con sus roles"""
    password = serializers.CharField(write_only=True, min_length=8)
    roles = serializers.SlugRelatedField(
        slug_field="name",
        queryset=Group.objects.filter(name__in=ROLES),
        many=True,
        required=False,
        source="groups",
    )

    class Meta:
        model = User
        fields = [
            "id", "username", "email", "first_name", "last_name",
            "password", "is_active", "roles",
        ]

    def create(self, validated_data):
        groups = validated_data.pop("groups", [])
        password = validated_data.pop("password")
        user = User.objects.create_user(password=password, **validated_data)
        if groups:
            user.groups.set(groups)
        return user

    def update(self, instance, validated_data):
        password = validated_data.pop("password", None)
        user = super().update(instance, validated_data)
        if password:
            user.set_password(password)
            user.save(update_fields=["password"])
        return user


class UserMeSerializer(serializers.ModelSerializer):
    """Serializer para perfil propio"""
    roles = serializers.SerializerMethodField()

    def get_roles(self, obj):
        return list(obj.groups.values_list("name", flat=True))

    class Meta:
        model = User
        fields = ["id", "username", "email", "first_name", "last_name", "is_active", "roles"]
        read_only_fields = ["id", "username", "is_active", "roles"]
