from rest_framework import serializers
from .models import User


class UserSerializer(serializers.ModelSerializer):
    """Current user profile: identity, café and role."""

    cafe_name = serializers.CharField(source='cafe.name', read_only=True, default=None)

    class Meta:
        model = User
        fields = [
            'id',
            'email',
            'display_name',
            'cafe',
            'cafe_name',
            'role',
            'created_at',
            'last_login',
        ]
        read_only_fields = ['id', 'email', 'cafe', 'cafe_name', 'role', 'created_at', 'last_login']


class UserLoginSerializer(serializers.Serializer):
    """Serializer for user login."""

    email = serializers.EmailField(required=True)
    password = serializers.CharField(
        required=True,
        write_only=True,
        style={'input_type': 'password'}
    )


class UserMinimalSerializer(serializers.ModelSerializer):
    """Minimal user info for nested serialization."""

    display_name = serializers.SerializerMethodField()

    class Meta:
        model = User
        fields = ['id', 'email', 'display_name']
        read_only_fields = fields

    def get_display_name(self, obj):
        return obj.get_display_name()
