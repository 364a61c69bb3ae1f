from rest_framework import serializers
from .models import Cafe


class CafeSerializer(serializers.ModelSerializer):
    """Serializer for cafés."""

    class Meta:
        model = Cafe
        fields = ['id', 'name', 'location', 'created_at']
        read_only_fields = ['id', 'created_at']
