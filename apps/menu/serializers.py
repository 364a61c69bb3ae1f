from rest_framework import serializers
from .models import MenuItem


# =============================================================================
# Input Serializers
# =============================================================================

class MenuFilterSerializer(serializers.Serializer):
    """
    Validate query parameters for menu listing.

    Query Parameters:
        category (str): Exact category label
        search (str): Case-insensitive substring of the item name
        available (bool): Only items currently on sale
    """

    category = serializers.CharField(required=False, allow_blank=True)
    search = serializers.CharField(required=False, allow_blank=True, max_length=100)
    available = serializers.BooleanField(required=False, allow_null=True, default=None)


# =============================================================================
# Output Serializers
# =============================================================================

class MenuItemSerializer(serializers.ModelSerializer):
    """Serializer for menu items. The café always comes from the user's profile."""

    class Meta:
        model = MenuItem
        fields = [
            'id',
            'cafe',
            'name',
            'price',
            'category',
            'is_available',
            'created_at',
            'updated_at',
        ]
        read_only_fields = ['id', 'cafe', 'created_at', 'updated_at']

    def validate_name(self, value):
        value = value.strip()
        if not value:
            raise serializers.ValidationError('Name must not be blank')
        return value
