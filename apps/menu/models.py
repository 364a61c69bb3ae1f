from django.db import models
from django.core.validators import MinValueValidator
from decimal import Decimal
import uuid


class MenuItem(models.Model):
    """A sellable item on a café's menu."""

    id = models.UUIDField(primary_key=True, default=uuid.uuid4, editable=False)
    cafe = models.ForeignKey(
        'cafes.Cafe',
        on_delete=models.CASCADE,
        related_name='menu_items'
    )
    name = models.CharField(max_length=200)
    price = models.DecimalField(
        max_digits=10,
        decimal_places=2,
        validators=[MinValueValidator(Decimal('0.01'))]
    )
    # Free text, e.g. "Coffee & Hot Beverages", "Maggi & Noodles"
    category = models.CharField(max_length=100, blank=True)
    is_available = models.BooleanField(default=True)

    created_at = models.DateTimeField(auto_now_add=True)
    updated_at = models.DateTimeField(auto_now=True)

    class Meta:
        db_table = 'menu_items'
        indexes = [
            models.Index(fields=['cafe', 'category'], name='menu_items_cafe_cat_idx'),
        ]
        ordering = ['category', 'name']

    def __str__(self):
        return f"{self.name} (₹{self.price})"
