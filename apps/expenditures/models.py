from django.db import models
from django.core.validators import MinValueValidator
from django.utils import timezone
from decimal import Decimal
import uuid

from apps.orders.models import PaymentMode


class Expenditure(models.Model):
    """Money spent by the café (milk, rent, gas refill...)."""

    id = models.UUIDField(primary_key=True, default=uuid.uuid4, editable=False)
    cafe = models.ForeignKey(
        'cafes.Cafe',
        on_delete=models.CASCADE,
        related_name='expenditures'
    )
    item = models.CharField(max_length=200)
    category = models.CharField(max_length=100, blank=True)
    amount = models.DecimalField(
        max_digits=10,
        decimal_places=2,
        validators=[MinValueValidator(Decimal('0.01'))]
    )
    date = models.DateField(default=timezone.localdate)
    payment_mode = models.CharField(
        max_length=10,
        choices=PaymentMode.choices,
        default=PaymentMode.CASH
    )
    notes = models.TextField(blank=True)

    created_by = models.ForeignKey(
        'accounts.User',
        on_delete=models.SET_NULL,
        null=True,
        blank=True,
        related_name='expenditures'
    )
    created_at = models.DateTimeField(auto_now_add=True)

    class Meta:
        db_table = 'expenditures'
        indexes = [
            models.Index(fields=['cafe', 'date'], name='expenditures_cafe_date_idx'),
        ]
        ordering = ['-date', '-created_at']

    def __str__(self):
        return f"{self.item} - ₹{self.amount} ({self.date})"
