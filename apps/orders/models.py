from django.db import models
from django.core.validators import MinValueValidator
from decimal import Decimal
import uuid


class PaymentMode(models.TextChoices):
    """Payment instrument recorded on a persisted order row (one per row)."""
    CASH = 'Cash', 'Cash'
    UPI = 'UPI', 'UPI'


class Order(models.Model):
    """A submitted (finalized) order."""

    id = models.UUIDField(primary_key=True, default=uuid.uuid4, editable=False)
    cafe = models.ForeignKey(
        'cafes.Cafe',
        on_delete=models.CASCADE,
        related_name='orders'
    )

    # Daily running number per café, restarts at 1 every business day
    order_number = models.PositiveIntegerField()
    business_date = models.DateField()

    payment_mode = models.CharField(max_length=10, choices=PaymentMode.choices)
    total_amount = models.DecimalField(
        max_digits=10,
        decimal_places=2,
        validators=[MinValueValidator(Decimal('0.01'))]
    )

    submitted_by = models.ForeignKey(
        'accounts.User',
        on_delete=models.SET_NULL,
        null=True,
        blank=True,
        related_name='submitted_orders'
    )
    created_at = models.DateTimeField(auto_now_add=True)

    class Meta:
        db_table = 'orders'
        constraints = [
            models.UniqueConstraint(
                fields=['cafe', 'business_date', 'order_number'],
                name='orders_unique_daily_number',
            ),
        ]
        indexes = [
            models.Index(fields=['cafe', 'created_at'], name='orders_cafe_created_idx'),
            models.Index(fields=['cafe', 'payment_mode'], name='orders_cafe_mode_idx'),
        ]
        ordering = ['-created_at']

    def __str__(self):
        return f"#{self.order_number} {self.business_date} - ₹{self.total_amount} ({self.payment_mode})"


class OrderItem(models.Model):
    """A line of a submitted order. Name and price are copied at submission time."""

    id = models.BigAutoField(primary_key=True)
    order = models.ForeignKey(
        Order,
        on_delete=models.CASCADE,
        related_name='items'
    )
    # Null for custom items typed in at the till
    menu_item = models.ForeignKey(
        'menu.MenuItem',
        on_delete=models.SET_NULL,
        null=True,
        blank=True,
        related_name='order_items'
    )
    item_name = models.CharField(max_length=200)
    quantity = models.PositiveIntegerField(validators=[MinValueValidator(1)])
    price = models.DecimalField(max_digits=10, decimal_places=2)

    class Meta:
        db_table = 'order_items'
        ordering = ['id']

    def __str__(self):
        return f"{self.item_name} x{self.quantity}"

    @property
    def subtotal(self):
        return self.price * self.quantity
