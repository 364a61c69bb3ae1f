from django.db import models
import uuid


class Cafe(models.Model):
    """A café (outlet) that owns a menu, orders and expenditures."""

    id = models.UUIDField(primary_key=True, default=uuid.uuid4, editable=False)
    name = models.CharField(max_length=200)
    location = models.CharField(max_length=255, blank=True)
    created_at = models.DateTimeField(auto_now_add=True)

    class Meta:
        db_table = 'cafes'
        ordering = ['name']

    def __str__(self):
        if self.location:
            return f"{self.name} – {self.location}"
        return self.name
