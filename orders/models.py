"""
Customer order models.
"""

from django.conf import settings
from django.core.validators import MinValueValidator
from django.db import models
import uuid


class OrderStatus(models.TextChoices):
    PENDING = 'pending', 'Pending'
    IN_PRODUCTION = 'in_production', 'In Production'
    READY = 'ready', 'Ready'
    DELIVERED = 'delivered', 'Delivered'
    INSUFFICIENT = 'insufficient', 'Insufficient'
    PARTIAL = 'partial', 'Partial'


class CustomerOrder(models.Model):
    """
    A customer's request for a number of queen cells on a delivery date.

    Status leaves ``pending`` only when a production is recorded against the
    order; afterwards it is advanced by hand one step at a time.
    """

    id = models.UUIDField(primary_key=True, default=uuid.uuid4, editable=False)

    customer_name = models.CharField(max_length=200, db_index=True)
    number_of_cells = models.PositiveIntegerField(
        validators=[MinValueValidator(1)],
        help_text="Queen cells requested by the customer"
    )
    delivery_date = models.DateField(db_index=True)
    larvae_transfer_date = models.DateField(
        db_index=True,
        help_text="Planned grafting date for this order's larvae"
    )
    status = models.CharField(
        max_length=20,
        choices=OrderStatus.choices,
        default=OrderStatus.PENDING,
        db_index=True
    )

    created_by = models.ForeignKey(
        settings.AUTH_USER_MODEL,
        on_delete=models.SET_NULL,
        null=True,
        blank=True,
        related_name='orders_created'
    )
    created_at = models.DateTimeField(auto_now_add=True)
    updated_at = models.DateTimeField(auto_now=True)

    class Meta:
        db_table = 'customer_orders'
        ordering = ['-created_at']
        indexes = [
            models.Index(fields=['status', 'larvae_transfer_date'], name='customer_or_status_5f1c2a_idx'),
        ]

    def __str__(self):
        return f"{self.customer_name} - {self.number_of_cells} cells ({self.get_status_display()})"
