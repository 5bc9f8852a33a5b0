"""
Production batch models.

A ProductionRecord is one larvae transfer (graft) into one or more hives and
the queen cells it yielded.
"""

from decimal import Decimal, ROUND_HALF_UP

from django.conf import settings
from django.core.validators import MinValueValidator
from django.db import models
import uuid


def calculate_acceptance_rate(accepted_cells, larvae_transferred):
    """Whole-number percentage of larvae accepted, or None before acceptance."""
    if accepted_cells is None or not larvae_transferred:
        return None
    rate = Decimal(accepted_cells * 100) / Decimal(larvae_transferred)
    return int(rate.quantize(Decimal('1'), rounding=ROUND_HALF_UP))


class ProductionStatus(models.TextChoices):
    ACTIVE = 'active', 'Active'
    SOLD = 'sold', 'Sold'
    EXPIRED = 'expired', 'Expired'


class ProductionRecord(models.Model):
    id = models.UUIDField(primary_key=True, default=uuid.uuid4, editable=False)

    transfer_date = models.DateField(db_index=True)
    larvae_transferred = models.PositiveIntegerField(
        validators=[MinValueValidator(1)],
        help_text="Larvae grafted into cell cups"
    )
    cells_produced = models.PositiveIntegerField(
        help_text="Queen cells the batch yielded"
    )
    accepted_cells = models.PositiveIntegerField(
        null=True,
        blank=True,
        help_text="Cells the colonies accepted; recorded once"
    )
    acceptance_date = models.DateField(null=True, blank=True)
    hives_used = models.JSONField(
        default=list,
        blank=True,
        help_text="Identifiers of the hives the larvae went into"
    )

    order = models.ForeignKey(
        'orders.CustomerOrder',
        on_delete=models.SET_NULL,
        null=True,
        blank=True,
        related_name='productions'
    )
    notes = models.TextField(blank=True)
    status = models.CharField(
        max_length=20,
        choices=ProductionStatus.choices,
        default=ProductionStatus.ACTIVE,
        db_index=True
    )

    created_by = models.ForeignKey(
        settings.AUTH_USER_MODEL,
        on_delete=models.SET_NULL,
        null=True,
        blank=True,
        related_name='productions_created'
    )
    created_at = models.DateTimeField(auto_now_add=True)
    updated_at = models.DateTimeField(auto_now=True)

    class Meta:
        db_table = 'production_records'
        ordering = ['-transfer_date', '-created_at']

    def __str__(self):
        return f"Transfer {self.transfer_date} - {self.cells_produced}/{self.larvae_transferred} cells"

    @property
    def order_cells(self):
        """Cells reserved for the linked order (0 when unlinked)."""
        return self.order.number_of_cells if self.order_id else 0

    @property
    def extra_cells(self):
        if not self.order_id:
            return 0
        return max(0, self.cells_produced - self.order.number_of_cells)

    @property
    def surplus_cells(self):
        """Cells available for stock: everything beyond the order's share."""
        return max(0, self.cells_produced - self.order_cells)

    @property
    def acceptance_rate(self):
        return calculate_acceptance_rate(self.accepted_cells, self.larvae_transferred)
