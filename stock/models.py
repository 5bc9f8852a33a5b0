"""
Surplus stock models.

A StockPackage holds the cells a production yielded beyond its order's
share. Cells can be sold from it until its expiration date; whatever is left
at that point is forfeited by the expiration sweep.
"""

from django.conf import settings
from django.core.validators import MinValueValidator
from django.db import models
from django.utils import timezone
import uuid


class StockPackage(models.Model):
    id = models.UUIDField(primary_key=True, default=uuid.uuid4, editable=False)

    production = models.OneToOneField(
        'production.ProductionRecord',
        on_delete=models.CASCADE,
        related_name='stock_package'
    )

    total_cells = models.PositiveIntegerField()
    available_cells = models.PositiveIntegerField()
    sold_cells = models.PositiveIntegerField(default=0)

    origin_hives = models.JSONField(default=list, blank=True)
    production_date = models.DateField()
    expiration_date = models.DateTimeField(
        db_index=True,
        help_text="End of the last sellable day"
    )

    is_expired = models.BooleanField(default=False, db_index=True)
    expired_at = models.DateTimeField(
        null=True,
        blank=True,
        help_text="When the expiration sweep closed this package"
    )
    forfeited_cells = models.PositiveIntegerField(
        default=0,
        help_text="Unsold cells zeroed at expiration"
    )

    created_at = models.DateTimeField(auto_now_add=True)
    updated_at = models.DateTimeField(auto_now=True)

    class Meta:
        db_table = 'stock_packages'
        ordering = ['-created_at']
        indexes = [
            models.Index(fields=['is_expired', 'expiration_date'], name='stock_packa_is_expi_3b8e41_idx'),
        ]

    def __str__(self):
        return f"{self.available_cells}/{self.total_cells} cells from {self.production_date}"

    @property
    def is_past_expiration(self):
        return timezone.now() > self.expiration_date


class StockSale(models.Model):
    id = models.UUIDField(primary_key=True, default=uuid.uuid4, editable=False)

    package = models.ForeignKey(
        StockPackage,
        on_delete=models.CASCADE,
        related_name='sales'
    )
    customer_name = models.CharField(max_length=200)
    cells_sold = models.PositiveIntegerField(validators=[MinValueValidator(1)])
    sale_date = models.DateTimeField(default=timezone.now, db_index=True)

    sold_by = models.ForeignKey(
        settings.AUTH_USER_MODEL,
        on_delete=models.SET_NULL,
        null=True,
        blank=True,
        related_name='stock_sales'
    )
    created_at = models.DateTimeField(auto_now_add=True)

    class Meta:
        db_table = 'stock_sales'
        ordering = ['sale_date']

    def __str__(self):
        return f"{self.cells_sold} cells to {self.customer_name}"
