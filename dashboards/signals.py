"""
Drop the cached dashboard stats whenever a record feeding them changes.
"""

from django.db.models.signals import post_delete, post_save
from django.dispatch import receiver

from orders.models import CustomerOrder
from production.models import ProductionRecord
from stock.models import StockPackage

from .services import invalidate_stats_cache


@receiver(post_save, sender=CustomerOrder)
@receiver(post_save, sender=ProductionRecord)
@receiver(post_save, sender=StockPackage)
@receiver(post_delete, sender=CustomerOrder)
@receiver(post_delete, sender=ProductionRecord)
@receiver(post_delete, sender=StockPackage)
def dashboard_source_changed(sender, instance, **kwargs):
    invalidate_stats_cache()
