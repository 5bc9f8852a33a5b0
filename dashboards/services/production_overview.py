"""
Production Dashboard Service

Aggregates the figures shown on the console's landing page:
- Order and stock counters
- Average acceptance rate across batches
- Larvae transfers coming up
- Stock about to expire
"""

from datetime import timedelta
from decimal import Decimal, ROUND_HALF_UP

from django.conf import settings
from django.core.cache import cache
from django.db.models import Sum
from django.utils import timezone

from orders.models import CustomerOrder, OrderStatus
from production.models import ProductionRecord
from stock.models import StockPackage
from stock.services import sweep_expired_stock

STATS_CACHE_KEY = 'dashboard:stats'
STATS_CACHE_TIMEOUT = 15 * 60

# Orders whose cells are not yet ready still have a transfer to plan for.
UNFINISHED_ORDER_STATUSES = (
    OrderStatus.PENDING,
    OrderStatus.IN_PRODUCTION,
    OrderStatus.PARTIAL,
    OrderStatus.INSUFFICIENT,
)


class ProductionDashboardService:
    """Service for dashboard widgets"""

    def get_stats(self, use_cache=True):
        """
        Counters for the stat cards.

        Returns:
            dict: pending_orders, in_production, available_stock,
                  total_produced, average_acceptance_rate
        """
        if use_cache:
            cached = cache.get(STATS_CACHE_KEY)
            if cached is not None:
                return cached

        stats = self.compute_stats()
        cache.set(STATS_CACHE_KEY, stats, timeout=STATS_CACHE_TIMEOUT)
        return stats

    def compute_stats(self):
        pending_orders = CustomerOrder.objects.filter(status=OrderStatus.PENDING).count()
        in_production = CustomerOrder.objects.filter(status=OrderStatus.IN_PRODUCTION).count()

        available_stock = StockPackage.objects.filter(
            is_expired=False
        ).aggregate(total=Sum('available_cells'))['total'] or 0

        total_produced = ProductionRecord.objects.aggregate(
            total=Sum('cells_produced')
        )['total'] or 0

        return {
            'pending_orders': pending_orders,
            'in_production': in_production,
            'available_stock': available_stock,
            'total_produced': total_produced,
            'average_acceptance_rate': self.get_average_acceptance_rate(),
        }

    def get_average_acceptance_rate(self):
        """Mean of per-batch acceptance rates, None until one is recorded."""
        rates = [
            production.acceptance_rate
            for production in ProductionRecord.objects.filter(accepted_cells__isnull=False)
        ]
        if not rates:
            return None
        mean = Decimal(sum(rates)) / Decimal(len(rates))
        return int(mean.quantize(Decimal('1'), rounding=ROUND_HALF_UP))

    def get_upcoming_transfers(self, days=None):
        days = settings.DASHBOARD_UPCOMING_DAYS if days is None else days
        today = timezone.localdate()

        return CustomerOrder.objects.filter(
            status__in=UNFINISHED_ORDER_STATUSES,
            larvae_transfer_date__gte=today,
            larvae_transfer_date__lte=today + timedelta(days=days),
        ).order_by('larvae_transfer_date', 'created_at')

    def get_expiring_stock(self, days=None):
        days = settings.DASHBOARD_EXPIRING_DAYS if days is None else days
        sweep_expired_stock()

        return StockPackage.objects.filter(
            is_expired=False,
            available_cells__gt=0,
            expiration_date__lte=timezone.now() + timedelta(days=days),
        ).prefetch_related('sales').order_by('expiration_date')


def invalidate_stats_cache():
    cache.delete(STATS_CACHE_KEY)
