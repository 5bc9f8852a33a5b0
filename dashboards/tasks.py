"""
Dashboard Celery tasks.

Keeps the stats cache warm so the landing page loads without aggregating.
"""
from celery import shared_task
import logging

logger = logging.getLogger(__name__)


@shared_task
def refresh_dashboard_stats():
    """
    Recompute and cache dashboard stats.

    Scheduled via Celery Beat to run every 15 minutes.
    """
    from dashboards.services import ProductionDashboardService
    from stock.services import sweep_expired_stock

    sweep_expired_stock()
    stats = ProductionDashboardService().get_stats(use_cache=False)
    logger.info(f"Dashboard stats refreshed: {stats}")
    return stats
