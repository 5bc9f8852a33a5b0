"""
Stock Celery tasks.

The expiration sweep also runs on every stock read; the scheduled run keeps
production statuses current when nobody is looking at the stock pages.
"""
from celery import shared_task
import logging

from .services import sweep_expired_stock

logger = logging.getLogger(__name__)


@shared_task
def expire_stock_packages():
    """
    Forfeit unsold cells of packages past their expiration date.

    Scheduled via Celery Beat to run hourly.
    """
    logger.info("Starting stock expiration sweep...")

    expired = sweep_expired_stock()
    forfeited = sum(package.forfeited_cells for package in expired)

    logger.info(f"Stock sweep complete: {len(expired)} package(s) expired, {forfeited} cells forfeited")
    return {
        'expired_packages': len(expired),
        'forfeited_cells': forfeited,
    }
