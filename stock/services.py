"""
Stock package lifecycle: creation from production surplus, the expiration
sweep and cell sales.

Sweeps and sales lock package rows with select_for_update so that
concurrent sales cannot oversell and a sale never lands on a package the
sweep is closing.
"""

import logging
from datetime import datetime, time, timedelta

from django.conf import settings
from django.db import transaction
from django.utils import timezone

from core.exceptions import InsufficientStock
from production.models import ProductionStatus
from .models import StockPackage, StockSale

logger = logging.getLogger(__name__)


def expiration_for(transfer_date):
    """End of day, STOCK_SHELF_LIFE_DAYS after the transfer."""
    last_day = transfer_date + timedelta(days=settings.STOCK_SHELF_LIFE_DAYS)
    return timezone.make_aware(
        datetime.combine(last_day, time.max),
        timezone.get_current_timezone()
    )


def create_package_for_production(production):
    """
    Create the surplus package for a freshly recorded production.

    Returns None when the production yielded nothing beyond its order.
    """
    surplus = production.surplus_cells
    if surplus <= 0:
        return None

    package = StockPackage.objects.create(
        production=production,
        total_cells=surplus,
        available_cells=surplus,
        sold_cells=0,
        origin_hives=list(production.hives_used or []),
        production_date=production.transfer_date,
        expiration_date=expiration_for(production.transfer_date),
    )
    logger.info(
        f"Stock package {package.id} created: {surplus} surplus cells "
        f"from production {production.id}, expires {package.expiration_date:%Y-%m-%d}"
    )
    return package


def expired_packages_queryset(now=None):
    now = now or timezone.now()
    return StockPackage.objects.filter(expiration_date__lt=now, is_expired=False)


def sweep_expired_stock(now=None, dry_run=False):
    """
    Close every package whose expiration date has passed.

    Unsold cells are forfeited (available -> 0) and the parent production is
    marked expired unless it already sold out. Returns the affected packages.
    """
    now = now or timezone.now()

    if dry_run:
        return list(expired_packages_queryset(now).select_related('production'))

    expired = []
    with transaction.atomic():
        packages = (
            expired_packages_queryset(now)
            .select_for_update()
            .select_related('production')
        )
        for package in packages:
            forfeited = package.available_cells
            package.forfeited_cells = forfeited
            package.available_cells = 0
            package.is_expired = True
            package.expired_at = now
            package.save(update_fields=[
                'forfeited_cells', 'available_cells', 'is_expired', 'expired_at', 'updated_at'
            ])

            production = package.production
            if forfeited > 0 and production.status != ProductionStatus.SOLD:
                production.status = ProductionStatus.EXPIRED
                production.save(update_fields=['status', 'updated_at'])

            logger.info(
                f"Stock package {package.id} expired, {forfeited} cells forfeited "
                f"(production {production.id} is {production.status})"
            )
            expired.append(package)

    return expired


def check_production_sold(package):
    """Mark the parent production sold once its whole surplus is gone."""
    production = package.production

    if (
        package.available_cells == 0
        and package.sold_cells >= package.total_cells
        and production.status != ProductionStatus.SOLD
    ):
        production.status = ProductionStatus.SOLD
        production.save(update_fields=['status', 'updated_at'])
        logger.info(f"Production {production.id} sold out ({package.sold_cells} cells)")
        return True
    return False


def sell_cells(package_id, customer_name, cells_to_sell, sold_by=None):
    """
    Sell cells from a package.

    Raises:
        StockPackage.DoesNotExist: unknown package
        InsufficientStock: more cells than are available (0 once expired)
    """
    sweep_expired_stock()

    with transaction.atomic():
        package = (
            StockPackage.objects.select_for_update(of=('self',))
            .select_related('production', 'production__order')
            .get(pk=package_id)
        )

        if package.is_past_expiration:
            raise InsufficientStock(f"Cannot sell {cells_to_sell} cells: package has expired")

        if cells_to_sell <= 0 or cells_to_sell > package.available_cells:
            raise InsufficientStock(
                f"Cannot sell {cells_to_sell} cells: {package.available_cells} available"
            )

        package.available_cells -= cells_to_sell
        package.sold_cells += cells_to_sell
        package.save(update_fields=['available_cells', 'sold_cells', 'updated_at'])

        sale = StockSale.objects.create(
            package=package,
            customer_name=customer_name,
            cells_sold=cells_to_sell,
            sold_by=sold_by,
        )
        logger.info(
            f"Sold {cells_to_sell} cells from package {package.id} to {customer_name}; "
            f"{package.available_cells} left"
        )

        check_production_sold(package)

    return package, sale
