"""
Tests for stock packages: expiration sweep, sales and sold-out detection.
"""
import pytest
from datetime import date, timedelta
from unittest import mock

from django.contrib import admin
from django.core.management import call_command
from django.utils import timezone
from rest_framework import status

from core.exceptions import InsufficientStock
from orders.models import CustomerOrder
from production.models import ProductionStatus
from production.services import record_production
from stock.models import StockPackage, StockSale
from stock.services import sell_cells, sweep_expired_stock
from stock.tasks import expire_stock_packages

pytestmark = pytest.mark.django_db


def make_package(cells=6, transfer_date=None, order_cells=None):
    """Record a production whose surplus is ``cells`` and return its package."""
    transfer_date = transfer_date or timezone.localdate()
    order = None
    if order_cells:
        order = CustomerOrder.objects.create(
            customer_name='Meadow Apiaries',
            number_of_cells=order_cells,
            delivery_date=transfer_date + timedelta(days=10),
            larvae_transfer_date=transfer_date,
        )
    produced = cells + (order_cells or 0)
    production = record_production(
        transfer_date=transfer_date,
        larvae_transferred=produced + 5,
        cells_produced=produced,
        hives_used=['H-2'],
        order=order,
    )
    return production.stock_package


@pytest.fixture
def package():
    return make_package(cells=6, order_cells=10)


@pytest.fixture
def stale_package():
    return make_package(cells=4, transfer_date=timezone.localdate() - timedelta(days=30))


# =============================================================================
# EXPIRATION SWEEP
# =============================================================================

class TestSweep:

    def test_expired_package_forfeits_remaining_cells(self, stale_package):
        expired = sweep_expired_stock()

        assert [p.id for p in expired] == [stale_package.id]
        stale_package.refresh_from_db()
        assert stale_package.available_cells == 0
        assert stale_package.is_expired is True
        assert stale_package.forfeited_cells == 4
        assert stale_package.expired_at is not None
        assert stale_package.production.status == ProductionStatus.EXPIRED

    def test_fresh_package_untouched(self, package):
        assert sweep_expired_stock() == []

        package.refresh_from_db()
        assert package.available_cells == 6
        assert package.is_expired is False

    def test_sold_production_keeps_status(self, package):
        sell_cells(package.id, 'Valley Bees', 6)
        later = package.expiration_date + timedelta(minutes=1)

        sweep_expired_stock(now=later)

        package.refresh_from_db()
        assert package.is_expired is True
        assert package.forfeited_cells == 0
        assert package.production.status == ProductionStatus.SOLD

    def test_sweep_runs_once_per_package(self, stale_package):
        sweep_expired_stock()
        assert sweep_expired_stock() == []

    def test_dry_run_changes_nothing(self, stale_package):
        packages = sweep_expired_stock(dry_run=True)

        assert len(packages) == 1
        stale_package.refresh_from_db()
        assert stale_package.available_cells == 4
        assert stale_package.is_expired is False

    def test_task_reports_counts(self, stale_package):
        result = expire_stock_packages()

        assert result == {'expired_packages': 1, 'forfeited_cells': 4}

    def test_management_command(self, stale_package, capsys):
        call_command('expire_stock', '--dry-run')
        stale_package.refresh_from_db()
        assert stale_package.is_expired is False

        call_command('expire_stock')
        stale_package.refresh_from_db()
        assert stale_package.is_expired is True
        assert '1 package(s) expired' in capsys.readouterr().out


# =============================================================================
# SALES
# =============================================================================

class TestSellCells:

    def test_sale_moves_cells(self, package):
        package, sale = sell_cells(package.id, 'Valley Bees', 4)

        assert package.available_cells == 2
        assert package.sold_cells == 4
        assert package.available_cells + package.sold_cells == package.total_cells
        assert sale.cells_sold == 4
        assert package.production.status == ProductionStatus.ACTIVE

    def test_oversell_rejected(self, package):
        with pytest.raises(InsufficientStock):
            sell_cells(package.id, 'Valley Bees', 7)

        package.refresh_from_db()
        assert package.available_cells == 6
        assert StockSale.objects.count() == 0

    def test_selling_out_marks_production_sold(self, package):
        sell_cells(package.id, 'Valley Bees', 2)
        sell_cells(package.id, 'Hilltop Honey', 4)

        package.refresh_from_db()
        assert package.available_cells == 0
        assert package.production.status == ProductionStatus.SOLD
        assert package.sales.count() == 2

    def test_expired_package_cannot_be_sold(self, stale_package):
        with pytest.raises(InsufficientStock):
            sell_cells(stale_package.id, 'Valley Bees', 1)

        stale_package.refresh_from_db()
        assert stale_package.is_expired is True
        assert stale_package.sold_cells == 0

    def test_sale_racing_expiry_rejected_under_lock(self, stale_package):
        # Sweep has not closed the package yet when the sale takes the lock
        with mock.patch('stock.services.sweep_expired_stock'):
            with pytest.raises(InsufficientStock):
                sell_cells(stale_package.id, 'Valley Bees', 1)

        stale_package.refresh_from_db()
        assert stale_package.available_cells == 4
        assert stale_package.sold_cells == 0
        assert StockSale.objects.count() == 0

    def test_sold_out_after_order_resized(self, package):
        CustomerOrder.objects.filter(pk=package.production.order_id).update(number_of_cells=8)

        sell_cells(package.id, 'Valley Bees', 6)

        package.refresh_from_db()
        assert package.available_cells == 0
        assert package.production.status == ProductionStatus.SOLD


class TestStockAdmin:

    def test_package_counts_read_only(self, rf):
        model_admin = admin.site._registry[StockPackage]
        request = rf.get('/')

        readonly = model_admin.get_readonly_fields(request)
        for field in ('total_cells', 'available_cells', 'sold_cells', 'is_expired', 'expiration_date'):
            assert field in readonly
        assert model_admin.has_add_permission(request) is False


# =============================================================================
# API
# =============================================================================

class TestStockAPI:

    def test_available_excludes_expired(self, auth_client, package, stale_package):
        response = auth_client.get('/api/stock')

        assert response.status_code == status.HTTP_200_OK
        assert [p['id'] for p in response.data] == [str(package.id)]
        assert response.data[0]['production_id'] == str(package.production_id)

    def test_all_includes_expired(self, auth_client, package, stale_package):
        response = auth_client.get('/api/stock/all')

        ids = {p['id'] for p in response.data}
        assert ids == {str(package.id), str(stale_package.id)}
        expired = next(p for p in response.data if p['id'] == str(stale_package.id))
        assert expired['is_expired'] is True
        assert expired['available_cells'] == 0

    def test_sell(self, auth_client, package, operator):
        response = auth_client.post('/api/stock/sell', {
            'package_id': str(package.id),
            'customer_name': 'Valley Bees',
            'cells_to_sell': 3,
        }, format='json')

        assert response.status_code == status.HTTP_201_CREATED
        assert response.data['available_cells'] == 3
        assert response.data['sales'][0]['customer_name'] == 'Valley Bees'
        assert StockSale.objects.get().sold_by == operator

    @pytest.mark.parametrize('overrides', [
        {'cells_to_sell': 0},
        {'cells_to_sell': 99},
        {'customer_name': '   '},
    ])
    def test_sell_rejections(self, auth_client, package, overrides):
        payload = {
            'package_id': str(package.id),
            'customer_name': 'Valley Bees',
            'cells_to_sell': 3,
        }
        payload.update(overrides)

        response = auth_client.post('/api/stock/sell', payload, format='json')

        assert response.status_code == status.HTTP_400_BAD_REQUEST
        assert 'error' in response.data
        package.refresh_from_db()
        assert package.available_cells == 6

    def test_sell_unknown_package(self, auth_client):
        response = auth_client.post('/api/stock/sell', {
            'package_id': '00000000-0000-0000-0000-000000000000',
            'customer_name': 'Valley Bees',
            'cells_to_sell': 1,
        }, format='json')

        assert response.status_code == status.HTTP_404_NOT_FOUND
