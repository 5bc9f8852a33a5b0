"""
Tests for dashboard stats, upcoming transfers and expiring stock.
"""
import pytest
from datetime import timedelta
from django.core.cache import cache
from django.utils import timezone
from rest_framework import status

from dashboards.services import ProductionDashboardService
from dashboards.services.production_overview import STATS_CACHE_KEY
from dashboards.tasks import refresh_dashboard_stats
from orders.models import CustomerOrder, OrderStatus
from production.services import record_acceptance, record_production
from stock.services import sweep_expired_stock

pytestmark = pytest.mark.django_db


def make_order(transfer_in_days, status=OrderStatus.PENDING, cells=10):
    today = timezone.localdate()
    return CustomerOrder.objects.create(
        customer_name=f'Customer +{transfer_in_days}',
        number_of_cells=cells,
        larvae_transfer_date=today + timedelta(days=transfer_in_days),
        delivery_date=today + timedelta(days=transfer_in_days + 10),
        status=status,
    )


class TestStats:

    def test_empty_database(self):
        stats = ProductionDashboardService().get_stats()

        assert stats == {
            'pending_orders': 0,
            'in_production': 0,
            'available_stock': 0,
            'total_produced': 0,
            'average_acceptance_rate': None,
        }

    def test_counts(self):
        make_order(3)
        make_order(4)
        order = make_order(5)
        today = timezone.localdate()

        first = record_production(
            transfer_date=today, larvae_transferred=20, cells_produced=15, order=order,
        )
        second = record_production(
            transfer_date=today - timedelta(days=40), larvae_transferred=10, cells_produced=7,
        )
        record_acceptance(first.id, 16)
        record_acceptance(second.id, 5)

        sweep_expired_stock()

        stats = ProductionDashboardService().get_stats()

        assert stats['pending_orders'] == 2
        assert stats['in_production'] == 1
        # Second batch's package expired; only the first batch's 5 extra cells count
        assert stats['available_stock'] == 5
        assert stats['total_produced'] == 22
        # (80 + 50) / 2
        assert stats['average_acceptance_rate'] == 65

    def test_writes_invalidate_cache(self):
        service = ProductionDashboardService()
        assert service.get_stats()['pending_orders'] == 0
        assert cache.get(STATS_CACHE_KEY) is not None

        make_order(2)

        assert cache.get(STATS_CACHE_KEY) is None
        assert service.get_stats()['pending_orders'] == 1

    def test_refresh_task_warms_cache(self):
        make_order(2)

        stats = refresh_dashboard_stats()

        assert stats['pending_orders'] == 1
        assert cache.get(STATS_CACHE_KEY) == stats


class TestUpcomingAndExpiring:

    def test_upcoming_window(self, settings):
        settings.DASHBOARD_UPCOMING_DAYS = 7
        soon = make_order(2)
        later = make_order(1, status=OrderStatus.PARTIAL)
        make_order(9)
        make_order(3, status=OrderStatus.DELIVERED)
        make_order(-1)

        upcoming = list(ProductionDashboardService().get_upcoming_transfers())

        assert upcoming == [later, soon]

    def test_expiring_window(self, settings):
        settings.DASHBOARD_EXPIRING_DAYS = 3
        settings.STOCK_SHELF_LIFE_DAYS = 12
        today = timezone.localdate()

        expiring = record_production(
            transfer_date=today - timedelta(days=10), larvae_transferred=10, cells_produced=4,
        )
        record_production(
            transfer_date=today, larvae_transferred=10, cells_produced=4,
        )
        record_production(
            transfer_date=today - timedelta(days=20), larvae_transferred=10, cells_produced=4,
        )

        packages = list(ProductionDashboardService().get_expiring_stock())

        assert [p.production_id for p in packages] == [expiring.id]


class TestDashboardAPI:

    def test_requires_authentication(self, api_client):
        response = api_client.get('/api/dashboard/stats')
        assert response.status_code == status.HTTP_401_UNAUTHORIZED

    def test_endpoints(self, auth_client):
        order = make_order(1)

        response = auth_client.get('/api/dashboard/stats')
        assert response.status_code == status.HTTP_200_OK
        assert response.data['pending_orders'] == 1

        response = auth_client.get('/api/dashboard/upcoming')
        assert [o['id'] for o in response.data] == [str(order.id)]

        response = auth_client.get('/api/dashboard/expiring/')
        assert response.status_code == status.HTTP_200_OK
        assert response.data == []
