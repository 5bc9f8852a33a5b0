"""
Tests for production recording, derived figures and acceptance.
"""
import pytest
from datetime import date, datetime, time, timedelta
from django.contrib import admin
from django.utils import timezone
from rest_framework import status

from orders.models import CustomerOrder, OrderStatus
from production.models import ProductionRecord, calculate_acceptance_rate
from production.services import record_acceptance, record_production
from stock.models import StockPackage

pytestmark = pytest.mark.django_db


@pytest.fixture
def order(operator):
    return CustomerOrder.objects.create(
        customer_name='Meadow Apiaries',
        number_of_cells=10,
        delivery_date=date(2026, 5, 20),
        larvae_transfer_date=date(2026, 5, 10),
    )


def production_payload(**overrides):
    payload = {
        'transfer_date': '2026-05-10',
        'larvae_transferred': 20,
        'cells_produced': 15,
        'hives_used': ['H-1', 'H-4'],
        'notes': 'Strong nectar flow',
    }
    payload.update(overrides)
    return payload


# =============================================================================
# DERIVED FIGURES
# =============================================================================

class TestAcceptanceRate:

    @pytest.mark.parametrize('accepted,larvae,expected', [
        (16, 20, 80),
        (2, 3, 67),
        (1, 8, 13),
        (0, 5, 0),
        (None, 20, None),
    ])
    def test_rounding(self, accepted, larvae, expected):
        assert calculate_acceptance_rate(accepted, larvae) == expected


class TestRecordProduction:

    def test_surplus_over_order_becomes_stock(self, order):
        production = record_production(
            transfer_date=date(2026, 5, 10),
            larvae_transferred=20,
            cells_produced=15,
            hives_used=['H-1'],
            order=order,
        )

        assert production.extra_cells == 5
        package = StockPackage.objects.get(production=production)
        assert package.total_cells == 5
        assert package.available_cells == 5
        assert package.sold_cells == 0
        assert package.origin_hives == ['H-1']
        assert package.production_date == date(2026, 5, 10)

        order.refresh_from_db()
        assert order.status == OrderStatus.IN_PRODUCTION

    def test_expiration_is_end_of_day_after_shelf_life(self, settings):
        settings.STOCK_SHELF_LIFE_DAYS = 12

        production = record_production(
            transfer_date=date(2026, 5, 10),
            larvae_transferred=10,
            cells_produced=4,
        )

        expected = timezone.make_aware(datetime.combine(date(2026, 5, 22), time.max))
        assert production.stock_package.expiration_date == expected

    def test_unlinked_production_is_all_surplus(self):
        production = record_production(
            transfer_date=date(2026, 5, 10),
            larvae_transferred=10,
            cells_produced=8,
        )

        assert production.extra_cells == 0
        assert production.stock_package.total_cells == 8

    def test_short_batch_sets_partial_without_stock(self, order):
        production = record_production(
            transfer_date=date(2026, 5, 10),
            larvae_transferred=20,
            cells_produced=6,
            order=order,
        )

        order.refresh_from_db()
        assert order.status == OrderStatus.PARTIAL
        assert not StockPackage.objects.filter(production=production).exists()

    def test_empty_batch_sets_insufficient(self, order):
        record_production(
            transfer_date=date(2026, 5, 10),
            larvae_transferred=20,
            cells_produced=0,
            order=order,
        )

        order.refresh_from_db()
        assert order.status == OrderStatus.INSUFFICIENT
        assert StockPackage.objects.count() == 0

    def test_second_batch_leaves_order_status(self, order):
        order.status = OrderStatus.READY
        order.save()

        record_production(
            transfer_date=date(2026, 5, 10),
            larvae_transferred=20,
            cells_produced=0,
            order=order,
        )

        order.refresh_from_db()
        assert order.status == OrderStatus.READY


class TestRecordAcceptance:

    @pytest.fixture
    def production(self, order):
        return record_production(
            transfer_date=date(2026, 5, 10),
            larvae_transferred=20,
            cells_produced=15,
            order=order,
        )

    def test_records_once(self, production):
        record_acceptance(production.id, 16, date(2026, 5, 14))

        production.refresh_from_db()
        assert production.accepted_cells == 16
        assert production.acceptance_rate == 80

    def test_defaults_acceptance_date_to_today(self, production):
        record_acceptance(production.id, 12)

        production.refresh_from_db()
        assert production.acceptance_date == timezone.localdate()

    def test_low_acceptance_revises_order(self, production, order):
        record_acceptance(production.id, 7)

        order.refresh_from_db()
        assert order.status == OrderStatus.PARTIAL


# =============================================================================
# API
# =============================================================================

class TestProductionAPI:

    def test_create_and_list(self, auth_client, order):
        response = auth_client.post(
            '/api/productions',
            production_payload(order_id=str(order.id)),
            format='json',
        )

        assert response.status_code == status.HTTP_201_CREATED
        assert response.data['extra_cells'] == 5
        assert response.data['status'] == 'active'
        assert response.data['acceptance_rate'] is None
        assert response.data['stock_package_id'] is not None

        response = auth_client.get('/api/productions')
        assert len(response.data) == 1
        assert response.data[0]['hives_used'] == ['H-1', 'H-4']
        assert response.data[0]['order_id'] == order.id

    @pytest.mark.parametrize('overrides,field', [
        ({'cells_produced': 21}, 'cells_produced'),
        ({'larvae_transferred': 0}, 'larvae_transferred'),
        ({'cells_produced': -1}, 'cells_produced'),
        ({'order_id': '00000000-0000-0000-0000-000000000000'}, 'order_id'),
    ])
    def test_create_validation(self, auth_client, overrides, field):
        response = auth_client.post('/api/productions', production_payload(**overrides), format='json')

        assert response.status_code == status.HTTP_400_BAD_REQUEST
        assert field in response.data['details']
        assert ProductionRecord.objects.count() == 0

    def test_detail_missing(self, auth_client):
        response = auth_client.get('/api/productions/00000000-0000-0000-0000-000000000000')
        assert response.status_code == status.HTTP_404_NOT_FOUND

    def test_acceptance_endpoint(self, auth_client):
        production = record_production(
            transfer_date=date(2026, 5, 10), larvae_transferred=20, cells_produced=15,
        )
        url = f'/api/productions/{production.id}/acceptance'

        response = auth_client.patch(url, {'accepted_cells': 16}, format='json')
        assert response.status_code == status.HTTP_200_OK
        assert response.data['acceptance_rate'] == 80

        response = auth_client.patch(url, {'accepted_cells': 10}, format='json')
        assert response.status_code == status.HTTP_400_BAD_REQUEST
        assert response.data['code'] == 'acceptance_already_recorded'

        production.refresh_from_db()
        assert production.accepted_cells == 16

    def test_acceptance_above_larvae_rejected(self, auth_client):
        production = record_production(
            transfer_date=date(2026, 5, 10), larvae_transferred=20, cells_produced=15,
        )

        response = auth_client.patch(
            f'/api/productions/{production.id}/acceptance',
            {'accepted_cells': 21},
            format='json',
        )

        assert response.status_code == status.HTTP_400_BAD_REQUEST
        production.refresh_from_db()
        assert production.accepted_cells is None


class TestProductionAdmin:

    def test_recorded_figures_read_only(self, rf):
        model_admin = admin.site._registry[ProductionRecord]
        request = rf.get('/')

        readonly = model_admin.get_readonly_fields(request)
        for field in ('cells_produced', 'accepted_cells', 'order', 'status'):
            assert field in readonly
        assert model_admin.has_add_permission(request) is False
