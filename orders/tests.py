"""
Tests for customer orders and the status successor table.
"""
import pytest
from datetime import date
from django.contrib import admin
from rest_framework import status

from core.exceptions import InvalidStatusTransition
from orders.models import CustomerOrder, OrderStatus
from orders.services import (
    advance_order_status,
    apply_acceptance_yield,
    apply_production_yield,
    next_status,
)

pytestmark = pytest.mark.django_db


@pytest.fixture
def order(operator):
    return CustomerOrder.objects.create(
        customer_name='Meadow Apiaries',
        number_of_cells=10,
        delivery_date=date(2026, 5, 20),
        larvae_transfer_date=date(2026, 5, 10),
        created_by=operator,
    )


# =============================================================================
# STATUS RULES
# =============================================================================

class TestSuccessorTable:

    @pytest.mark.parametrize('current,expected', [
        (OrderStatus.IN_PRODUCTION, OrderStatus.READY),
        (OrderStatus.READY, OrderStatus.DELIVERED),
        (OrderStatus.PARTIAL, OrderStatus.READY),
        (OrderStatus.INSUFFICIENT, OrderStatus.IN_PRODUCTION),
        (OrderStatus.PENDING, None),
        (OrderStatus.DELIVERED, None),
    ])
    def test_next_status(self, current, expected):
        assert next_status(current) == expected

    def test_advance_to_successor(self, order):
        order.status = OrderStatus.IN_PRODUCTION
        order.save()

        advance_order_status(order.id, OrderStatus.READY)

        order.refresh_from_db()
        assert order.status == OrderStatus.READY

    def test_cannot_skip_a_state(self, order):
        order.status = OrderStatus.IN_PRODUCTION
        order.save()

        with pytest.raises(InvalidStatusTransition):
            advance_order_status(order.id, OrderStatus.DELIVERED)

        order.refresh_from_db()
        assert order.status == OrderStatus.IN_PRODUCTION

    def test_pending_cannot_be_advanced_by_hand(self, order):
        with pytest.raises(InvalidStatusTransition):
            advance_order_status(order.id, OrderStatus.IN_PRODUCTION)


class TestYieldRules:

    @pytest.mark.parametrize('cells,expected', [
        (10, OrderStatus.IN_PRODUCTION),
        (15, OrderStatus.IN_PRODUCTION),
        (4, OrderStatus.PARTIAL),
        (0, OrderStatus.INSUFFICIENT),
    ])
    def test_production_sets_pending_order(self, order, cells, expected):
        assert apply_production_yield(order, cells) is True
        order.refresh_from_db()
        assert order.status == expected

    def test_production_leaves_non_pending_order(self, order):
        order.status = OrderStatus.READY
        order.save()

        assert apply_production_yield(order, 0) is False
        order.refresh_from_db()
        assert order.status == OrderStatus.READY

    def test_acceptance_revises_order_in_production(self, order):
        order.status = OrderStatus.IN_PRODUCTION
        order.save()

        assert apply_acceptance_yield(order, 6) is True
        order.refresh_from_db()
        assert order.status == OrderStatus.PARTIAL

    def test_acceptance_ignores_delivered_order(self, order):
        order.status = OrderStatus.DELIVERED
        order.save()

        assert apply_acceptance_yield(order, 0) is False


# =============================================================================
# API
# =============================================================================

class TestOrderAPI:

    def test_requires_authentication(self, api_client):
        response = api_client.get('/api/orders')
        assert response.status_code == status.HTTP_401_UNAUTHORIZED

    def test_create_defaults_transfer_date(self, auth_client, settings):
        settings.QUEEN_CELL_LEAD_DAYS = 10

        response = auth_client.post('/api/order', {
            'customer_name': '  Hilltop Honey ',
            'number_of_cells': 12,
            'delivery_date': '2026-06-15',
        }, format='json')

        assert response.status_code == status.HTTP_201_CREATED
        assert response.data['customer_name'] == 'Hilltop Honey'
        assert response.data['larvae_transfer_date'] == '2026-06-05'
        assert response.data['status'] == 'pending'

    def test_create_keeps_explicit_transfer_date(self, auth_client):
        response = auth_client.post('/api/orders', {
            'customer_name': 'Hilltop Honey',
            'number_of_cells': 12,
            'delivery_date': '2026-06-15',
            'larvae_transfer_date': '2026-06-01',
        }, format='json')

        assert response.status_code == status.HTTP_201_CREATED
        assert response.data['larvae_transfer_date'] == '2026-06-01'

    def test_create_ignores_client_status(self, auth_client):
        response = auth_client.post('/api/orders', {
            'customer_name': 'Hilltop Honey',
            'number_of_cells': 5,
            'delivery_date': '2026-06-15',
            'status': 'delivered',
        }, format='json')

        assert response.data['status'] == 'pending'

    def test_create_rejects_zero_cells(self, auth_client):
        response = auth_client.post('/api/orders', {
            'customer_name': 'Hilltop Honey',
            'number_of_cells': 0,
            'delivery_date': '2026-06-15',
        }, format='json')

        assert response.status_code == status.HTTP_400_BAD_REQUEST
        assert 'number_of_cells' in response.data['details']

    def test_list_newest_first_and_filters(self, auth_client, order):
        newer = CustomerOrder.objects.create(
            customer_name='Valley Bees',
            number_of_cells=3,
            delivery_date=date(2026, 7, 1),
            larvae_transfer_date=date(2026, 6, 21),
            status=OrderStatus.READY,
        )

        response = auth_client.get('/api/orders')
        assert [o['id'] for o in response.data] == [str(newer.id), str(order.id)]

        response = auth_client.get('/api/orders', {'status': 'ready'})
        assert len(response.data) == 1

        response = auth_client.get('/api/order/', {'search': 'meadow'})
        assert [o['id'] for o in response.data] == [str(order.id)]

    def test_detail_and_missing(self, auth_client, order):
        response = auth_client.get(f'/api/order/{order.id}')
        assert response.status_code == status.HTTP_200_OK
        assert response.data['number_of_cells'] == 10

        response = auth_client.get('/api/orders/00000000-0000-0000-0000-000000000000')
        assert response.status_code == status.HTTP_404_NOT_FOUND
        assert response.data['error'] == 'Order not found'

    def test_patch_status_to_successor(self, auth_client, order):
        order.status = OrderStatus.PARTIAL
        order.save()

        response = auth_client.patch(f'/api/orders/{order.id}/status', {'status': 'ready'}, format='json')

        assert response.status_code == status.HTTP_200_OK
        assert response.data['status'] == 'ready'

    def test_patch_status_rejects_other_values(self, auth_client, order):
        order.status = OrderStatus.READY
        order.save()

        response = auth_client.patch(f'/api/orders/{order.id}/status', {'status': 'pending'}, format='json')

        assert response.status_code == status.HTTP_400_BAD_REQUEST
        assert response.data['code'] == 'invalid_status_transition'
        order.refresh_from_db()
        assert order.status == OrderStatus.READY


class TestOrderAdmin:

    def test_status_and_cell_count_locked_on_existing_order(self, rf, order):
        model_admin = admin.site._registry[CustomerOrder]
        request = rf.get('/')

        assert 'status' in model_admin.get_readonly_fields(request)
        assert 'number_of_cells' not in model_admin.get_readonly_fields(request)
        assert 'number_of_cells' in model_admin.get_readonly_fields(request, order)
