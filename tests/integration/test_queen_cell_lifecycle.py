"""
Queen Cell Lifecycle Test

Walks one order from creation to delivery through the public API, with the
surplus of its production batch sold to walk-in customers.

SCENARIO:
=========
- Customer orders 10 cells, delivery in 20 days
- Graft of 20 larvae yields 15 cells -> order in production, 5 surplus cells
- Colonies accept 16 larvae (80%)
- Surplus sold in two sales -> production sold
- Order advanced ready -> delivered

A second batch with no order is left unsold and expires.
"""

import pytest
from datetime import timedelta
from django.utils import timezone
from rest_framework import status

from stock.models import StockPackage

pytestmark = pytest.mark.django_db


# =============================================================================
# HELPERS
# =============================================================================

def login(api_client, operator):
    response = api_client.post(
        '/api/auth/login',
        {'email': operator.email, 'password': 'testpass123'},
        format='json',
    )
    assert response.status_code == status.HTTP_200_OK
    api_client.credentials(HTTP_AUTHORIZATION=f"Bearer {response.data['access_token']}")
    return response.data


# =============================================================================
# LIFECYCLE
# =============================================================================

class TestQueenCellLifecycle:

    def test_order_to_delivery_with_surplus_sales(self, api_client, operator):
        login(api_client, operator)
        today = timezone.localdate()

        # Step 1: order
        response = api_client.post('/api/orders', {
            'customer_name': 'Meadow Apiaries',
            'number_of_cells': 10,
            'delivery_date': (today + timedelta(days=20)).isoformat(),
        }, format='json')
        assert response.status_code == status.HTTP_201_CREATED
        order_id = response.data['id']
        assert response.data['larvae_transfer_date'] == (today + timedelta(days=10)).isoformat()

        # Pending orders have no manual next step
        response = api_client.patch(f'/api/orders/{order_id}/status', {'status': 'in_production'}, format='json')
        assert response.status_code == status.HTTP_400_BAD_REQUEST

        # Step 2: production batch
        response = api_client.post('/api/productions', {
            'transfer_date': today.isoformat(),
            'larvae_transferred': 20,
            'cells_produced': 15,
            'hives_used': ['H-1', 'H-2'],
            'order_id': order_id,
        }, format='json')
        assert response.status_code == status.HTTP_201_CREATED
        production_id = response.data['id']
        assert response.data['extra_cells'] == 5

        response = api_client.get(f'/api/order/{order_id}')
        assert response.data['status'] == 'in_production'

        # Step 3: acceptance
        response = api_client.patch(
            f'/api/productions/{production_id}/acceptance', {'accepted_cells': 16}, format='json'
        )
        assert response.data['acceptance_rate'] == 80

        # Step 4: surplus on sale
        response = api_client.get('/api/stock')
        assert len(response.data) == 1
        package = response.data[0]
        assert package['total_cells'] == 5
        assert package['origin_hives'] == ['H-1', 'H-2']

        response = api_client.get('/api/dashboard/stats')
        assert response.data['available_stock'] == 5
        assert response.data['in_production'] == 1
        assert response.data['average_acceptance_rate'] == 80

        for customer, cells in (('Valley Bees', 2), ('Hilltop Honey', 3)):
            response = api_client.post('/api/stock/sell', {
                'package_id': package['id'],
                'customer_name': customer,
                'cells_to_sell': cells,
            }, format='json')
            assert response.status_code == status.HTTP_201_CREATED

        # Nothing left to sell
        response = api_client.post('/api/stock/sell', {
            'package_id': package['id'],
            'customer_name': 'Late Buyer',
            'cells_to_sell': 1,
        }, format='json')
        assert response.status_code == status.HTTP_400_BAD_REQUEST

        response = api_client.get(f'/api/productions/{production_id}')
        assert response.data['status'] == 'sold'
        assert api_client.get('/api/stock').data == []

        all_stock = api_client.get('/api/stock/all').data
        assert all_stock[0]['sold_cells'] == 5
        assert len(all_stock[0]['sales']) == 2

        # Step 5: delivery
        for next_status in ('ready', 'delivered'):
            response = api_client.patch(
                f'/api/orders/{order_id}/status', {'status': next_status}, format='json'
            )
            assert response.status_code == status.HTTP_200_OK
            assert response.data['status'] == next_status

        response = api_client.patch(f'/api/orders/{order_id}/status', {'status': 'ready'}, format='json')
        assert response.status_code == status.HTTP_400_BAD_REQUEST

        # History and export reflect the run
        response = api_client.get('/api/reports/history', {'search': 'meadow'})
        assert response.data['orders'][0]['status'] == 'delivered'

        response = api_client.get('/api/reports/orders/csv')
        assert b'Meadow Apiaries,10' in response.content
        assert b'delivered' in response.content

    def test_unsold_surplus_expires(self, api_client, operator, settings):
        settings.STOCK_SHELF_LIFE_DAYS = 12
        login(api_client, operator)
        old_transfer = timezone.localdate() - timedelta(days=13)

        response = api_client.post('/api/productions', {
            'transfer_date': old_transfer.isoformat(),
            'larvae_transferred': 10,
            'cells_produced': 4,
        }, format='json')
        production_id = response.data['id']
        package_id = response.data['stock_package_id']

        # Recorded late: already past its shelf life
        assert api_client.get('/api/stock').data == []

        package = StockPackage.objects.get(pk=package_id)
        assert package.is_expired
        assert package.available_cells == 0
        assert package.forfeited_cells == 4
        assert package.sold_cells + package.forfeited_cells == package.total_cells

        response = api_client.get(f'/api/productions/{production_id}')
        assert response.data['status'] == 'expired'

        response = api_client.post('/api/stock/sell', {
            'package_id': package_id,
            'customer_name': 'Valley Bees',
            'cells_to_sell': 1,
        }, format='json')
        assert response.status_code == status.HTTP_400_BAD_REQUEST
