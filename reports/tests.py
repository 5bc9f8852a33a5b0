"""
Tests for history search and order/production exports.
"""
import csv
import io
import pytest
from datetime import date
from openpyxl import load_workbook
from rest_framework import status

from orders.models import CustomerOrder, OrderStatus
from production.services import record_acceptance, record_production
from reports.services import order_rows, production_rows, search_orders, search_productions

pytestmark = pytest.mark.django_db


@pytest.fixture
def history():
    order = CustomerOrder.objects.create(
        customer_name='Meadow Apiaries',
        number_of_cells=10,
        delivery_date=date(2026, 5, 20),
        larvae_transfer_date=date(2026, 5, 10),
    )
    CustomerOrder.objects.create(
        customer_name='Valley Bees',
        number_of_cells=4,
        delivery_date=date(2026, 6, 2),
        larvae_transfer_date=date(2026, 5, 23),
        status=OrderStatus.READY,
    )
    graft = record_production(
        transfer_date=date(2026, 5, 10),
        larvae_transferred=20,
        cells_produced=15,
        hives_used=['H-1', 'H-4'],
        order=order,
        notes='Strong nectar flow',
    )
    record_acceptance(graft.id, 16)
    record_production(
        transfer_date=date(2026, 6, 1),
        larvae_transferred=12,
        cells_produced=9,
        hives_used=[],
    )
    return order


class TestSearch:

    @pytest.mark.parametrize('term,expected', [
        ('meadow', ['Meadow Apiaries']),
        ('2026-06', ['Valley Bees']),
        ('in_prod', ['Meadow Apiaries']),
        ('', ['Valley Bees', 'Meadow Apiaries']),
    ])
    def test_orders(self, history, term, expected):
        assert [o.customer_name for o in search_orders(term)] == expected

    @pytest.mark.parametrize('term,count', [
        ('h-4', 1),
        ('nectar', 1),
        ('2026-06-01', 1),
        ('2026', 2),
        ('nothing', 0),
        ('"', 0),
        (',', 0),
    ])
    def test_productions(self, history, term, count):
        assert search_productions(term).count() == count

    def test_non_ascii_hive(self, history):
        record_production(
            transfer_date=date(2026, 6, 5),
            larvae_transferred=8,
            cells_produced=6,
            hives_used=['Colmena Ñandú'],
        )

        assert search_productions('ñandú').count() == 1


class TestRows:

    def test_order_rows_replace_underscore(self, history):
        row = order_rows(search_orders('meadow'))[0]
        assert row[:5] == ['Meadow Apiaries', '10', '2026-05-10', '2026-05-20', 'in production']

    def test_production_rows_fill_missing(self, history):
        rows = production_rows(search_productions(''))
        assert rows[0] == ['2026-06-01', '12', 'N/A', '9', 'N/A', 'N/A']
        assert rows[1] == ['2026-05-10', '20', '16', '15', 'H-1, H-4', 'Strong nectar flow']


class TestReportAPI:

    def test_history(self, auth_client, history):
        response = auth_client.get('/api/reports/history', {'search': 'meadow'})

        assert response.status_code == status.HTTP_200_OK
        assert len(response.data['orders']) == 1
        assert response.data['productions'] == []

    def test_orders_csv(self, auth_client, history):
        response = auth_client.get('/api/reports/orders/csv')

        assert response.status_code == status.HTTP_200_OK
        assert response['Content-Type'].startswith('text/csv')
        assert 'queen-cell-orders.csv' in response['Content-Disposition']
        rows = list(csv.reader(io.StringIO(response.content.decode())))
        assert rows[0] == ['Customer', 'Cells', 'Transfer Date', 'Delivery Date', 'Status', 'Order Date']
        assert len(rows) == 3

    def test_productions_excel(self, auth_client, history):
        response = auth_client.get('/api/reports/productions/excel', {'search': 'nectar'})

        assert response.status_code == status.HTTP_200_OK
        assert 'production-records.xlsx' in response['Content-Disposition']
        ws = load_workbook(io.BytesIO(response.content)).active
        assert [c.value for c in ws[1]] == ['Transfer Date', 'Larvae', 'Accepted', 'Produced', 'Hives', 'Notes']
        assert ws.max_row == 2
        assert ws['F2'].value == 'Strong nectar flow'

    @pytest.mark.parametrize('path', ['/api/reports/orders/pdf', '/api/reports/productions/pdf/'])
    def test_pdf(self, auth_client, history, path):
        response = auth_client.get(path)

        assert response.status_code == status.HTTP_200_OK
        assert response['Content-Type'] == 'application/pdf'
        assert response.content.startswith(b'%PDF')

    def test_pdf_with_markup_characters(self, auth_client, history):
        CustomerOrder.objects.create(
            customer_name='Bees & Co <North>',
            number_of_cells=3,
            delivery_date=date(2026, 7, 1),
            larvae_transfer_date=date(2026, 6, 21),
        )

        response = auth_client.get('/api/reports/orders/pdf')

        assert response.status_code == status.HTTP_200_OK
        assert response.content.startswith(b'%PDF')

    def test_unknown_format(self, auth_client):
        response = auth_client.get('/api/reports/orders/docx')
        assert response.status_code == status.HTTP_404_NOT_FOUND

    def test_requires_authentication(self, api_client):
        response = api_client.get('/api/reports/orders/csv')
        assert response.status_code == status.HTTP_401_UNAUTHORIZED
