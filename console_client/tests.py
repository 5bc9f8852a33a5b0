"""
Tests for the console API client. HTTP is mocked; no server is needed.
"""
import json
from datetime import date, datetime, timezone
from unittest import mock

import pytest
import requests

from console_client import (
    ApiError,
    AuthenticationError,
    ConsoleClient,
    DEFAULT_RETRIES,
    TokenStore,
    ValidationError,
)
from console_client.casing import camelize, snakeify, to_camel, to_snake


def make_response(status_code=200, data=None, content=None):
    response = requests.Response()
    response.status_code = status_code
    response.reason = 'OK' if status_code < 400 else 'Error'
    if content is not None:
        response._content = content
    else:
        response._content = json.dumps(data).encode() if data is not None else b''
    return response


@pytest.fixture
def store(tmp_path):
    return TokenStore(tmp_path / 'session.json')


@pytest.fixture
def session():
    return mock.MagicMock()


@pytest.fixture
def client(store, session):
    return ConsoleClient(
        base_url='http://console.test/api/',
        token_store=store,
        backoff=0,
        session=session,
    )


# =============================================================================
# KEY CONVERSION
# =============================================================================

class TestCasing:

    @pytest.mark.parametrize('snake,camel', [
        ('customer_name', 'customerName'),
        ('larvae_transfer_date', 'larvaeTransferDate'),
        ('id', 'id'),
    ])
    def test_key_conversion(self, snake, camel):
        assert to_camel(snake) == camel
        assert to_snake(camel) == snake

    def test_camelize_nested_sales_and_dates(self):
        package = camelize({
            'production_id': 'p1',
            'production_date': '2026-05-10',
            'expiration_date': '2026-05-22T23:59:59.999999Z',
            'sales': [{'customer_name': 'Valley Bees', 'sale_date': '2026-05-12T10:00:00Z'}],
        })

        assert package['productionId'] == 'p1'
        assert package['productionDate'] == date(2026, 5, 10)
        assert package['expirationDate'].tzinfo is not None
        assert package['sales'][0]['customerName'] == 'Valley Bees'
        assert package['sales'][0]['saleDate'] == datetime(2026, 5, 12, 10, tzinfo=timezone.utc)

    def test_snakeify_serialises_dates(self):
        assert snakeify({'deliveryDate': date(2026, 6, 15), 'hivesUsed': ['H-1']}) == {
            'delivery_date': '2026-06-15',
            'hives_used': ['H-1'],
        }


# =============================================================================
# TRANSPORT
# =============================================================================

class TestTransport:

    def test_bearer_token_and_url(self, client, store, session):
        store.save('access-1', 'refresh-1', {'id': 'u1'})
        session.request.return_value = make_response(data=[])

        client.get_orders(status='pending')

        method, url = session.request.call_args.args
        kwargs = session.request.call_args.kwargs
        assert (method, url) == ('GET', 'http://console.test/api/orders')
        assert kwargs['headers']['Authorization'] == 'Bearer access-1'
        assert kwargs['params'] == {'status': 'pending'}

    def test_retries_then_succeeds(self, client, session):
        session.request.side_effect = [
            make_response(502, {'error': 'Bad gateway'}),
            requests.exceptions.ConnectionError('reset'),
            make_response(data={'id': 'o1', 'customer_name': 'Meadow'}),
        ]

        order = client.get_order('o1')

        assert order == {'id': 'o1', 'customerName': 'Meadow'}
        assert session.request.call_count == 3

    def test_gives_up_after_retry_count(self, client, session):
        session.request.return_value = make_response(500, {'error': 'Boom'})

        with pytest.raises(ApiError) as exc:
            client.get_productions()

        assert exc.value.status_code == 500
        assert str(exc.value) == '[500] Boom'
        assert session.request.call_count == DEFAULT_RETRIES + 1

    @pytest.mark.parametrize('status_code', [401, 403])
    def test_authorization_failures_not_retried(self, client, session, status_code):
        session.request.return_value = make_response(status_code, {'error': 'Not allowed'})

        with pytest.raises(AuthenticationError):
            client.get_all_stock()

        assert session.request.call_count == 1

    def test_unauthorized_clears_session(self, client, store, session):
        store.save('stale', 'refresh', {'id': 'u1'}, remember=True)
        session.request.return_value = make_response(401, {'error': 'Token expired'})

        with pytest.raises(AuthenticationError):
            client.me()

        assert not client.is_authenticated
        assert not store.path.exists()

    def test_missing_order_returns_none(self, client, session):
        session.request.return_value = make_response(404, {'error': 'Order not found'})

        assert client.get_order('missing') is None
        assert session.request.call_count == 1

    def test_client_errors_not_retried(self, client, session):
        session.request.return_value = make_response(400, {'error': 'Cannot sell 9 cells'})

        with pytest.raises(ApiError) as exc:
            client.sell_stock('pkg', 'Valley', 9)

        assert exc.value.status_code == 400
        assert session.request.call_count == 1

    def test_timed_out_sale_sent_once(self, client, session):
        session.request.side_effect = [
            requests.exceptions.ReadTimeout('read timed out'),
            make_response(201, {'id': 'pkg', 'available_cells': 1}),
        ]

        with pytest.raises(ApiError):
            client.sell_stock('pkg', 'Valley', 4)

        assert session.request.call_count == 1

    @pytest.mark.parametrize('call', [
        lambda c: c.create_order('Meadow', 10, date(2026, 6, 15)),
        lambda c: c.update_order_status('o1', 'in_production'),
        lambda c: c.record_acceptance('p1', 8),
    ])
    def test_writes_not_retried_on_server_error(self, client, session, call):
        session.request.return_value = make_response(502, {'error': 'Bad gateway'})

        with pytest.raises(ApiError):
            call(client)

        assert session.request.call_count == 1


# =============================================================================
# OPERATIONS
# =============================================================================

class TestOperations:

    def test_login_remember_me_persists(self, client, store, session):
        session.request.return_value = make_response(data={
            'access_token': 'a', 'refresh_token': 'r',
            'user': {'id': 'u1', 'email': 'op@apiary.test', 'name': 'Op', 'role': 'operator'},
        })

        user = client.login('op@apiary.test', 'pw', remember_me=True)

        assert user['email'] == 'op@apiary.test'
        assert TokenStore(store.path).access_token == 'a'

    def test_login_without_remember_me_is_memory_only(self, client, store, session):
        session.request.return_value = make_response(data={
            'access_token': 'a', 'refresh_token': 'r', 'user': {'id': 'u1'},
        })

        client.login('op@apiary.test', 'pw')

        assert client.is_authenticated
        assert not store.path.exists()

    def test_logout_clears_even_when_request_fails(self, client, store, session):
        store.save('a', 'r', {'id': 'u1'}, remember=True)
        session.request.side_effect = requests.exceptions.ConnectionError('down')

        client.logout()

        assert not client.is_authenticated
        assert session.request.call_args.kwargs['json'] == {'refresh_token': 'r'}

    def test_create_order_sends_snake_case(self, client, session):
        session.request.return_value = make_response(201, {'id': 'o1', 'status': 'pending'})

        client.create_order(' Meadow ', 10, date(2026, 6, 15))

        assert session.request.call_args.kwargs['json'] == {
            'customer_name': 'Meadow',
            'number_of_cells': 10,
            'delivery_date': '2026-06-15',
        }

    @pytest.mark.parametrize('kwargs', [
        {'customer_name': 'Valley', 'cells_to_sell': 0},
        {'customer_name': '  ', 'cells_to_sell': 2},
    ])
    def test_sell_validated_before_dispatch(self, client, session, kwargs):
        with pytest.raises(ValidationError):
            client.sell_stock('pkg', **kwargs)

        session.request.assert_not_called()

    def test_create_production_validation(self, client, session):
        with pytest.raises(ValidationError) as exc:
            client.create_production(date(2026, 5, 10), 10, 11)

        assert exc.value.field == 'cells_produced'
        session.request.assert_not_called()

    def test_dashboard_merges_widgets(self, client, session):
        session.request.side_effect = [
            make_response(data={'pending_orders': 2, 'average_acceptance_rate': None}),
            make_response(data=[{'id': 'o1', 'larvae_transfer_date': '2026-05-10'}]),
            make_response(data=[]),
        ]

        dashboard = client.get_dashboard()

        assert dashboard['pendingOrders'] == 2
        assert dashboard['upcomingTransfers'][0]['larvaeTransferDate'] == date(2026, 5, 10)
        assert dashboard['expiringStock'] == []

    def test_download_export(self, client, session):
        session.request.return_value = make_response(content=b'%PDF-1.4')

        assert client.download_export('orders', 'pdf') == b'%PDF-1.4'
        assert session.request.call_args.args[1] == 'http://console.test/api/reports/orders/pdf'

        with pytest.raises(ValidationError):
            client.download_export('stock', 'csv')


class TestTokenStore:

    def test_corrupt_file_ignored(self, tmp_path):
        path = tmp_path / 'session.json'
        path.write_text('{not json')

        store = TokenStore(path)

        assert store.load() is None
        assert not path.exists()
