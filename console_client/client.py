"""
Queen Cell Production Console API client.

Mirrors the console's data-access layer: bearer-token requests, camelCase
records on the Python side, snake_case on the wire, and a fixed retry count
for reads that covers only connection errors and server failures.
"""
import logging
import os
import time
from typing import Any, Dict, List, Optional

import requests
from dotenv import load_dotenv

from .casing import camelize, snakeify
from .errors import ApiError, AuthenticationError, ValidationError
from .token_store import TokenStore

logger = logging.getLogger(__name__)

load_dotenv()

DEFAULT_BASE_URL = 'http://localhost:8000/api'
DEFAULT_RETRIES = 3
DEFAULT_TIMEOUT = 10
RETRYABLE_METHODS = ('GET',)

EXPORT_KINDS = ('orders', 'productions')
EXPORT_FORMATS = ('csv', 'pdf', 'excel')


class ConsoleClient:
    """
    Client for the console API.

    Usage:
        client = ConsoleClient()
        client.login('operator@apiary.test', 'secret', remember_me=True)
        orders = client.get_orders()
    """

    def __init__(
        self,
        base_url: Optional[str] = None,
        token_store: Optional[TokenStore] = None,
        retries: int = DEFAULT_RETRIES,
        timeout: float = DEFAULT_TIMEOUT,
        backoff: float = 1.0,
        session: Optional[requests.Session] = None,
    ):
        self.base_url = (base_url or os.getenv('CONSOLE_API_BASE_URL', DEFAULT_BASE_URL)).rstrip('/')
        self.tokens = token_store or TokenStore()
        self.retries = retries
        self.timeout = timeout
        self.backoff = backoff
        self.session = session or requests.Session()

    # =========================================================================
    # TRANSPORT
    # =========================================================================

    def _headers(self) -> Dict[str, str]:
        headers = {'Content-Type': 'application/json', 'Accept': 'application/json'}
        token = self.tokens.access_token
        if token:
            headers['Authorization'] = f'Bearer {token}'
        return headers

    def _send(self, method: str, path: str, payload: Any = None, params: Optional[Dict] = None) -> requests.Response:
        """
        Send a request.

        Only GET is retried, up to ``self.retries`` times, and only for
        connection errors and 5xx responses. Writes are sent once.
        401/403 raise AuthenticationError immediately.
        """
        url = f"{self.base_url}/{path.lstrip('/')}"
        body = snakeify(payload) if payload is not None else None
        attempts = self.retries + 1 if method in RETRYABLE_METHODS else 1
        last_error: Optional[ApiError] = None

        for attempt in range(attempts):
            if attempt:
                time.sleep(min(self.backoff * 2 ** (attempt - 1), 30))

            try:
                response = self.session.request(
                    method,
                    url,
                    json=body,
                    params=params,
                    headers=self._headers(),
                    timeout=self.timeout,
                )
            except requests.exceptions.RequestException as e:
                logger.warning(f"{method} {url} failed (attempt {attempt + 1}): {e}")
                last_error = ApiError(f"Could not reach the console API: {e}")
                continue

            if response.status_code in (401, 403):
                if response.status_code == 401:
                    self.tokens.clear()
                raise AuthenticationError(
                    _error_message(response), response.status_code, _json_or_none(response)
                )

            if response.ok:
                return response

            last_error = ApiError(_error_message(response), response.status_code, _json_or_none(response))
            if response.status_code < 500:
                raise last_error
            logger.warning(f"{method} {url} returned {response.status_code} (attempt {attempt + 1})")

        raise last_error

    def _request(self, method: str, path: str, payload: Any = None, params: Optional[Dict] = None) -> Any:
        response = self._send(method, path, payload, params)
        if not response.content:
            return None
        return camelize(response.json())

    # =========================================================================
    # AUTH
    # =========================================================================

    def login(self, email: str, password: str, remember_me: bool = False) -> Dict:
        if not email or not password:
            raise ValidationError('email', 'Email and password are required')

        data = self._request('POST', 'auth/login', {'email': email, 'password': password})
        self.tokens.save(data['accessToken'], data.get('refreshToken'), data['user'], remember=remember_me)
        logger.info(f"Signed in as {email}")
        return data['user']

    def logout(self):
        """End the session; local tokens are dropped even if the API call fails."""
        refresh_token = self.tokens.refresh_token
        try:
            self._send('POST', 'auth/logout', {'refresh_token': refresh_token} if refresh_token else {})
        except ApiError as e:
            logger.info(f"Logout request failed, clearing local session anyway: {e}")
        finally:
            self.tokens.clear()

    def me(self) -> Dict:
        return self._request('GET', 'auth/me')

    @property
    def is_authenticated(self) -> bool:
        return self.tokens.access_token is not None

    # =========================================================================
    # ORDERS
    # =========================================================================

    def get_orders(self, status: Optional[str] = None, search: Optional[str] = None) -> List[Dict]:
        params = {key: value for key, value in (('status', status), ('search', search)) if value}
        return self._request('GET', 'orders', params=params or None)

    def get_order(self, order_id: str) -> Optional[Dict]:
        try:
            return self._request('GET', f'orders/{order_id}')
        except ApiError as e:
            if e.status_code == 404:
                return None
            raise

    def create_order(self, customer_name: str, number_of_cells: int, delivery_date, larvae_transfer_date=None) -> Dict:
        if not customer_name or not customer_name.strip():
            raise ValidationError('customer_name', 'Customer name is required')
        if number_of_cells < 1:
            raise ValidationError('number_of_cells', 'At least one cell must be ordered')

        payload = {
            'customerName': customer_name.strip(),
            'numberOfCells': number_of_cells,
            'deliveryDate': delivery_date,
        }
        if larvae_transfer_date:
            payload['larvaeTransferDate'] = larvae_transfer_date
        return self._request('POST', 'orders', payload)

    def update_order_status(self, order_id: str, status: str) -> Dict:
        return self._request('PATCH', f'orders/{order_id}/status', {'status': status})

    # =========================================================================
    # PRODUCTION
    # =========================================================================

    def get_productions(self) -> List[Dict]:
        return self._request('GET', 'productions')

    def create_production(
        self,
        transfer_date,
        larvae_transferred: int,
        cells_produced: int,
        hives_used: Optional[List[str]] = None,
        order_id: Optional[str] = None,
        notes: str = '',
    ) -> Dict:
        if larvae_transferred < 1:
            raise ValidationError('larvae_transferred', 'At least one larva must be transferred')
        if cells_produced < 0 or cells_produced > larvae_transferred:
            raise ValidationError('cells_produced', 'Must be between 0 and the larvae transferred')

        return self._request('POST', 'productions', {
            'transferDate': transfer_date,
            'larvaeTransferred': larvae_transferred,
            'cellsProduced': cells_produced,
            'hivesUsed': list(hives_used or []),
            'orderId': order_id,
            'notes': notes,
        })

    def record_acceptance(self, production_id: str, accepted_cells: int, acceptance_date=None) -> Dict:
        if accepted_cells < 0:
            raise ValidationError('accepted_cells', 'Cannot be negative')

        payload = {'acceptedCells': accepted_cells}
        if acceptance_date:
            payload['acceptanceDate'] = acceptance_date
        return self._request('PATCH', f'productions/{production_id}/acceptance', payload)

    # =========================================================================
    # STOCK
    # =========================================================================

    def get_available_stock(self) -> List[Dict]:
        return self._request('GET', 'stock')

    def get_all_stock(self) -> List[Dict]:
        return self._request('GET', 'stock/all')

    def sell_stock(self, package_id: str, customer_name: str, cells_to_sell: int) -> Dict:
        if not customer_name or not customer_name.strip():
            raise ValidationError('customer_name', 'Customer name is required')
        if cells_to_sell <= 0:
            raise ValidationError('cells_to_sell', 'Must sell at least one cell')

        return self._request('POST', 'stock/sell', {
            'packageId': package_id,
            'customerName': customer_name.strip(),
            'cellsToSell': cells_to_sell,
        })

    # =========================================================================
    # DASHBOARD & REPORTS
    # =========================================================================

    def get_dashboard(self) -> Dict:
        """Stats merged with upcoming transfers and expiring stock."""
        stats = self._request('GET', 'dashboard/stats')
        stats['upcomingTransfers'] = self._request('GET', 'dashboard/upcoming')
        stats['expiringStock'] = self._request('GET', 'dashboard/expiring')
        return stats

    def get_history(self, search: str = '') -> Dict:
        return self._request('GET', 'reports/history', params={'search': search} if search else None)

    def download_export(self, kind: str, export_format: str, search: str = '') -> bytes:
        if kind not in EXPORT_KINDS:
            raise ValidationError('kind', f"Must be one of {', '.join(EXPORT_KINDS)}")
        if export_format not in EXPORT_FORMATS:
            raise ValidationError('export_format', f"Must be one of {', '.join(EXPORT_FORMATS)}")

        response = self._send(
            'GET', f'reports/{kind}/{export_format}', params={'search': search} if search else None
        )
        return response.content


def _json_or_none(response):
    try:
        return response.json()
    except ValueError:
        return None


def _error_message(response) -> str:
    data = _json_or_none(response)
    if isinstance(data, dict):
        for key in ('error', 'detail', 'message'):
            if data.get(key):
                return str(data[key])
    return response.reason or f'HTTP {response.status_code}'
