"""
API error types and the project-wide DRF exception handler.

Every error response carries an ``error`` message so the console can show it
in a toast without inspecting the payload shape. Field-level validation
messages are kept under ``details``.
"""

import logging

from rest_framework import exceptions, status
from rest_framework.views import exception_handler

logger = logging.getLogger(__name__)


class DomainError(exceptions.APIException):
    """A request that is well-formed but breaks a production rule."""
    status_code = status.HTTP_400_BAD_REQUEST
    default_detail = 'The requested change is not allowed'
    default_code = 'domain_error'


class InvalidStatusTransition(DomainError):
    default_detail = 'Invalid order status transition'
    default_code = 'invalid_status_transition'


class AcceptanceAlreadyRecorded(DomainError):
    default_detail = 'Accepted cells have already been recorded for this production'
    default_code = 'acceptance_already_recorded'


class InsufficientStock(DomainError):
    default_detail = 'Not enough cells available in this stock package'
    default_code = 'insufficient_stock'


def _first_message(detail):
    """Pull a single human readable message out of a DRF error detail."""
    if isinstance(detail, dict):
        for value in detail.values():
            return _first_message(value)
        return ''
    if isinstance(detail, (list, tuple)):
        return _first_message(detail[0]) if detail else ''
    return str(detail)


def api_exception_handler(exc, context):
    response = exception_handler(exc, context)
    if response is None:
        return None

    data = response.data
    if isinstance(data, dict) and set(data.keys()) == {'detail'}:
        payload = {'error': str(data['detail'])}
    else:
        payload = {'error': _first_message(data), 'details': data}

    if isinstance(exc, DomainError):
        payload['code'] = exc.get_codes()
        logger.info(f"Rejected request to {context['request'].path}: {payload['error']}")

    response.data = payload
    return response
