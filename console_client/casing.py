"""
Key conversion between the API's snake_case and the client's camelCase.

Conversion is recursive so nested records (a package's ``sales``, the
history payload) come back fully converted.
"""
import re
from datetime import date, datetime
from typing import Any

_CAMEL_BOUNDARY = re.compile(r'(?<=[a-z0-9])([A-Z])')

DATE_KEYS = {
    'deliveryDate', 'larvaeTransferDate', 'transferDate',
    'acceptanceDate', 'productionDate',
}
DATETIME_KEYS = {
    'createdAt', 'updatedAt', 'expirationDate', 'expiredAt', 'saleDate',
}


def to_camel(key: str) -> str:
    head, *rest = key.split('_')
    return head + ''.join(part[:1].upper() + part[1:] for part in rest)


def to_snake(key: str) -> str:
    return _CAMEL_BOUNDARY.sub(r'_\1', key).lower()


def camelize(value: Any) -> Any:
    """Convert keys to camelCase and parse ISO dates into date/datetime."""
    if isinstance(value, dict):
        converted = {}
        for key, item in value.items():
            new_key = to_camel(key)
            converted[new_key] = _parse_temporal(new_key, camelize(item))
        return converted
    if isinstance(value, list):
        return [camelize(item) for item in value]
    return value


def snakeify(value: Any) -> Any:
    """Convert keys to snake_case and dates to ISO strings."""
    if isinstance(value, dict):
        return {to_snake(key): snakeify(item) for key, item in value.items()}
    if isinstance(value, (list, tuple)):
        return [snakeify(item) for item in value]
    if isinstance(value, (date, datetime)):
        return value.isoformat()
    return value


def _parse_temporal(key, value):
    if not isinstance(value, str):
        return value
    if key in DATE_KEYS:
        return date.fromisoformat(value[:10])
    if key in DATETIME_KEYS:
        return datetime.fromisoformat(value.replace('Z', '+00:00'))
    return value
