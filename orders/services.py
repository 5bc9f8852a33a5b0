"""
Order status rules.

Manual advancement follows a fixed successor table. Recording a production
(or its acceptance count) sets the status from the batch yield.
"""

import logging

from django.db import transaction

from core.exceptions import InvalidStatusTransition
from .models import CustomerOrder, OrderStatus

logger = logging.getLogger(__name__)


# Single forward step per status; pending and delivered have none.
ORDER_STATUS_SUCCESSORS = {
    OrderStatus.IN_PRODUCTION: OrderStatus.READY,
    OrderStatus.READY: OrderStatus.DELIVERED,
    OrderStatus.PARTIAL: OrderStatus.READY,
    OrderStatus.INSUFFICIENT: OrderStatus.IN_PRODUCTION,
}

# Statuses an acceptance count may still revise
YIELD_REVISABLE_STATUSES = (
    OrderStatus.IN_PRODUCTION,
    OrderStatus.PARTIAL,
    OrderStatus.INSUFFICIENT,
)


def next_status(current):
    """Return the successor of ``current`` or None when there is none."""
    return ORDER_STATUS_SUCCESSORS.get(current)


def status_for_yield(cells, number_of_cells):
    if cells >= number_of_cells:
        return OrderStatus.IN_PRODUCTION
    if cells > 0:
        return OrderStatus.PARTIAL
    return OrderStatus.INSUFFICIENT


@transaction.atomic
def advance_order_status(order_id, requested_status):
    """
    Move an order to its successor status.

    Raises:
        CustomerOrder.DoesNotExist: unknown order
        InvalidStatusTransition: requested status is not the successor
    """
    order = CustomerOrder.objects.select_for_update().get(pk=order_id)
    expected = next_status(order.status)

    if expected is None or requested_status != expected:
        raise InvalidStatusTransition(
            f"Cannot change order status from '{order.status}' to '{requested_status}'"
        )

    previous = order.status
    order.status = expected
    order.save(update_fields=['status', 'updated_at'])
    logger.info(f"Order {order.id} advanced {previous} -> {order.status}")
    return order


def apply_production_yield(order, cells):
    """
    Set a pending order's status from a newly recorded production.
    Returns True when the order changed.
    """
    if order.status != OrderStatus.PENDING:
        return False
    return _set_yield_status(order, cells)


def apply_acceptance_yield(order, accepted_cells):
    """Re-evaluate an order in production using the accepted cell count."""
    if order.status not in YIELD_REVISABLE_STATUSES:
        return False
    return _set_yield_status(order, accepted_cells)


def _set_yield_status(order, cells):
    new_status = status_for_yield(cells, order.number_of_cells)
    if new_status == order.status:
        return False

    previous = order.status
    order.status = new_status
    order.save(update_fields=['status', 'updated_at'])
    logger.info(
        f"Order {order.id} {previous} -> {new_status} "
        f"({cells}/{order.number_of_cells} cells)"
    )
    return True
