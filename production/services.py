"""
Production recording and acceptance.

Recording a batch is a single transaction: the record itself, the linked
order's status, and the surplus stock package.
"""

import logging

from django.db import transaction
from django.utils import timezone
from rest_framework import serializers

from core.exceptions import AcceptanceAlreadyRecorded
from orders.models import CustomerOrder
from orders.services import apply_acceptance_yield, apply_production_yield
from stock.services import create_package_for_production
from .models import ProductionRecord

logger = logging.getLogger(__name__)


@transaction.atomic
def record_production(*, created_by=None, **fields):
    order = fields.get('order')
    if order is not None:
        # Re-read under lock; the caller's instance may be stale.
        order = CustomerOrder.objects.select_for_update().get(pk=order.pk)
        fields['order'] = order

    production = ProductionRecord.objects.create(created_by=created_by, **fields)
    logger.info(
        f"Production recorded: {production.cells_produced} cells from "
        f"{production.larvae_transferred} larvae on {production.transfer_date}"
    )

    if order is not None:
        apply_production_yield(order, production.cells_produced)

    create_package_for_production(production)
    return production


@transaction.atomic
def record_acceptance(production_id, accepted_cells, acceptance_date=None):
    """
    Record how many cells the colonies accepted. Allowed once per batch.

    Raises:
        ProductionRecord.DoesNotExist: unknown production
        AcceptanceAlreadyRecorded: acceptance was recorded before
        ValidationError: count outside 0..larvae_transferred
    """
    production = (
        ProductionRecord.objects.select_for_update(of=('self',))
        .select_related('order')
        .get(pk=production_id)
    )

    if production.accepted_cells is not None:
        raise AcceptanceAlreadyRecorded()

    if accepted_cells < 0 or accepted_cells > production.larvae_transferred:
        raise serializers.ValidationError({
            'accepted_cells': [
                f"Must be between 0 and {production.larvae_transferred}"
            ]
        })

    production.accepted_cells = accepted_cells
    production.acceptance_date = acceptance_date or timezone.localdate()
    production.save(update_fields=['accepted_cells', 'acceptance_date', 'updated_at'])
    logger.info(
        f"Acceptance recorded for production {production.id}: "
        f"{accepted_cells}/{production.larvae_transferred} ({production.acceptance_rate}%)"
    )

    if production.order_id:
        apply_acceptance_yield(production.order, accepted_cells)

    return production
