"""
History search and export row building.

Search matches the way the console's history page filters:
orders by customer name, delivery date (YYYY-MM-DD) or status;
productions by transfer date, hive identifier or notes.
"""

from django.db.models import CharField, Q
from django.db.models.functions import Cast

from orders.models import CustomerOrder
from production.models import ProductionRecord

NOT_AVAILABLE = 'N/A'

ORDER_HEADERS = ['Customer', 'Cells', 'Transfer Date', 'Delivery Date', 'Status', 'Order Date']
PRODUCTION_HEADERS = ['Transfer Date', 'Larvae', 'Accepted', 'Produced', 'Hives', 'Notes']


def search_orders(term=''):
    orders = CustomerOrder.objects.all()
    term = (term or '').strip()
    if term:
        orders = orders.annotate(
            delivery_text=Cast('delivery_date', CharField())
        ).filter(
            Q(customer_name__icontains=term)
            | Q(delivery_text__contains=term)
            | Q(status__icontains=term)
        )
    return orders.order_by('-created_at')


def search_productions(term=''):
    productions = ProductionRecord.objects.select_related('order', 'stock_package')
    term = (term or '').strip()
    if term:
        productions = productions.annotate(
            transfer_text=Cast('transfer_date', CharField()),
        ).filter(
            Q(transfer_text__contains=term)
            | Q(pk__in=_productions_with_hive(term))
            | Q(notes__icontains=term)
        )
    return productions.order_by('-transfer_date', '-created_at')


def _productions_with_hive(term):
    """Ids of productions with a hive identifier containing ``term``."""
    needle = term.lower()
    return [
        pk for pk, hives in ProductionRecord.objects.values_list('id', 'hives_used')
        if any(needle in str(hive).lower() for hive in hives or [])
    ]


def display_status(value):
    return value.replace('_', ' ')


def order_rows(orders):
    return [
        [
            order.customer_name,
            str(order.number_of_cells),
            order.larvae_transfer_date.isoformat(),
            order.delivery_date.isoformat(),
            display_status(order.status),
            order.created_at.date().isoformat(),
        ]
        for order in orders
    ]


def production_rows(productions):
    rows = []
    for production in productions:
        accepted = production.accepted_cells
        rows.append([
            production.transfer_date.isoformat(),
            str(production.larvae_transferred),
            str(accepted) if accepted is not None else NOT_AVAILABLE,
            str(production.cells_produced),
            ', '.join(production.hives_used or []) or NOT_AVAILABLE,
            production.notes or NOT_AVAILABLE,
        ])
    return rows
