"""
History & Export Views

GET /api/reports/history?search=           - Orders and productions matching a term
GET /api/reports/orders/{csv|pdf|excel}      - Order export (honours ?search=)
GET /api/reports/productions/{csv|pdf|excel} - Production export (honours ?search=)
"""

import logging

from rest_framework.response import Response
from rest_framework.views import APIView

from orders.serializers import CustomerOrderSerializer
from production.serializers import ProductionRecordSerializer
from . import exports
from .services import (
    ORDER_HEADERS,
    PRODUCTION_HEADERS,
    order_rows,
    production_rows,
    search_orders,
    search_productions,
)

logger = logging.getLogger(__name__)


class HistoryView(APIView):

    def get(self, request):
        term = request.query_params.get('search', '')
        return Response({
            'orders': CustomerOrderSerializer(search_orders(term), many=True).data,
            'productions': ProductionRecordSerializer(search_productions(term), many=True).data,
        })


class BaseExportView(APIView):
    """Base class for export views"""
    title = ''
    filename = ''
    headers = []
    pdf_col_widths = None

    def get_rows(self, term):
        raise NotImplementedError

    def get(self, request, export_format):
        rows = self.get_rows(request.query_params.get('search', ''))
        logger.info(f"{request.user.email} exported {len(rows)} rows to {self.filename}.{export_format}")

        if export_format == 'csv':
            return exports.render_csv(self.filename, self.headers, rows)
        if export_format == 'excel':
            return exports.render_excel(self.title, self.filename, self.headers, rows)
        return exports.render_pdf(self.title, self.filename, self.headers, rows, self.pdf_col_widths)


class OrderExportView(BaseExportView):
    title = 'Queen Cell Orders Report'
    filename = 'queen-cell-orders'
    headers = ORDER_HEADERS
    pdf_col_widths = [7, 3, 4, 4, 4, 4]

    def get_rows(self, term):
        return order_rows(search_orders(term))


class ProductionExportView(BaseExportView):
    title = 'Production Records Report'
    filename = 'production-records'
    headers = PRODUCTION_HEADERS
    pdf_col_widths = [3.5, 2.5, 2.5, 2.5, 5, 11]

    def get_rows(self, term):
        return production_rows(search_productions(term))
