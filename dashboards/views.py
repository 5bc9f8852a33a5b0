"""
Dashboard API Views

GET /api/dashboard/stats     - Stat cards
GET /api/dashboard/upcoming  - Larvae transfers due soon
GET /api/dashboard/expiring  - Stock about to expire
"""

from rest_framework import status
from rest_framework.response import Response
from rest_framework.views import APIView

from orders.serializers import CustomerOrderSerializer
from stock.serializers import StockPackageSerializer
from stock.services import sweep_expired_stock
from .services import ProductionDashboardService


class DashboardStatsView(APIView):

    def get(self, request):
        # Expired packages must not count as available stock.
        sweep_expired_stock()
        stats = ProductionDashboardService().get_stats()
        return Response(stats, status=status.HTTP_200_OK)


class UpcomingTransfersView(APIView):
    """
    Unfinished orders with a larvae transfer in the next
    DASHBOARD_UPCOMING_DAYS days, soonest first.
    """

    def get(self, request):
        orders = ProductionDashboardService().get_upcoming_transfers()
        return Response(CustomerOrderSerializer(orders, many=True).data)


class ExpiringStockView(APIView):
    """
    Sellable packages expiring within DASHBOARD_EXPIRING_DAYS days.
    """

    def get(self, request):
        packages = ProductionDashboardService().get_expiring_stock()
        return Response(StockPackageSerializer(packages, many=True).data)
