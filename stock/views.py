"""
Surplus stock endpoints.

Every read runs the expiration sweep first so that listings never show
cells that can no longer be sold.

Endpoints:
- GET /api/stock - Sellable packages (unexpired, cells available)
- GET /api/stock/all - Every package, newest first
- POST /api/stock/sell - Sell cells from a package
"""

from rest_framework import status
from rest_framework.response import Response
from rest_framework.views import APIView

from .models import StockPackage
from .serializers import SellCellsSerializer, StockPackageSerializer
from .services import sell_cells, sweep_expired_stock


def package_queryset():
    return StockPackage.objects.prefetch_related('sales')


class AvailableStockView(APIView):

    def get(self, request):
        sweep_expired_stock()
        packages = package_queryset().filter(is_expired=False, available_cells__gt=0)
        return Response(StockPackageSerializer(packages, many=True).data)


class AllStockView(APIView):

    def get(self, request):
        sweep_expired_stock()
        packages = package_queryset().order_by('-created_at')
        return Response(StockPackageSerializer(packages, many=True).data)


class SellStockView(APIView):
    """
    POST /api/stock/sell
    Body: {"package_id": "...", "customer_name": "...", "cells_to_sell": 3}
    """

    def post(self, request):
        serializer = SellCellsSerializer(data=request.data)
        serializer.is_valid(raise_exception=True)
        data = serializer.validated_data

        try:
            package, sale = sell_cells(
                data['package_id'],
                data['customer_name'],
                data['cells_to_sell'],
                sold_by=request.user,
            )
        except StockPackage.DoesNotExist:
            return Response({'error': 'Stock package not found'}, status=status.HTTP_404_NOT_FOUND)

        package = package_queryset().get(pk=package.pk)
        return Response(StockPackageSerializer(package).data, status=status.HTTP_201_CREATED)
