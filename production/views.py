"""
Production endpoints.

Endpoints:
- GET /api/productions - Batches with extra cells and acceptance rate
- POST /api/productions - Record a batch (updates its order, creates surplus stock)
- GET /api/productions/{id} - Batch detail
- PATCH /api/productions/{id}/acceptance - Record accepted cells (once)
"""

from django_filters.rest_framework import DjangoFilterBackend
from rest_framework import generics, status
from rest_framework.response import Response
from rest_framework.views import APIView

from .models import ProductionRecord
from .serializers import AcceptanceSerializer, ProductionRecordSerializer
from .services import record_acceptance, record_production


def production_queryset():
    return ProductionRecord.objects.select_related('order', 'stock_package')


class ProductionListCreateView(generics.ListCreateAPIView):
    serializer_class = ProductionRecordSerializer
    filter_backends = [DjangoFilterBackend]
    filterset_fields = ['status', 'order']

    def get_queryset(self):
        return production_queryset()

    def create(self, request, *args, **kwargs):
        serializer = self.get_serializer(data=request.data)
        serializer.is_valid(raise_exception=True)

        production = record_production(created_by=request.user, **serializer.validated_data)
        production = production_queryset().get(pk=production.pk)

        return Response(
            self.get_serializer(production).data,
            status=status.HTTP_201_CREATED
        )


class ProductionDetailView(APIView):

    def get(self, request, pk):
        try:
            production = production_queryset().get(pk=pk)
        except ProductionRecord.DoesNotExist:
            return Response({'error': 'Production not found'}, status=status.HTTP_404_NOT_FOUND)
        return Response(ProductionRecordSerializer(production).data)


class ProductionAcceptanceView(APIView):
    """
    PATCH /api/productions/{id}/acceptance
    Body: {"accepted_cells": 16, "acceptance_date": "2026-05-14"}
    """

    def patch(self, request, pk):
        serializer = AcceptanceSerializer(data=request.data)
        serializer.is_valid(raise_exception=True)

        try:
            record_acceptance(pk, **serializer.validated_data)
        except ProductionRecord.DoesNotExist:
            return Response({'error': 'Production not found'}, status=status.HTTP_404_NOT_FOUND)

        production = production_queryset().get(pk=pk)
        return Response(ProductionRecordSerializer(production).data)
