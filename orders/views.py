"""
Customer order endpoints.

Endpoints:
- GET/POST /api/order, /api/orders - List (newest first) / create orders
- GET /api/order/{id}, /api/orders/{id} - Order detail
- PATCH /api/orders/{id}/status - Advance to the next status
"""

import logging

from django_filters.rest_framework import DjangoFilterBackend
from rest_framework import filters, generics, status
from rest_framework.response import Response
from rest_framework.views import APIView

from .models import CustomerOrder
from .serializers import CustomerOrderSerializer, OrderStatusUpdateSerializer
from .services import advance_order_status

logger = logging.getLogger(__name__)


class CustomerOrderListCreateView(generics.ListCreateAPIView):
    """
    GET: List orders, filter with ?status= and ?search=
    POST: Create an order in ``pending``
    """
    queryset = CustomerOrder.objects.all()
    serializer_class = CustomerOrderSerializer
    filter_backends = [DjangoFilterBackend, filters.SearchFilter]
    filterset_fields = ['status']
    search_fields = ['customer_name']

    def perform_create(self, serializer):
        order = serializer.save(created_by=self.request.user)
        logger.info(
            f"Order created: {order.customer_name} - {order.number_of_cells} cells "
            f"for {order.delivery_date} by {self.request.user.email}"
        )


class CustomerOrderDetailView(generics.RetrieveAPIView):
    queryset = CustomerOrder.objects.all()
    serializer_class = CustomerOrderSerializer

    def retrieve(self, request, *args, **kwargs):
        try:
            order = CustomerOrder.objects.get(pk=kwargs['pk'])
        except CustomerOrder.DoesNotExist:
            return Response({'error': 'Order not found'}, status=status.HTTP_404_NOT_FOUND)
        return Response(self.get_serializer(order).data)


class CustomerOrderStatusView(APIView):
    """
    PATCH /api/orders/{id}/status
    Body: {"status": "<successor of current status>"}
    """

    def patch(self, request, pk):
        serializer = OrderStatusUpdateSerializer(data=request.data)
        serializer.is_valid(raise_exception=True)

        try:
            order = advance_order_status(pk, serializer.validated_data['status'])
        except CustomerOrder.DoesNotExist:
            return Response({'error': 'Order not found'}, status=status.HTTP_404_NOT_FOUND)

        return Response(CustomerOrderSerializer(order).data)
