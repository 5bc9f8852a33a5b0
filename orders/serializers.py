from datetime import timedelta

from django.conf import settings
from rest_framework import serializers

from .models import CustomerOrder, OrderStatus


class CustomerOrderSerializer(serializers.ModelSerializer):
    """Create/read serializer. Status is server-owned."""

    larvae_transfer_date = serializers.DateField(required=False)
    status_display = serializers.CharField(source='get_status_display', read_only=True)

    class Meta:
        model = CustomerOrder
        fields = [
            'id', 'customer_name', 'number_of_cells', 'delivery_date',
            'larvae_transfer_date', 'status', 'status_display',
            'created_at', 'updated_at',
        ]
        read_only_fields = ['id', 'status', 'created_at', 'updated_at']

    def validate_customer_name(self, value):
        value = value.strip()
        if not value:
            raise serializers.ValidationError('Customer name is required')
        return value

    def validate(self, attrs):
        if not attrs.get('larvae_transfer_date'):
            attrs['larvae_transfer_date'] = (
                attrs['delivery_date'] - timedelta(days=settings.QUEEN_CELL_LEAD_DAYS)
            )
        return attrs


class OrderStatusUpdateSerializer(serializers.Serializer):
    status = serializers.ChoiceField(choices=OrderStatus.choices)
