from rest_framework import serializers

from orders.models import CustomerOrder
from .models import ProductionRecord


class ProductionRecordSerializer(serializers.ModelSerializer):
    """
    Production batch with its derived figures.

    ``extra_cells`` and ``acceptance_rate`` are computed; acceptance fields
    are set through the acceptance endpoint only.
    """

    order_id = serializers.PrimaryKeyRelatedField(
        source='order',
        queryset=CustomerOrder.objects.all(),
        required=False,
        allow_null=True,
    )
    hives_used = serializers.ListField(
        child=serializers.CharField(max_length=50),
        required=False,
    )
    extra_cells = serializers.IntegerField(read_only=True)
    acceptance_rate = serializers.IntegerField(read_only=True, allow_null=True)
    stock_package_id = serializers.SerializerMethodField()

    class Meta:
        model = ProductionRecord
        fields = [
            'id', 'transfer_date', 'larvae_transferred', 'cells_produced',
            'accepted_cells', 'acceptance_date', 'acceptance_rate',
            'hives_used', 'order_id', 'notes', 'status', 'extra_cells',
            'stock_package_id', 'created_at', 'updated_at',
        ]
        read_only_fields = [
            'id', 'accepted_cells', 'acceptance_date', 'status',
            'created_at', 'updated_at',
        ]

    def get_stock_package_id(self, obj):
        package = getattr(obj, 'stock_package', None)
        return str(package.id) if package else None

    def validate(self, attrs):
        larvae = attrs.get('larvae_transferred')
        produced = attrs.get('cells_produced')
        if larvae is not None and produced is not None and produced > larvae:
            raise serializers.ValidationError({
                'cells_produced': ['Cannot exceed the number of larvae transferred']
            })
        return attrs


class AcceptanceSerializer(serializers.Serializer):
    accepted_cells = serializers.IntegerField(min_value=0)
    acceptance_date = serializers.DateField(required=False)
