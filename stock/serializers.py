from rest_framework import serializers

from .models import StockPackage, StockSale


class StockSaleSerializer(serializers.ModelSerializer):
    class Meta:
        model = StockSale
        fields = ['id', 'customer_name', 'cells_sold', 'sale_date']
        read_only_fields = fields


class StockPackageSerializer(serializers.ModelSerializer):
    production_id = serializers.UUIDField(read_only=True)
    sales = StockSaleSerializer(many=True, read_only=True)

    class Meta:
        model = StockPackage
        fields = [
            'id', 'production_id', 'total_cells', 'available_cells', 'sold_cells',
            'origin_hives', 'production_date', 'expiration_date', 'is_expired',
            'expired_at', 'forfeited_cells', 'sales', 'created_at',
        ]
        read_only_fields = fields


class SellCellsSerializer(serializers.Serializer):
    package_id = serializers.UUIDField()
    customer_name = serializers.CharField(max_length=200)
    cells_to_sell = serializers.IntegerField(min_value=1)

    def validate_customer_name(self, value):
        value = value.strip()
        if not value:
            raise serializers.ValidationError('Customer name is required')
        return value
