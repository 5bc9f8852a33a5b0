from django.contrib import admin

from .models import StockPackage, StockSale


class StockSaleInline(admin.TabularInline):
    model = StockSale
    extra = 0
    readonly_fields = ['customer_name', 'cells_sold', 'sale_date', 'sold_by']
    can_delete = False


@admin.register(StockPackage)
class StockPackageAdmin(admin.ModelAdmin):
    list_display = [
        'production_date', 'total_cells', 'available_cells', 'sold_cells',
        'expiration_date', 'is_expired'
    ]
    list_filter = ['is_expired', 'production_date']
    readonly_fields = [
        'id', 'production', 'total_cells', 'available_cells', 'sold_cells',
        'origin_hives', 'production_date', 'expiration_date', 'is_expired',
        'expired_at', 'forfeited_cells', 'created_at', 'updated_at'
    ]
    inlines = [StockSaleInline]

    def has_add_permission(self, request):
        # Packages come from production surplus only
        return False


@admin.register(StockSale)
class StockSaleAdmin(admin.ModelAdmin):
    list_display = ['customer_name', 'cells_sold', 'package', 'sale_date']
    search_fields = ['customer_name']
    date_hierarchy = 'sale_date'
    raw_id_fields = ['package']

    def has_add_permission(self, request):
        return False

    def has_change_permission(self, request, obj=None):
        return False
