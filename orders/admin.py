from django.contrib import admin

from .models import CustomerOrder


@admin.register(CustomerOrder)
class CustomerOrderAdmin(admin.ModelAdmin):
    list_display = [
        'customer_name', 'number_of_cells', 'larvae_transfer_date',
        'delivery_date', 'status', 'created_at'
    ]
    list_filter = ['status', 'delivery_date']
    search_fields = ['customer_name']
    readonly_fields = ['id', 'status', 'created_by', 'created_at', 'updated_at']
    ordering = ['-created_at']

    fieldsets = (
        ('Customer', {
            'fields': ('id', 'customer_name', 'number_of_cells')
        }),
        ('Schedule', {
            'fields': ('larvae_transfer_date', 'delivery_date', 'status')
        }),
        ('Audit', {
            'fields': ('created_by', 'created_at', 'updated_at'),
            'classes': ('collapse',)
        }),
    )

    def get_readonly_fields(self, request, obj=None):
        # Cell count is fixed once productions may depend on it
        if obj is not None:
            return self.readonly_fields + ['number_of_cells']
        return self.readonly_fields
