from django.contrib import admin

from .models import ProductionRecord


@admin.register(ProductionRecord)
class ProductionRecordAdmin(admin.ModelAdmin):
    list_display = [
        'transfer_date', 'larvae_transferred', 'cells_produced',
        'accepted_cells', 'order', 'status'
    ]
    list_filter = ['status', 'transfer_date']
    search_fields = ['notes', 'order__customer_name']
    readonly_fields = [
        'id', 'transfer_date', 'larvae_transferred', 'cells_produced', 'hives_used',
        'accepted_cells', 'acceptance_date', 'order', 'status',
        'created_by', 'created_at', 'updated_at'
    ]

    fieldsets = (
        ('Batch', {
            'fields': ('id', 'transfer_date', 'larvae_transferred', 'cells_produced', 'hives_used')
        }),
        ('Acceptance', {
            'fields': ('accepted_cells', 'acceptance_date')
        }),
        ('Order & Status', {
            'fields': ('order', 'status', 'notes')
        }),
        ('Audit', {
            'fields': ('created_by', 'created_at', 'updated_at'),
            'classes': ('collapse',)
        }),
    )

    def has_add_permission(self, request):
        # Recorded through the API only
        return False
