from django.urls import re_path

from .views import HistoryView, OrderExportView, ProductionExportView

app_name = 'reports'

FORMAT = r'(?P<export_format>csv|pdf|excel)'

urlpatterns = [
    re_path(r'^history/?$', HistoryView.as_view(), name='history'),
    re_path(rf'^orders/{FORMAT}/?$', OrderExportView.as_view(), name='orders-export'),
    re_path(rf'^productions/{FORMAT}/?$', ProductionExportView.as_view(), name='productions-export'),
]
