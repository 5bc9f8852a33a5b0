from django.urls import re_path

from .views import (
    CustomerOrderDetailView,
    CustomerOrderListCreateView,
    CustomerOrderStatusView,
)

app_name = 'orders'

UUID = r'(?P<pk>[0-9a-fA-F-]{36})'

urlpatterns = [
    re_path(r'^orders?/?$', CustomerOrderListCreateView.as_view(), name='order-list'),
    re_path(rf'^orders?/{UUID}/?$', CustomerOrderDetailView.as_view(), name='order-detail'),
    re_path(rf'^orders/{UUID}/status/?$', CustomerOrderStatusView.as_view(), name='order-status'),
]
