from django.urls import re_path

from .views import AllStockView, AvailableStockView, SellStockView

app_name = 'stock'

urlpatterns = [
    re_path(r'^stock/?$', AvailableStockView.as_view(), name='stock-available'),
    re_path(r'^stock/all/?$', AllStockView.as_view(), name='stock-all'),
    re_path(r'^stock/sell/?$', SellStockView.as_view(), name='stock-sell'),
]
