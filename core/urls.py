"""
URL configuration for the Queen Cell Production Console backend.

The console calls most endpoints without a trailing slash (and a few with
one), so app URL modules match an optional trailing slash.
"""
from django.contrib import admin
from django.urls import path, include
from django.views.generic import RedirectView

urlpatterns = [
    path('', RedirectView.as_view(url='/admin/', permanent=False)),
    path('admin/', admin.site.urls),
    path('api/auth/', include('accounts.urls')),  # Login, logout, me
    path('api/', include('orders.urls')),  # Customer orders (/order, /orders)
    path('api/', include('production.urls')),  # Production records
    path('api/', include('stock.urls')),  # Surplus stock packages & sales
    path('api/dashboard/', include('dashboards.urls')),  # Dashboard widgets
    path('api/reports/', include('reports.urls')),  # History search & exports
]
