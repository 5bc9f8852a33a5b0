"""
Dashboard URL Configuration
"""

from django.urls import re_path
from .views import DashboardStatsView, ExpiringStockView, UpcomingTransfersView

app_name = 'dashboards'

urlpatterns = [
    re_path(r'^stats/?$', DashboardStatsView.as_view(), name='dashboard-stats'),
    re_path(r'^upcoming/?$', UpcomingTransfersView.as_view(), name='dashboard-upcoming'),
    re_path(r'^expiring/?$', ExpiringStockView.as_view(), name='dashboard-expiring'),
]
