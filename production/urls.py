from django.urls import re_path

from .views import ProductionAcceptanceView, ProductionDetailView, ProductionListCreateView

app_name = 'production'

UUID = r'(?P<pk>[0-9a-fA-F-]{36})'

urlpatterns = [
    re_path(r'^productions/?$', ProductionListCreateView.as_view(), name='production-list'),
    re_path(rf'^productions/{UUID}/?$', ProductionDetailView.as_view(), name='production-detail'),
    re_path(rf'^productions/{UUID}/acceptance/?$', ProductionAcceptanceView.as_view(), name='production-acceptance'),
]
