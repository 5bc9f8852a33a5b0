from django.urls import re_path
from rest_framework_simplejwt.views import TokenRefreshView

from .views import LoginView, LogoutView, MeView

app_name = 'accounts'

urlpatterns = [
    re_path(r'^login/?$', LoginView.as_view(), name='login'),
    re_path(r'^logout/?$', LogoutView.as_view(), name='logout'),
    re_path(r'^me/?$', MeView.as_view(), name='me'),
    re_path(r'^token/refresh/?$', TokenRefreshView.as_view(), name='token_refresh'),
]
