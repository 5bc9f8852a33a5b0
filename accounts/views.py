"""
Authentication endpoints for the console.

Endpoints:
- POST /api/auth/login - Email/password login, returns JWT pair and user
- POST /api/auth/logout - Blacklist the refresh token (if supplied)
- GET /api/auth/me - Current operator
- POST /api/auth/token/refresh - Exchange a refresh token for a new access token
"""

import logging

from rest_framework import generics, permissions, status
from rest_framework.response import Response
from rest_framework.views import APIView
from rest_framework_simplejwt.exceptions import TokenError
from rest_framework_simplejwt.tokens import RefreshToken
from rest_framework_simplejwt.views import TokenObtainPairView

from .serializers import LoginSerializer, LogoutSerializer, UserSerializer

logger = logging.getLogger(__name__)


class LoginView(TokenObtainPairView):
    """
    JWT login keyed on email.
    Response: {access_token, refresh_token, user}
    """
    serializer_class = LoginSerializer


class LogoutView(APIView):
    """
    API endpoint for user logout.

    The console clears its stored session whatever the outcome, so this
    always answers 200. A supplied refresh token is blacklisted.
    """
    permission_classes = [permissions.AllowAny]

    def post(self, request):
        serializer = LogoutSerializer(data=request.data)
        serializer.is_valid(raise_exception=True)
        refresh_token = serializer.validated_data.get('refresh_token')

        if refresh_token:
            try:
                RefreshToken(refresh_token).blacklist()
            except TokenError as e:
                logger.info(f"Logout with unusable refresh token: {e}")

        return Response({'message': 'Logout successful'}, status=status.HTTP_200_OK)


class MeView(generics.RetrieveAPIView):
    """Return the signed-in operator."""
    serializer_class = UserSerializer
    permission_classes = [permissions.IsAuthenticated]

    def get_object(self):
        return self.request.user
