from django.contrib.auth import get_user_model
from rest_framework import exceptions, serializers
from rest_framework_simplejwt.serializers import TokenObtainPairSerializer

User = get_user_model()


class UserSerializer(serializers.ModelSerializer):
    """
    Serializer for the signed-in operator.
    Shape matches what the console keeps in storage after login.
    """
    name = serializers.CharField(source='get_full_name', read_only=True)

    class Meta:
        model = User
        fields = ('id', 'email', 'name', 'role')
        read_only_fields = fields


class LoginSerializer(TokenObtainPairSerializer):
    """
    Email + password login returning ``access_token``/``refresh_token``.

    Repeated failures lock the account for a short period.
    """

    default_error_messages = {
        'no_active_account': 'Invalid email or password',
        'account_locked': 'Account temporarily locked after too many failed attempts',
    }

    def validate(self, attrs):
        email = attrs.get(self.username_field, '')
        candidate = User.objects.filter(email__iexact=email).first()

        if candidate and candidate.is_account_locked():
            raise exceptions.AuthenticationFailed(
                self.error_messages['account_locked'], 'account_locked'
            )

        try:
            data = super().validate(attrs)
        except exceptions.AuthenticationFailed:
            if candidate:
                candidate.record_failed_login()
            raise

        self.user.record_successful_login()

        return {
            'access_token': data['access'],
            'refresh_token': data['refresh'],
            'user': UserSerializer(self.user).data,
        }


class LogoutSerializer(serializers.Serializer):
    refresh_token = serializers.CharField(required=False, allow_blank=True)
