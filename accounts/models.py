from django.contrib.auth.models import AbstractUser
from django.db import models
from django.utils import timezone
from datetime import timedelta
import uuid


class User(AbstractUser):
    """
    Console operator account.

    Operators sign in with their email address; the JWT access token issued
    at login is sent as a bearer token on every API call.
    """

    id = models.UUIDField(primary_key=True, default=uuid.uuid4, editable=False)

    class UserRole(models.TextChoices):
        ADMIN = 'admin', 'Administrator'
        OPERATOR = 'operator', 'Operator'

    email = models.EmailField(unique=True)

    role = models.CharField(
        max_length=20,
        choices=UserRole.choices,
        default=UserRole.OPERATOR,
        db_index=True,
        help_text="User's role in the console"
    )

    # Login attempt tracking (for security)
    failed_login_attempts = models.IntegerField(
        default=0,
        help_text="Number of consecutive failed login attempts"
    )

    account_locked_until = models.DateTimeField(
        null=True,
        blank=True,
        help_text="Account locked until this time due to failed login attempts"
    )

    # Timestamps
    created_at = models.DateTimeField(auto_now_add=True)
    updated_at = models.DateTimeField(auto_now=True)
    last_login_at = models.DateTimeField(null=True, blank=True)

    USERNAME_FIELD = 'email'
    REQUIRED_FIELDS = ['username']

    MAX_FAILED_LOGINS = 5
    LOCKOUT_MINUTES = 15

    class Meta:
        db_table = 'users'
        verbose_name = 'User'
        verbose_name_plural = 'Users'

    def __str__(self):
        return f"{self.get_full_name()} ({self.get_role_display()})"

    def get_full_name(self):
        """Return the user's full name or username if name is not set."""
        full_name = super().get_full_name()
        return full_name if full_name else self.username

    def is_account_locked(self):
        """Check if account is locked due to failed login attempts."""
        if self.account_locked_until:
            if timezone.now() < self.account_locked_until:
                return True
            # Lock period expired, reset
            self.account_locked_until = None
            self.failed_login_attempts = 0
            self.save(update_fields=['account_locked_until', 'failed_login_attempts'])
        return False

    def record_failed_login(self):
        """Record a failed login attempt and lock account if threshold exceeded."""
        self.failed_login_attempts += 1

        if self.failed_login_attempts >= self.MAX_FAILED_LOGINS:
            self.account_locked_until = timezone.now() + timedelta(minutes=self.LOCKOUT_MINUTES)

        self.save(update_fields=['failed_login_attempts', 'account_locked_until'])

    def record_successful_login(self):
        """Reset failed login attempts on successful login."""
        self.failed_login_attempts = 0
        self.account_locked_until = None
        self.last_login_at = timezone.now()
        self.save(update_fields=['failed_login_attempts', 'account_locked_until', 'last_login_at'])
