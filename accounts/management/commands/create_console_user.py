"""
Management command to create (or reset) a console login.

Usage:
    python manage.py create_console_user operator@apiary.test --password secret
    python manage.py create_console_user admin@apiary.test --password secret --admin
"""

from django.core.management.base import BaseCommand, CommandError
from django.db import transaction
from accounts.models import User


class Command(BaseCommand):
    help = 'Creates or updates a console user that can sign in with email and password'

    def add_arguments(self, parser):
        parser.add_argument('email', type=str)
        parser.add_argument('--password', type=str, required=True)
        parser.add_argument('--first-name', type=str, default='')
        parser.add_argument('--last-name', type=str, default='')
        parser.add_argument(
            '--admin',
            action='store_true',
            help='Give the user the admin role and Django admin access',
        )

    def handle(self, *args, **options):
        email = options['email'].strip().lower()
        if not email:
            raise CommandError('Email is required')

        role = User.UserRole.ADMIN if options['admin'] else User.UserRole.OPERATOR

        with transaction.atomic():
            user = User.objects.filter(email__iexact=email).first()
            created = user is None
            if created:
                user = User(email=email, username=email)

            user.first_name = options['first_name'] or user.first_name
            user.last_name = options['last_name'] or user.last_name
            user.role = role
            user.is_active = True
            user.is_staff = options['admin']
            user.failed_login_attempts = 0
            user.account_locked_until = None
            user.set_password(options['password'])
            user.save()

        if created:
            self.stdout.write(self.style.SUCCESS(f'✓ Created {user.get_role_display().lower()}: {email}'))
        else:
            self.stdout.write(self.style.WARNING(f'User with email {email} already existed; updated.'))

        self.stdout.write('\n' + '=' * 60)
        self.stdout.write(f'Email:     {user.email}')
        self.stdout.write(f'Role:      {user.get_role_display()}')
        self.stdout.write(f'Is Staff:  {user.is_staff}')
        self.stdout.write('=' * 60)
        self.stdout.write('Sign in with POST /api/auth/login {"email": ..., "password": ...}')
