"""
Expire Stock Management Command

Runs the stock expiration sweep on demand (Celery Beat runs it hourly):

    python manage.py expire_stock
    python manage.py expire_stock --dry-run
"""

from django.core.management.base import BaseCommand
from django.utils import timezone

from stock.services import sweep_expired_stock


class Command(BaseCommand):
    help = 'Forfeit unsold cells of stock packages past their expiration date'

    def add_arguments(self, parser):
        parser.add_argument(
            '--dry-run',
            action='store_true',
            help='List packages that would expire without changing them',
        )

    def handle(self, *args, **options):
        dry_run = options['dry_run']
        self.stdout.write(f'\n[{timezone.now().strftime("%Y-%m-%d %H:%M:%S")}] '
                          f'Checking for expired stock...\n')

        packages = sweep_expired_stock(dry_run=dry_run)

        for package in packages:
            cells = package.available_cells if dry_run else package.forfeited_cells
            self.stdout.write(
                f'  {package.id}  produced {package.production_date}  '
                f'expired {package.expiration_date:%Y-%m-%d}  {cells} cells'
            )

        if not packages:
            self.stdout.write(self.style.SUCCESS('✓ No expired stock found'))
        elif dry_run:
            self.stdout.write(self.style.WARNING(f'⚠ {len(packages)} package(s) would expire (dry run)'))
        else:
            self.stdout.write(self.style.SUCCESS(f'✓ {len(packages)} package(s) expired'))
