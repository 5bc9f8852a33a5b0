"""
Celery configuration for the Queen Cell Production Console.

Tasks to run in background:
- Stock package expiration sweep
- Dashboard cache warm-up
"""
import os
from celery import Celery
from celery.schedules import crontab

# Set the default Django settings module
os.environ.setdefault('DJANGO_SETTINGS_MODULE', 'core.settings')

# Create Celery app
app = Celery('core')

# Load config from Django settings with CELERY_ prefix
app.config_from_object('django.conf:settings', namespace='CELERY')

# Auto-discover tasks in all installed apps
app.autodiscover_tasks()


# =============================================================================
# CELERY BEAT SCHEDULE - Periodic Tasks
# =============================================================================
app.conf.beat_schedule = {
    # Forfeit unsold cells of expired stock packages (every hour)
    'expire-stock-packages': {
        'task': 'stock.tasks.expire_stock_packages',
        'schedule': crontab(minute=0),
    },

    # Warm the dashboard stats cache (every 15 minutes)
    'refresh-dashboard-stats': {
        'task': 'dashboards.tasks.refresh_dashboard_stats',
        'schedule': crontab(minute='*/15'),
    },
}

# Celery configuration
app.conf.update(
    # Task result expiry
    result_expires=3600,  # 1 hour

    # Task time limits
    task_time_limit=300,  # 5 minutes hard limit
    task_soft_time_limit=240,  # 4 minutes soft limit

    task_acks_late=True,
    task_reject_on_worker_lost=True,

    # Prefetch multiplier (1 = fair distribution)
    worker_prefetch_multiplier=1,

    # Serialization
    task_serializer='json',
    result_serializer='json',
    accept_content=['json'],

    enable_utc=True,
)
