"""
Dashboard services module
"""

from .production_overview import ProductionDashboardService, invalidate_stats_cache

__all__ = [
    'ProductionDashboardService',
    'invalidate_stats_cache',
]
