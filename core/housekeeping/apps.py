"""
Ops Housekeeping - App Configuration
====================================
Recurring operational task instances, their completion window,
and the one-per-instance completion record.
"""

from django.apps import AppConfig


class CoreHousekeepingConfig(AppConfig):
    default_auto_field = "django.db.models.BigAutoField"
    name = "core.housekeeping"
    label = "core_housekeeping"
    verbose_name = "Ops Housekeeping"
