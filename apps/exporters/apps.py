"""
apps.exporters.apps
"""
from django.apps import AppConfig


class ExportersConfig(AppConfig):
    name = "apps.exporters"
    label = "exporters"
    verbose_name = "Exporters"
