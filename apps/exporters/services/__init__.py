"""
apps.exporters.services package.
"""
from .exporter_manager import ExporterManager  # noqa: F401
