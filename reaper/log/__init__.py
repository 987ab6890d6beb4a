"""
Logging module for machine-reaper.
This module configures console logging and optional shipping to Grafana Loki.
"""

from .setup import setup_logging
from .handler import LokiHandler

__all__ = ["setup_logging", "LokiHandler"]
