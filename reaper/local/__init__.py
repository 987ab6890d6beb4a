"""
Local package for machine-reaper.

This package provides the merged runtime configuration through the
effective_settings object and the termination supervisor subpackage.
"""

from .config import effective_settings

__all__ = ["effective_settings"]
