"""
machine-reaper: stops the helper processes a VM host left behind.

The `local.supervisor` package holds the termination logic; `log` sets up
logging and `main` is the console entry point.
"""

__version__ = "0.1.0"
