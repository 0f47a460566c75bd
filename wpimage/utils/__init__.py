"""
Utility helpers used by the image resolver.

This subpackage exposes convenience functions for structured event
reporting.
"""

from .errors import EVENTS, configure_reports, report_error, report_warning

__all__ = ["EVENTS", "configure_reports", "report_error", "report_warning"]
