# dashboard/__init__.py

from dashboard.client import DashboardClient, DashboardSnapshot
from dashboard.state import MONTHS, DashboardState
from dashboard.view import DashboardView, build_view, format_currency, render_text

__all__ = [
    "MONTHS",
    "DashboardClient",
    "DashboardSnapshot",
    "DashboardState",
    "DashboardView",
    "build_view",
    "format_currency",
    "render_text",
]
