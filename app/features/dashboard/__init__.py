"""Dashboard: headline totals and recent sales."""

from app.features.dashboard.routes import router
from app.features.dashboard.schemas import DashboardSummary, RecentSale
from app.features.dashboard.service import DashboardService

__all__ = ["DashboardService", "DashboardSummary", "RecentSale", "router"]
