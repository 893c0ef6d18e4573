"""Analytics module: in-memory aggregation of sales into the analytics view.

``aggregator`` holds the pure computations, ``records`` the typed input
snapshots, and ``service``/``routes`` expose them over HTTP.
"""

from app.features.analytics.aggregator import AnalyticsReport, TimeRange, build_report
from app.features.analytics.records import SaleRecord, record_from_sale
from app.features.analytics.routes import router
from app.features.analytics.schemas import AnalyticsReportResponse
from app.features.analytics.service import AnalyticsService

__all__ = [
    "AnalyticsReport",
    "AnalyticsReportResponse",
    "AnalyticsService",
    "SaleRecord",
    "TimeRange",
    "build_report",
    "record_from_sale",
    "router",
]
