"""Dashboard client pipeline: buffer, views, auto-fit, health and exports."""

from synthcity.dashboard.autofit import AutoFitController, AutoFitState
from synthcity.dashboard.buffer import IngestBuffer
from synthcity.dashboard.charts import Chart, ChartSet, Dataset, build_charts
from synthcity.dashboard.export import flatten_record, to_csv, to_json, write_export
from synthcity.dashboard.health import ControlState, HealthMonitor
from synthcity.dashboard.mapview import (
    HeatPoint,
    MapMode,
    MapView,
    PointMarker,
    SegmentLine,
    Viewport,
)
from synthcity.dashboard.notifications import Notification, NotificationCenter, NotificationLevel
from synthcity.dashboard.preferences import Preferences
from synthcity.dashboard.stats import StatsPanel, StatsSnapshot
from synthcity.dashboard.sync import ViewSynchronizer
from synthcity.dashboard.table import TableView, build_table, render_raw

__all__ = [
    "AutoFitController",
    "AutoFitState",
    "Chart",
    "ChartSet",
    "ControlState",
    "Dataset",
    "HealthMonitor",
    "HeatPoint",
    "IngestBuffer",
    "MapMode",
    "MapView",
    "Notification",
    "NotificationCenter",
    "NotificationLevel",
    "PointMarker",
    "Preferences",
    "SegmentLine",
    "StatsPanel",
    "StatsSnapshot",
    "TableView",
    "Viewport",
    "ViewSynchronizer",
    "build_charts",
    "build_table",
    "flatten_record",
    "render_raw",
    "to_csv",
    "to_json",
    "write_export",
]
