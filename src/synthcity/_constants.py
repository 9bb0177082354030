"""Internal constants shared across the library."""

# Default reference location: Cologne
DEFAULT_CENTER_LAT = 50.9375
DEFAULT_CENTER_LNG = 6.9603
DEFAULT_ZOOM = 11

# ------------------------------------------------------------------
# Generation limits
# ------------------------------------------------------------------

MIN_GENERATE_COUNT = 1
MAX_GENERATE_COUNT = 10_000
DEFAULT_GENERATE_COUNT = 100
MAP_TOPIC_COUNT = 1000

# ------------------------------------------------------------------
# Stream timing (milliseconds)
# ------------------------------------------------------------------

MIN_STREAM_INTERVAL_MS = 100
MAX_STREAM_INTERVAL_MS = 10_000
DEFAULT_STREAM_INTERVAL_MS = 1000

# ------------------------------------------------------------------
# Client pipeline caps
# ------------------------------------------------------------------

INGEST_BUFFER_CAP = 1000
MAX_MARKERS = 1000
MAX_TABLE_ROWS = 100
CHART_WINDOW = 50
MAX_HEAT_POINTS = 5000

UI_THROTTLE_SECONDS = 0.25
STATS_THROTTLE_SECONDS = 0.5
HEALTH_INTERVAL_SECONDS = 10.0

HEATMAP_SWITCH_THRESHOLD = 2000
POINT_HEAVY_TYPES: frozenset[str] = frozenset({"geo", "traffic", "iot", "transport"})

# ------------------------------------------------------------------
# Auto-fit
# ------------------------------------------------------------------

AUTOFIT_MAX_POINTS = 12
AUTOFIT_FALLBACK_SECONDS = 1.5
BOUNDS_PAD_RATIO = 0.1


def clamp_interval_ms(value: object) -> int:
    """Clamp a stream interval to the supported range.

    Non-numeric (or zero) input falls back to :data:`DEFAULT_STREAM_INTERVAL_MS`.
    """
    try:
        interval = int(float(value))  # type: ignore[arg-type]
    except (TypeError, ValueError, OverflowError):
        interval = 0
    if not interval:
        interval = DEFAULT_STREAM_INTERVAL_MS
    return max(MIN_STREAM_INTERVAL_MS, min(MAX_STREAM_INTERVAL_MS, interval))


def clamp_count(value: object) -> int:
    """Clamp a requested record count to ``[1, 10000]`` (default 100)."""
    try:
        count = int(float(value))  # type: ignore[arg-type]
    except (TypeError, ValueError, OverflowError):
        count = 0
    if not count:
        count = DEFAULT_GENERATE_COUNT
    return max(MIN_GENERATE_COUNT, min(MAX_GENERATE_COUNT, count))
