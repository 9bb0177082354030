"""Chart view models built per data type from a window of records."""

from __future__ import annotations

from collections import Counter
from collections.abc import Callable, Mapping, Sequence
from dataclasses import dataclass, field
from datetime import datetime
from typing import Any

from synthcity.normalize import is_number

Records = Sequence[Mapping[str, Any]]

MAIN_WINDOW = 50
BAR_WINDOW = 20


@dataclass(frozen=True)
class Dataset:
    label: str
    data: list[float | int]


@dataclass(frozen=True)
class Chart:
    labels: list[str] = field(default_factory=list)
    datasets: list[Dataset] = field(default_factory=list)

    @property
    def is_empty(self) -> bool:
        return not self.labels and all(not ds.data for ds in self.datasets)


@dataclass(frozen=True)
class ChartSet:
    """The three dashboard charts: ``main`` (line), ``pie`` (doughnut), ``bar``."""

    main: Chart = field(default_factory=Chart)
    pie: Chart = field(default_factory=Chart)
    bar: Chart = field(default_factory=Chart)


def _number(value: Any) -> float | int:
    return value if is_number(value) else 0


def _counts(records: Records, key: str, label: str = "Count") -> Chart:
    counter: Counter[str] = Counter(str(r[key]) for r in records if r.get(key))
    return Chart(labels=list(counter), datasets=[Dataset(label, list(counter.values()))])


def _series(records: Records, key: str, label: str, prefix: str, limit: int, scale: float = 1) -> Chart:
    window = records[:limit]
    return Chart(
        labels=[f"{prefix} {i + 1}" for i in range(len(window))],
        datasets=[Dataset(label, [_number(r.get(key)) * scale for r in window])],
    )


def _time_label(value: Any) -> str:
    if not isinstance(value, str):
        return ""
    try:
        return datetime.fromisoformat(value.replace("Z", "+00:00")).strftime("%H:%M:%S")
    except ValueError:
        return value


# ---------------------------------------------------------------------------
# Recipes
# ---------------------------------------------------------------------------


def _climate(records: Records) -> ChartSet:
    labels = [_time_label(r.get("timestamp")) for r in records]
    main = Chart(labels=labels, datasets=[Dataset("Temperature (°C)", [_number(r.get("temperature")) for r in records])])
    bar = Chart(
        labels=labels[:BAR_WINDOW],
        datasets=[Dataset("Air Quality Index", [_number(r.get("air_quality_index")) for r in records[:BAR_WINDOW]])],
    )
    return ChartSet(main=main, pie=_counts(records, "weather_condition"), bar=bar)


def _traffic(records: Records) -> ChartSet:
    return ChartSet(
        main=_series(records, "current_speed", "Current Speed (km/h)", "Segment", MAIN_WINDOW),
        pie=_counts(records, "road_type"),
        bar=_series(records, "congestion_level", "Congestion Level (%)", "Seg", BAR_WINDOW, scale=100),
    )


def _age_group(age: Any) -> str:
    if not is_number(age):
        return "60+"
    if age < 31:
        return "18-30"
    if age < 46:
        return "31-45"
    if age < 61:
        return "46-60"
    return "60+"


def _social(records: Records) -> ChartSet:
    groups = dict.fromkeys(("18-30", "31-45", "46-60", "60+"), 0)
    for record in records:
        groups[_age_group(record.get("age"))] += 1
    pie = Chart(labels=list(groups), datasets=[Dataset("Count", list(groups.values()))])
    return ChartSet(pie=pie, bar=_counts(records, "income_bracket", label="Income Distribution"))


def _financial(records: Records) -> ChartSet:
    first = records[0]
    if first.get("transaction_id"):
        return ChartSet(
            main=_series(records, "amount", "Transaction Amount", "Trans", MAIN_WINDOW),
            pie=_counts(records, "category"),
        )
    if first.get("category"):
        bar = Chart(
            labels=[str(r.get("category", "")) for r in records],
            datasets=[
                Dataset("Allocated", [_number(r.get("allocated_budget")) for r in records]),
                Dataset("Spent", [_number(r.get("spent")) for r in records]),
            ],
        )
        return ChartSet(bar=bar)
    return ChartSet()


def _iot(records: Records) -> ChartSet:
    return ChartSet(
        main=_series(records, "battery_level", "Battery Level (%)", "Sensor", MAIN_WINDOW),
        pie=_counts(records, "type"),
        bar=_counts(records, "status", label="Sensor Status"),
    )


def _generic(records: Records) -> ChartSet:
    sample = records[0]
    numeric = [key for key, value in sample.items() if is_number(value)]
    if not numeric:
        return ChartSet()
    return ChartSet(main=_series(records, numeric[0], numeric[0], "Item", MAIN_WINDOW))


_RECIPES: dict[str, Callable[[Records], ChartSet]] = {
    "climate": _climate,
    "traffic": _traffic,
    "social": _social,
    "demographic": _social,
    "financial": _financial,
    "iot": _iot,
}


def build_charts(data_type: str, records: Records) -> ChartSet:
    """Chart datasets for *records*; empty charts when there is nothing to plot."""
    if not records:
        return ChartSet()
    recipe = _RECIPES.get(data_type, _generic)
    return recipe(records)
