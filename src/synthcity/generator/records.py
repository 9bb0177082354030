"""Per-data-type record builders.

Every builder takes the validated options model, a record count and a
``random.Random`` instance and returns a list of plain JSON-ready dicts.
Records are independent samples; no state is carried between them.
"""

from __future__ import annotations

import math
import random
import uuid
from datetime import UTC, datetime, timedelta
from typing import Any

from synthcity.generator import _tables as t
from synthcity.models.options import (
    CenteredOptions,
    ClimateOptions,
    FinancialOptions,
    GeoOptions,
    IotOptions,
    SocialOptions,
    TrafficOptions,
)

Record = dict[str, Any]


def _now_iso() -> str:
    return datetime.now(UTC).isoformat(timespec="milliseconds").replace("+00:00", "Z")


def _recent_iso(rng: random.Random, days: int = 1) -> str:
    moment = datetime.now(UTC) - timedelta(seconds=rng.uniform(0, days * 86400))
    return moment.isoformat(timespec="milliseconds").replace("+00:00", "Z")


def _uuid(rng: random.Random) -> str:
    return str(uuid.UUID(int=rng.getrandbits(128), version=4))


def _jitter(rng: random.Random, center: float, span: float) -> float:
    """Uniform offset in ``[center - span/2, center + span/2]``."""
    return center + (rng.random() - 0.5) * span


def _street_address(rng: random.Random) -> str:
    return f"{rng.choice(t.STREET_NAMES)} {rng.randint(1, 250)}"


def _full_name(rng: random.Random) -> str:
    return f"{rng.choice(t.FIRST_NAMES)} {rng.choice(t.LAST_NAMES)}"


def _company(rng: random.Random) -> str:
    return f"{rng.choice(t.COMPANY_PREFIXES)} {rng.choice(t.COMPANY_SUFFIXES)}"


def _sentence(rng: random.Random) -> str:
    words = rng.sample(t.LOREM_WORDS, k=rng.randint(4, 8))
    return " ".join(words).capitalize() + "."


# ---------------------------------------------------------------------------
# Builders
# ---------------------------------------------------------------------------


def build_geo(options: GeoOptions, count: int, rng: random.Random) -> list[Record]:
    data: list[Record] = []
    for _ in range(count):
        # Uniform sampling inside a disc of `radius` degrees.
        angle = rng.random() * 2 * math.pi
        r = options.radius * math.sqrt(rng.random())
        point: Record = {
            "id": _uuid(rng),
            "lat": options.center_lat + r * math.cos(angle),
            "lng": options.center_lng + r * math.sin(angle),
            "timestamp": _now_iso(),
            "type": rng.choice(t.LAND_USE_TYPES),
        }
        if options.include_metadata:
            point["metadata"] = {
                "address": _street_address(rng),
                "city": rng.choice(t.CITIES),
                "district": rng.choice(t.DISTRICTS),
                "postalCode": f"{rng.randint(50667, 51149)}",
                "country": rng.choice(t.COUNTRIES),
                "elevation": rng.randint(50, 349),
                "population_density": rng.randint(0, 9999),
                "building_height": rng.randint(5, 104),
            }
        data.append(point)
    return data


def build_traffic(options: TrafficOptions, count: int, rng: random.Random) -> list[Record]:
    span = options.radius * 2
    data: list[Record] = []
    for _ in range(count):
        segment: Record = {
            "id": _uuid(rng),
            "segment_id": f"SEG-{_uuid(rng)}",
            "coordinates": {
                "start": {
                    "lat": _jitter(rng, options.center_lat, span),
                    "lng": _jitter(rng, options.center_lng, span),
                },
                "end": {
                    "lat": _jitter(rng, options.center_lat, span),
                    "lng": _jitter(rng, options.center_lng, span),
                },
            },
            "road_type": rng.choice(t.ROAD_TYPES),
            "current_speed": rng.randint(20, 99),
            "speed_limit": rng.choice(t.SPEED_LIMITS),
            "congestion_level": rng.random(),
            "vehicle_count": rng.randint(0, 99),
            "timestamp": _now_iso(),
        }
        if options.include_vehicles:
            segment["vehicles"] = [
                {
                    "vehicle_id": _uuid(rng),
                    "type": rng.choice(t.VEHICLE_TYPES),
                    "speed": rng.randint(20, 99),
                    "direction": rng.random() * 360,
                    "license_plate": f"K-{rng.choice('ABCDEFGHJKLMNPRSTUVWXYZ')}{rng.choice('ABCDEFGHJKLMNPRSTUVWXYZ')} {rng.randint(1, 9999)}",
                }
                for _ in range(rng.randint(1, 10))
            ]
        if rng.random() < 0.1:
            segment["incident"] = {
                "type": rng.choice(t.INCIDENT_TYPES),
                "severity": rng.choice(t.SEVERITIES),
                "estimated_delay": rng.randint(5, 64),
            }
        data.append(segment)
    return data


def build_social(options: SocialOptions, count: int, rng: random.Random) -> list[Record]:
    data: list[Record] = []
    for _ in range(count):
        person: Record = {
            "id": _uuid(rng),
            "name": _full_name(rng),
            "age": rng.randint(18, 97),
            "gender": rng.choice(t.GENDERS),
            "occupation": rng.choice(t.JOB_TITLES),
            "income_bracket": rng.choice(t.INCOME_BRACKETS),
            "education_level": rng.choice(t.EDUCATION_LEVELS),
            "district": rng.choice(t.DISTRICTS),
            "household_size": rng.randint(1, 6),
        }
        if options.include_details:
            person["details"] = {
                "employment_status": rng.choice(t.EMPLOYMENT_STATUSES),
                "marital_status": rng.choice(t.MARITAL_STATUSES),
                "has_children": rng.random() > 0.5,
                "transportation_mode": rng.choice(t.TRANSPORT_MODES),
                "internet_usage_hours": rng.randint(0, 11),
                "social_participation": rng.random(),
                "health_insurance": rng.random() > 0.2,
                "voting_participation": rng.random() > 0.4,
            }
        data.append(person)
    return data


def build_financial(options: FinancialOptions, count: int, rng: random.Random) -> list[Record]:
    if options.data_type == "budget":
        # One row per municipal budget category, independent of `count`.
        year = datetime.now(UTC).year
        return [
            {
                "id": _uuid(rng),
                "category": category,
                "allocated_budget": rng.randint(0, 99_999_999),
                "spent": rng.randint(0, 79_999_999),
                "year": year,
                "quarter": rng.randint(1, 4),
                "projects_count": rng.randint(1, 50),
                "efficiency_score": rng.random(),
            }
            for category in t.BUDGET_CATEGORIES
        ]

    return [
        {
            "transaction_id": _uuid(rng),
            "timestamp": _recent_iso(rng),
            "amount": round(rng.random() * 10_000, 2),
            "currency": rng.choice(t.CURRENCIES),
            "type": rng.choice(t.TRANSACTION_TYPES),
            "category": rng.choice(t.SPENDING_CATEGORIES),
            "merchant": _company(rng),
            "location": {
                "lat": _jitter(rng, options.center_lat, 0.1),
                "lng": _jitter(rng, options.center_lng, 0.1),
            },
            "payment_method": rng.choice(t.PAYMENT_METHODS),
        }
        for _ in range(count)
    ]


def build_climate(options: ClimateOptions, count: int, rng: random.Random) -> list[Record]:
    start = options.start_date or datetime.now(UTC)
    if start.tzinfo is None:
        start = start.replace(tzinfo=UTC)
    step = timedelta(hours=options.interval_hours)
    data: list[Record] = []
    for i in range(count):
        moment = start + step * i
        data.append(
            {
                "id": _uuid(rng),
                "timestamp": moment.isoformat(timespec="milliseconds").replace("+00:00", "Z"),
                "temperature": round(rng.random() * 30 + 10, 1),
                "humidity": rng.randint(30, 89),
                "pressure": rng.randint(980, 1029),
                "wind_speed": round(rng.random() * 30, 1),
                "wind_direction": rng.randint(0, 359),
                "precipitation": round(rng.random() * 10, 1),
                "air_quality_index": rng.randint(0, 199),
                "pm25": round(rng.random() * 100, 1),
                "pm10": round(rng.random() * 150, 1),
                "co2_level": rng.randint(350, 549),
                "uv_index": rng.randint(0, 10),
                "visibility": rng.randint(1000, 10_999),
                "weather_condition": rng.choice(t.WEATHER_CONDITIONS),
            }
        )
    return data


def _sensor_payload(sensor_type: str, rng: random.Random) -> dict[str, Any]:
    if sensor_type == "parking":
        return {
            "occupied": rng.random() > 0.3,
            "duration_minutes": rng.randint(0, 179),
            "zone": rng.choice(t.PARKING_ZONES),
        }
    if sensor_type == "waste":
        return {
            "fill_level": rng.randint(0, 99),
            "temperature": rng.randint(10, 49),
            "last_collection": _recent_iso(rng),
        }
    if sensor_type == "lighting":
        return {
            "brightness": rng.randint(0, 99),
            "power_consumption": rng.randint(50, 249),
            "operational": rng.random() > 0.1,
        }
    if sensor_type == "water":
        return {
            "flow_rate": round(rng.random() * 100, 2),
            "pressure": round(rng.random() * 10, 2),
            "quality_index": rng.randint(0, 99),
            "leak_detected": rng.random() < 0.05,
        }
    if sensor_type == "energy":
        return {
            "consumption_kwh": round(rng.random() * 1000, 2),
            "voltage": 220 + rng.random() * 20 - 10,
            "current": round(rng.random() * 50, 2),
            "power_factor": rng.random(),
        }
    return {
        "decibel_level": rng.randint(40, 99),
        "peak_frequency": rng.randint(100, 5099),
        "violation": rng.random() < 0.1,
    }


def build_iot(options: IotOptions, count: int, rng: random.Random) -> list[Record]:
    data: list[Record] = []
    for _ in range(count):
        sensor_type = rng.choice(options.sensor_types)
        data.append(
            {
                "sensor_id": _uuid(rng),
                "type": sensor_type,
                "location": {
                    "lat": _jitter(rng, options.center_lat, 0.1),
                    "lng": _jitter(rng, options.center_lng, 0.1),
                },
                "timestamp": _now_iso(),
                "status": rng.choice(t.SENSOR_STATUSES),
                "battery_level": rng.randint(0, 99),
                "data": _sensor_payload(sensor_type, rng),
            }
        )
    return data


def build_transport(options: CenteredOptions, count: int, rng: random.Random) -> list[Record]:
    return [
        {
            "vehicle_id": _uuid(rng),
            "type": rng.choice(t.TRANSIT_TYPES),
            "line_number": rng.choice(t.TRANSIT_LINES),
            "current_location": {
                "lat": _jitter(rng, options.center_lat, 0.1),
                "lng": _jitter(rng, options.center_lng, 0.1),
            },
            "next_stop": rng.choice(t.STREET_NAMES),
            "capacity": rng.randint(50, 149),
            "occupancy": rng.randint(0, 99),
            "delay_minutes": rng.randint(-5, 9),
            "speed_kmh": rng.randint(10, 69),
            "timestamp": _now_iso(),
            "status": rng.choice(t.TRANSIT_STATUSES),
        }
        for _ in range(count)
    ]


def build_emergency(options: CenteredOptions, count: int, rng: random.Random) -> list[Record]:
    return [
        {
            "incident_id": _uuid(rng),
            "type": rng.choice(t.EMERGENCY_TYPES),
            "severity": rng.choice(t.EMERGENCY_SEVERITIES),
            "location": {
                "lat": _jitter(rng, options.center_lat, 0.1),
                "lng": _jitter(rng, options.center_lng, 0.1),
                "address": _street_address(rng),
            },
            "reported_at": _recent_iso(rng),
            "response_time_minutes": rng.randint(1, 30),
            "units_dispatched": rng.randint(1, 5),
            "status": rng.choice(t.EMERGENCY_STATUSES),
            "description": _sentence(rng),
            "affected_people": rng.randint(0, 49),
        }
        for _ in range(count)
    ]
