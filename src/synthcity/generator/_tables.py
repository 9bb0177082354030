"""Static vocabularies sampled by the record builders."""

from __future__ import annotations

LAND_USE_TYPES = ("residential", "commercial", "industrial", "public", "green_space")

ROAD_TYPES = ("highway", "main_road", "street", "residential")
VEHICLE_TYPES = ("car", "bus", "truck", "motorcycle", "bicycle", "emergency")
SPEED_LIMITS = (30, 50, 70, 100, 130)
INCIDENT_TYPES = ("accident", "breakdown", "roadwork", "event")
SEVERITIES = ("low", "medium", "high")

GENDERS = ("male", "female", "other")
INCOME_BRACKETS = ("low", "medium", "high", "very_high")
EDUCATION_LEVELS = ("high_school", "bachelor", "master", "phd", "other")
EMPLOYMENT_STATUSES = ("employed", "unemployed", "student", "retired")
MARITAL_STATUSES = ("single", "married", "divorced", "widowed")
TRANSPORT_MODES = ("car", "public_transport", "bicycle", "walking")

CURRENCIES = ("EUR", "USD", "GBP")
TRANSACTION_TYPES = ("purchase", "transfer", "withdrawal", "deposit")
SPENDING_CATEGORIES = ("groceries", "utilities", "transport", "entertainment", "healthcare", "education")
PAYMENT_METHODS = ("card", "cash", "online", "mobile")
BUDGET_CATEGORIES = (
    "infrastructure",
    "education",
    "healthcare",
    "public_safety",
    "transportation",
    "environment",
    "culture",
    "administration",
)

WEATHER_CONDITIONS = ("clear", "cloudy", "rainy", "foggy", "stormy")

SENSOR_STATUSES = ("active", "inactive", "maintenance")
PARKING_ZONES = ("A", "B", "C", "D")

TRANSIT_TYPES = ("bus", "metro", "tram", "train")
TRANSIT_LINES = ("U1", "U2", "S1", "S2", "M1", "M2", "100", "200", "300")
TRANSIT_STATUSES = ("on_time", "delayed", "cancelled", "maintenance")

EMERGENCY_TYPES = ("fire", "medical", "police", "accident", "natural_disaster")
EMERGENCY_SEVERITIES = ("low", "medium", "high", "critical")
EMERGENCY_STATUSES = ("reported", "dispatched", "on_scene", "resolved")

FIRST_NAMES = (
    "Anna", "Ben", "Clara", "David", "Elif", "Felix", "Greta", "Hannah", "Ismail", "Jonas",
    "Katharina", "Lukas", "Mia", "Noah", "Olga", "Paul", "Quentin", "Rosa", "Sven", "Tara",
)
LAST_NAMES = (
    "Müller", "Schmidt", "Schneider", "Fischer", "Weber", "Meyer", "Wagner", "Becker",
    "Schulz", "Hoffmann", "Koch", "Richter", "Klein", "Wolf", "Yilmaz", "Novak",
)
JOB_TITLES = (
    "Software Engineer", "Nurse", "Lecturer", "Electrician", "Accountant", "Architect",
    "Bus Driver", "Chef", "Data Analyst", "Pharmacist", "Civil Engineer", "Designer",
)
DISTRICTS = (
    "Innenstadt", "Rodenkirchen", "Lindenthal", "Ehrenfeld", "Nippes",
    "Chorweiler", "Porz", "Kalk", "Mülheim",
)
STREET_NAMES = (
    "Hohe Straße", "Schildergasse", "Ehrenstraße", "Aachener Straße", "Venloer Straße",
    "Zülpicher Straße", "Neusser Straße", "Deutzer Freiheit", "Bonner Straße", "Luxemburger Straße",
)
CITIES = ("Köln", "Bonn", "Düsseldorf", "Leverkusen", "Bergisch Gladbach")
COUNTRIES = ("Germany", "Netherlands", "Belgium", "France", "Austria")
COMPANY_PREFIXES = ("Rhein", "Dom", "Nord", "Stadt", "Blau", "Kölner", "Euro", "Alt")
COMPANY_SUFFIXES = ("Handel GmbH", "Markt", "Logistik AG", "Service KG", "Werke", "Digital")
LOREM_WORDS = (
    "caller", "reports", "smoke", "near", "entrance", "vehicle", "blocking", "lane",
    "person", "injured", "requires", "assistance", "alarm", "triggered", "building",
    "water", "street", "flooded", "traffic", "signal", "outage",
)
