"""synthcity - Synthetic smart-city data server and real-time dashboard client."""

from importlib.metadata import PackageNotFoundError, version

try:
    __version__ = version("synthcity")
except PackageNotFoundError:
    __version__ = "0+local"
from synthcity.client import DashboardClient
from synthcity.config import ClientConfig, SynthConfig
from synthcity.exceptions import (
    EmptyExportError,
    GenerationError,
    InvalidDataTypeError,
    InvalidRequestError,
    SynthConfigError,
    SynthError,
    SynthTransportError,
)
from synthcity.generator import DATA_TYPES, DataType, generate, generate_one
from synthcity.server import create_app
from synthcity.stream import StreamSessionManager

__all__ = [
    "DATA_TYPES",
    "ClientConfig",
    "DashboardClient",
    "DataType",
    "EmptyExportError",
    "GenerationError",
    "InvalidDataTypeError",
    "InvalidRequestError",
    "StreamSessionManager",
    "SynthConfig",
    "SynthConfigError",
    "SynthError",
    "SynthTransportError",
    "__version__",
    "create_app",
    "generate",
    "generate_one",
]
