from .app import SnowflakeApp
from .bit_layout import binary_from_decimal, decimal_from_binary
from .errors import (
    InvalidInputError,
    InvalidSnowflakeError,
    InvalidTimestampError,
    MalformedTransportStringError,
    SnowflakeError,
)
from .settings import Settings, load_settings
from .snowflake import DeconstructedSnowflake, GeneratorState, SnowflakeGenerator
from .transport import Base64TextCodec, TextCodec, TransportEncoder

__all__ = [
    "Base64TextCodec",
    "DeconstructedSnowflake",
    "GeneratorState",
    "InvalidInputError",
    "InvalidSnowflakeError",
    "InvalidTimestampError",
    "MalformedTransportStringError",
    "Settings",
    "SnowflakeApp",
    "SnowflakeError",
    "SnowflakeGenerator",
    "TextCodec",
    "TransportEncoder",
    "binary_from_decimal",
    "decimal_from_binary",
    "load_settings",
]
