import os
from dataclasses import dataclass


@dataclass
class Settings:
    SNOWFLAKE_EPOCH_MS: int = 1420070400000
    SNOWFLAKE_WORKER_ID: int = 1
    SNOWFLAKE_PROCESS_ID: int = 0
    SNOWFLAKE_INITIAL_INCREMENT: int = 0
    TRANSPORT_ALPHABET: str = "standard"
    GATEWAY_API_KEY: str = ""
    LOG_LEVEL: str = "INFO"
    LOG_FORMAT: str = "json"
    TRACING_STRATEGY: str = "none"
    TRACING_EXPORTER: str = "none"
    TRACING_SAMPLE_RATE: float = 1.0
    OTEL_SERVICE_NAME: str = "snowflake-gateway"
    OTEL_EXPORTER_OTLP_ENDPOINT: str = ""
    OTEL_EXPORTER_OTLP_PROTOCOL: str = "http/protobuf"


def load_settings() -> Settings:
    return Settings(
        SNOWFLAKE_EPOCH_MS=int(os.getenv("SNOWFLAKE_EPOCH_MS", "1420070400000")),
        SNOWFLAKE_WORKER_ID=int(os.getenv("SNOWFLAKE_WORKER_ID", "1")),
        SNOWFLAKE_PROCESS_ID=int(os.getenv("SNOWFLAKE_PROCESS_ID", "0")),
        SNOWFLAKE_INITIAL_INCREMENT=int(os.getenv("SNOWFLAKE_INITIAL_INCREMENT", "0")),
        TRANSPORT_ALPHABET=os.getenv("TRANSPORT_ALPHABET", "standard").lower(),
        GATEWAY_API_KEY=os.getenv("GATEWAY_API_KEY", ""),
        LOG_LEVEL=os.getenv("LOG_LEVEL", "INFO").upper(),
        LOG_FORMAT=os.getenv("LOG_FORMAT", "json").lower(),
        TRACING_STRATEGY=os.getenv("TRACING_STRATEGY", "none").lower(),
        TRACING_EXPORTER=os.getenv("TRACING_EXPORTER", "none").lower(),
        TRACING_SAMPLE_RATE=float(os.getenv("TRACING_SAMPLE_RATE", "1.0")),
        OTEL_SERVICE_NAME=os.getenv("OTEL_SERVICE_NAME", "snowflake-gateway"),
        OTEL_EXPORTER_OTLP_ENDPOINT=os.getenv("OTEL_EXPORTER_OTLP_ENDPOINT", ""),
        OTEL_EXPORTER_OTLP_PROTOCOL=os.getenv("OTEL_EXPORTER_OTLP_PROTOCOL", "http/protobuf").lower(),
    )
