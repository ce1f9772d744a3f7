import random
from typing import Any, Dict

from opentelemetry import propagate, trace
from opentelemetry.exporter.otlp.proto.http.trace_exporter import (
    OTLPSpanExporter as OtlpHttpSpanExporter,
)
from opentelemetry.sdk.resources import Resource
from opentelemetry.sdk.trace import TracerProvider
from opentelemetry.sdk.trace.export import (
    BatchSpanProcessor,
    ConsoleSpanExporter,
    SimpleSpanProcessor,
)
from opentelemetry.trace import format_trace_id

from .settings import Settings
from .snowflake import DeconstructedSnowflake


class TracingService:
    def __init__(self, settings: Settings) -> None:
        self._settings = settings
        self.tracer = trace.get_tracer("snowflake_gateway")
        self.enabled = False

    def _create_otlp_exporter(self):
        if self._settings.OTEL_EXPORTER_OTLP_PROTOCOL.startswith("grpc"):
            from opentelemetry.exporter.otlp.proto.grpc.trace_exporter import (
                OTLPSpanExporter as OtlpGrpcSpanExporter,
            )

            return OtlpGrpcSpanExporter(endpoint=self._settings.OTEL_EXPORTER_OTLP_ENDPOINT, insecure=True)
        return OtlpHttpSpanExporter(endpoint=self._settings.OTEL_EXPORTER_OTLP_ENDPOINT)

    def init_tracing(self) -> None:
        if self.enabled:
            return
        if self._settings.TRACING_STRATEGY == "none" or self._settings.TRACING_EXPORTER == "none":
            return
        resource = Resource.create({"service.name": self._settings.OTEL_SERVICE_NAME})
        provider = TracerProvider(resource=resource)
        if self._settings.TRACING_EXPORTER == "otlp" and self._settings.OTEL_EXPORTER_OTLP_ENDPOINT:
            provider.add_span_processor(BatchSpanProcessor(self._create_otlp_exporter()))
        else:
            provider.add_span_processor(SimpleSpanProcessor(ConsoleSpanExporter()))
        trace.set_tracer_provider(provider)
        self.tracer = trace.get_tracer("snowflake_gateway")
        self.enabled = True

    def should_sample(self) -> bool:
        if self._settings.TRACING_SAMPLE_RATE <= 0:
            return False
        if self._settings.TRACING_SAMPLE_RATE >= 1:
            return True
        return random.random() < self._settings.TRACING_SAMPLE_RATE

    def should_record(self, has_parent: bool) -> bool:
        if not self.enabled or self._settings.TRACING_STRATEGY == "none":
            return False
        if self._settings.TRACING_STRATEGY == "propagate" and not has_parent:
            return False
        return self.should_sample()

    def extract_context(self, traceparent: str):
        if not traceparent:
            return None
        return propagate.extract({"traceparent": traceparent})

    def current_trace_id(self) -> str:
        span = trace.get_current_span()
        if span and span.get_span_context().is_valid:
            return format_trace_id(span.get_span_context().trace_id)
        return ""

    def annotate(self, payload: Dict[str, Any]) -> None:
        trace_id = self.current_trace_id()
        if trace_id:
            payload["trace_id"] = trace_id

    def record_generated(self, span, deconstructed: DeconstructedSnowflake) -> None:
        span.set_attribute("snowflake.id", deconstructed.snowflake)
        span.set_attribute("snowflake.epoch", deconstructed.epoch)
        span.set_attribute("snowflake.delta", deconstructed.timestamp - deconstructed.epoch)
        span.set_attribute("snowflake.increment", deconstructed.increment)
        span.set_attribute("snowflake.worker_id", deconstructed.worker_id)
        span.set_attribute("snowflake.process_id", deconstructed.process_id)
