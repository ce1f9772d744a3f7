from typing import Any, Dict, NoReturn, Optional

from fastapi import HTTPException, Request
from fastapi.responses import JSONResponse, PlainTextResponse
from opentelemetry.trace import SpanKind

from .errors import SnowflakeError
from .logging_service import LoggingService
from .metrics import MetricsService
from .settings import Settings
from .snowflake import SnowflakeGenerator
from .tracing import TracingService
from .transport import TransportEncoder, build_codec


class SnowflakeApp:
    def __init__(self, settings: Settings) -> None:
        self._settings = settings
        self._metrics = MetricsService()
        self._logger = LoggingService(settings)
        self._tracing = TracingService(settings)
        self._generator = SnowflakeGenerator(
            epoch=settings.SNOWFLAKE_EPOCH_MS,
            increment=settings.SNOWFLAKE_INITIAL_INCREMENT,
            worker_id=settings.SNOWFLAKE_WORKER_ID,
            process_id=settings.SNOWFLAKE_PROCESS_ID,
        )
        self._transport = TransportEncoder(self._generator, build_codec(settings.TRANSPORT_ALPHABET))

    @property
    def generator(self) -> SnowflakeGenerator:
        return self._generator

    @property
    def metrics(self) -> MetricsService:
        return self._metrics

    async def startup_tasks(self) -> None:
        self._tracing.init_tracing()
        self._logger.log(
            "snowflake_gateway_started",
            epoch=self._generator.epoch,
            worker_id=self._generator.worker_id,
            process_id=self._generator.process_id,
            tracing=self._tracing.enabled,
        )

    async def shutdown_tasks(self) -> None:
        self._logger.log("snowflake_gateway_stopped", generated=self._metrics.get("snowflakes_generated_total"))

    def _reject(self, event: str, exc: SnowflakeError) -> NoReturn:
        self._metrics.inc("snowflake_errors_total")
        self._logger.warn(event, error=type(exc).__name__, value=exc.value, detail=str(exc))
        raise HTTPException(status_code=400, detail=str(exc)) from exc

    def _generate(self, timestamp: Any) -> Dict[str, Any]:
        try:
            snowflake = self._generator.generate(timestamp)
            encoded = self._transport.encode(snowflake)
        except SnowflakeError as exc:
            self._reject("generate_rejected", exc)
        self._metrics.inc("snowflakes_generated_total")
        return {"snowflake": snowflake, "encoded": encoded}

    async def generate(self, payload: Optional[Dict[str, Any]], request: Request):
        payload = payload or {}
        api_key = payload.get("api_key") or request.headers.get("x-api-key", "")
        if self._settings.GATEWAY_API_KEY and api_key != self._settings.GATEWAY_API_KEY:
            self._metrics.inc("api_key_denied_total")
            raise HTTPException(status_code=401, detail="invalid api key")

        timestamp = payload.get("timestamp")
        traceparent = request.headers.get("traceparent", "")
        span_ctx = self._tracing.extract_context(traceparent) if traceparent else None

        if self._tracing.should_record(bool(traceparent)):
            with self._tracing.tracer.start_as_current_span(
                "snowflake.generate", context=span_ctx, kind=SpanKind.SERVER
            ) as span:
                result = self._generate(timestamp)
                self._tracing.record_generated(span, self._generator.deconstruct(result["snowflake"]))
                self._tracing.annotate(result)
        else:
            result = self._generate(timestamp)
        self._logger.log("snowflake_generated", snowflake=result["snowflake"])
        return JSONResponse(result)

    async def deconstruct(self, snowflake: str):
        try:
            deconstructed = self._generator.deconstruct(snowflake)
        except SnowflakeError as exc:
            self._reject("deconstruct_rejected", exc)
        self._metrics.inc("snowflakes_deconstructed_total")
        return JSONResponse(deconstructed.to_dict())

    async def encode(self, payload: Dict[str, Any]):
        try:
            encoded = self._transport.encode(payload.get("snowflake"))
        except SnowflakeError as exc:
            self._reject("encode_rejected", exc)
        self._metrics.inc("snowflakes_encoded_total")
        return JSONResponse({"encoded": encoded})

    async def decode(self, payload: Dict[str, Any]):
        try:
            deconstructed = self._transport.decode(payload.get("encoded"))
        except SnowflakeError as exc:
            self._reject("decode_rejected", exc)
        self._metrics.inc("snowflakes_decoded_total")
        return JSONResponse(deconstructed.to_dict())

    async def metrics_endpoint(self):
        return PlainTextResponse(self._metrics.to_prometheus())

    async def health(self):
        return JSONResponse({"ok": True})

    async def ready(self):
        return JSONResponse({"ok": True})
