"""OpenTelemetry export for the document engine.

Engine code only talks to opentelemetry-api (see tracing.py). The host
process decides whether spans leave the process: engine_lifespan builds a
TelemetryConfig from Settings when TELEMETRY_ENABLED is true and calls
start() with the SQL engine so queries show up under engine operations.
"""

import logging
import threading

from opentelemetry import trace
from opentelemetry.exporter.otlp.proto.grpc.trace_exporter import OTLPSpanExporter
from opentelemetry.instrumentation.sqlalchemy import SQLAlchemyInstrumentor
from opentelemetry.sdk.resources import SERVICE_NAME, SERVICE_VERSION, Resource
from opentelemetry.sdk.trace import TracerProvider
from opentelemetry.sdk.trace.export import (
    BatchSpanProcessor,
    ConsoleSpanExporter,
    SpanExporter,
)
from opentelemetry.sdk.trace.sampling import ParentBased, TraceIdRatioBased
from sqlalchemy.ext.asyncio import AsyncEngine

from app.core.config import Settings

logger = logging.getLogger(__name__)

EXPORTERS = ("console", "otlp", "none")


def build_exporter(kind: str, otlp_endpoint: str | None) -> SpanExporter | None:
    """Return the span exporter for kind; None means spans are sampled but not exported."""
    if kind == "none":
        return None
    if kind == "otlp":
        if not otlp_endpoint:
            logger.warning("OTLP exporter requested without an endpoint; using console")
            return ConsoleSpanExporter()
        return OTLPSpanExporter(
            endpoint=otlp_endpoint, insecure=otlp_endpoint.startswith("http://")
        )
    if kind != "console":
        logger.warning("Unknown exporter %r (expected one of %s); using console", kind, EXPORTERS)
    return ConsoleSpanExporter()


class TelemetryConfig:
    """Tracer provider plus optional SQLAlchemy instrumentation for one process."""

    def __init__(
        self,
        service_name: str,
        service_version: str,
        environment: str = "development",
        exporter: str = "console",
        otlp_endpoint: str | None = None,
        sample_rate: float = 1.0,
    ) -> None:
        self.service_name = service_name
        self.service_version = service_version
        self.environment = environment
        self.exporter = exporter
        self.otlp_endpoint = otlp_endpoint
        self.sample_rate = sample_rate
        self.tracer_provider: TracerProvider | None = None
        self._sqlalchemy_instrumented = False

    @classmethod
    def from_settings(cls, settings: Settings) -> "TelemetryConfig":
        return cls(
            service_name=settings.app_name,
            service_version=settings.app_version,
            environment=settings.telemetry_environment,
            exporter=settings.telemetry_exporter,
            otlp_endpoint=settings.telemetry_otlp_endpoint,
            sample_rate=settings.telemetry_sample_rate,
        )

    def start(self, engine: AsyncEngine | None = None) -> TracerProvider:
        """Install the global tracer provider and instrument engine when given."""
        provider = TracerProvider(
            resource=Resource(
                attributes={
                    SERVICE_NAME: self.service_name,
                    SERVICE_VERSION: self.service_version,
                    "deployment.environment": self.environment,
                }
            ),
            sampler=ParentBased(TraceIdRatioBased(self.sample_rate)),
        )
        exporter = build_exporter(self.exporter, self.otlp_endpoint)
        if exporter is not None:
            provider.add_span_processor(BatchSpanProcessor(exporter))
        trace.set_tracer_provider(provider)
        self.tracer_provider = provider

        if engine is not None:
            SQLAlchemyInstrumentor().instrument(
                engine=engine.sync_engine, tracer_provider=provider
            )
            self._sqlalchemy_instrumented = True
        logger.info(
            "Tracing started: service=%s exporter=%s sample_rate=%s",
            self.service_name,
            self.exporter,
            self.sample_rate,
        )
        return provider

    def shutdown(self) -> None:
        """Flush pending spans and remove SQLAlchemy instrumentation."""
        if self._sqlalchemy_instrumented:
            SQLAlchemyInstrumentor().uninstrument()
            self._sqlalchemy_instrumented = False
        if self.tracer_provider is not None:
            try:
                self.tracer_provider.shutdown()
            except Exception:
                logger.exception("Error during telemetry shutdown")
            self.tracer_provider = None
        logger.info("Telemetry shutdown complete")


_telemetry: TelemetryConfig | None = None
_telemetry_lock = threading.RLock()


def get_telemetry() -> TelemetryConfig | None:
    """Return the process-wide telemetry instance, if started."""
    with _telemetry_lock:
        return _telemetry


def set_telemetry(telemetry: TelemetryConfig | None) -> None:
    global _telemetry
    with _telemetry_lock:
        _telemetry = telemetry
