"""
OpenTelemetry tracing configuration.

Provides:
- Auto-instrumentation for FastAPI and asyncpg
- Manual span creation helpers for use cases
- OTLP export (Jaeger/Tempo) and an optional console exporter for debugging
"""

import os
from typing import Any

from opentelemetry import trace
from opentelemetry.exporter.otlp.proto.grpc.trace_exporter import OTLPSpanExporter
from opentelemetry.instrumentation.asyncpg import AsyncPGInstrumentor
from opentelemetry.instrumentation.fastapi import FastAPIInstrumentor
from opentelemetry.sdk.resources import SERVICE_NAME, Resource
from opentelemetry.sdk.trace import TracerProvider
from opentelemetry.sdk.trace.export import BatchSpanProcessor, ConsoleSpanExporter
from opentelemetry.sdk.trace.sampling import ALWAYS_ON


class TracingConfig:
    """
    Usage:
        # Initialize once at app startup
        tracing = TracingConfig(service_name="gift-wave-service")
        tracing.setup()

        # Get tracer for manual spans
        tracer = tracing.get_tracer(name=__name__)
    """

    def __init__(
        self,
        *,
        service_name: str,
        otlp_endpoint: str | None = None,
        enable_console: bool = False,
    ) -> None:
        self.service_name = service_name
        self.otlp_endpoint = otlp_endpoint or os.getenv('OTEL_EXPORTER_OTLP_ENDPOINT')
        self.enable_console = (
            enable_console or os.getenv('OTEL_CONSOLE_EXPORT', 'false').lower() == 'true'
        )

        self._provider: TracerProvider | None = None
        self._asyncpg_instrumentor: AsyncPGInstrumentor | None = None

    def setup(self) -> None:
        """
        Setup OpenTelemetry tracing.

        Should be called once at application startup. Spans go to the OTLP
        endpoint (port 4317) when one is configured.
        """
        resource = Resource(attributes={SERVICE_NAME: self.service_name})

        # Tail-based sampling belongs in the collector; the SDK keeps everything
        self._provider = TracerProvider(resource=resource, sampler=ALWAYS_ON)

        if self.otlp_endpoint:
            otlp_exporter = OTLPSpanExporter(endpoint=self.otlp_endpoint)
            self._provider.add_span_processor(BatchSpanProcessor(otlp_exporter))

        if self.enable_console:
            self._provider.add_span_processor(BatchSpanProcessor(ConsoleSpanExporter()))

        trace.set_tracer_provider(self._provider)

    def instrument_fastapi(self, *, app: Any, excluded_urls: str = 'health,metrics') -> None:
        FastAPIInstrumentor.instrument_app(app, excluded_urls=excluded_urls)

    def instrument_asyncpg(self) -> None:
        self._asyncpg_instrumentor = AsyncPGInstrumentor()
        self._asyncpg_instrumentor.instrument()

    def get_tracer(self, *, name: str) -> trace.Tracer:
        """
        Args:
            name: Tracer name (typically __name__ of the module)

        Returns:
            OpenTelemetry Tracer instance
        """
        return trace.get_tracer(name)

    def shutdown(self) -> None:
        if self._asyncpg_instrumentor:
            self._asyncpg_instrumentor.uninstrument()
        if self._provider:
            self._provider.shutdown()
