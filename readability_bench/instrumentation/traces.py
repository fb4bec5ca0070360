"""
Tracing utilities for parser benchmarking.

Wraps OpenTelemetry so every measured test case can be recorded as a
span. When tracing is disabled the OpenTelemetry API's no-op tracer is
used and spans cost nothing.
"""

import sys
from contextlib import contextmanager
from typing import Any, Iterator, Optional

from opentelemetry import trace
from opentelemetry.sdk.resources import Resource
from opentelemetry.sdk.trace import TracerProvider
from opentelemetry.sdk.trace.export import ConsoleSpanExporter, SimpleSpanProcessor
from opentelemetry.trace import Status, StatusCode


class TracingConfig:
    """Configuration for tracing setup."""

    def __init__(
        self,
        service_name: str = "readability-bench",
        enabled: bool = False,
    ):
        self.service_name = service_name
        self.enabled = enabled


class Tracer:
    """Span factory backed by OpenTelemetry."""

    def __init__(self, config: Optional[TracingConfig] = None):
        self.config = config or TracingConfig()
        self._provider: Optional[TracerProvider] = None
        self._otel_tracer = None
        self._initialized = False

    def initialize(self) -> "Tracer":
        """Initialize the tracing backend."""
        if self._initialized:
            return self

        if self.config.enabled:
            resource = Resource.create({"service.name": self.config.service_name})
            self._provider = TracerProvider(resource=resource)
            # stderr keeps spans out of the report echoed on stdout
            exporter = ConsoleSpanExporter(out=sys.stderr)
            self._provider.add_span_processor(SimpleSpanProcessor(exporter))
            self._otel_tracer = self._provider.get_tracer(self.config.service_name)
        else:
            self._otel_tracer = trace.get_tracer(self.config.service_name)

        self._initialized = True
        return self

    def shutdown(self) -> None:
        """Flush and shut down the tracing backend."""
        if self._provider:
            self._provider.shutdown()
            self._provider = None
        self._initialized = False

    @contextmanager
    def span(
        self,
        name: str,
        attributes: Optional[dict] = None,
    ) -> Iterator[Any]:
        """Create a traced span for a synchronous operation.

        Usage:
            with tracer.span("measure", {"test_case": "001"}) as span:
                stats = measure(...)
                span.set_attribute("mean_ms", stats.mean)
        """
        if not self._initialized:
            self.initialize()

        span_obj = self._otel_tracer.start_span(name, attributes=attributes or {})
        try:
            yield span_obj
        except Exception as e:
            span_obj.set_status(Status(StatusCode.ERROR, str(e)))
            span_obj.record_exception(e)
            raise
        finally:
            span_obj.end()
