"""
Redis command tracing.

OpenTelemetry client spans around single Redis round trips.
"""

from contextlib import contextmanager
from typing import Iterator, Optional

from opentelemetry import trace
from opentelemetry.trace import Span, SpanKind, Status, StatusCode

tracer = trace.get_tracer(__name__)


@contextmanager
def trace_command(command: str, group: Optional[str] = None) -> Iterator[Span]:
    """
    Open a client span named ``redis.<command>``.

    Errors are recorded on the span and re-raised unchanged.
    """
    span_name = f"redis.{command.lower()}"
    with tracer.start_as_current_span(span_name, kind=SpanKind.CLIENT) as span:
        span.set_attribute("db.system", "redis")
        span.set_attribute("redis.command", command.upper())
        if group:
            span.set_attribute("stowage.group", group)

        try:
            yield span
        except Exception as e:
            span.set_status(Status(StatusCode.ERROR, str(e)))
            span.set_attribute("redis.error.type", type(e).__name__)
            raise
