"""
Storefront OpenTelemetry Setup

Engine modules create their spans through ``trace.get_tracer(__name__)``.
Until ``setup_otel`` installs a provider those spans are no-ops.
"""
from __future__ import annotations
from typing import Optional
import os

from opentelemetry import trace
from opentelemetry.sdk.resources import Resource
from opentelemetry.sdk.trace import TracerProvider
from opentelemetry.sdk.trace.export import BatchSpanProcessor, ConsoleSpanExporter, SimpleSpanProcessor

SERVICE_VERSION = "0.1.0"


def build_tracer_provider(
    service_name: str = "storefront",
    endpoint: Optional[str] = None,
    console: bool = False,
) -> TracerProvider:
    """Provider tagged with the service name and version.

    Spans go to OTLP when an endpoint is given (or set in
    ``OTEL_EXPORTER_OTLP_ENDPOINT``) and to stdout when ``console`` is set.
    """
    provider = TracerProvider(
        resource=Resource.create({"service.name": service_name, "service.version": SERVICE_VERSION})
    )
    otlp_endpoint = endpoint or os.getenv("OTEL_EXPORTER_OTLP_ENDPOINT")
    if otlp_endpoint:
        from opentelemetry.exporter.otlp.proto.grpc.trace_exporter import OTLPSpanExporter
        provider.add_span_processor(BatchSpanProcessor(OTLPSpanExporter(endpoint=otlp_endpoint)))
    if console:
        provider.add_span_processor(SimpleSpanProcessor(ConsoleSpanExporter()))
    return provider


def setup_otel(
    service_name: str = "storefront",
    endpoint: Optional[str] = None,
    console: bool = False,
):
    """Install the storefront tracer provider globally and return a tracer."""
    trace.set_tracer_provider(build_tracer_provider(service_name, endpoint, console))
    return trace.get_tracer(service_name)
