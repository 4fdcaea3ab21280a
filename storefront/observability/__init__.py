"""Tracing setup for the storefront engines."""
from storefront.observability.otel_setup import SERVICE_VERSION, build_tracer_provider, setup_otel

__all__ = ["SERVICE_VERSION", "build_tracer_provider", "setup_otel"]
