"""Overleaf MCP Metrics Configuration.

Local metrics collection using OpenTelemetry with a Prometheus reader.
Counts tool calls by tool and outcome and records call durations. Metrics are
off in test and CI environments unless explicitly enabled.
"""

from __future__ import annotations

import os
import socket
import time
from typing import Any

from opentelemetry import metrics
from opentelemetry.exporter.prometheus import PrometheusMetricReader
from opentelemetry.sdk.metrics import MeterProvider
from opentelemetry.sdk.resources import Resource
from prometheus_client import CONTENT_TYPE_LATEST
from prometheus_client import generate_latest

# =============================================================================
# SERVICE CONFIGURATION
# =============================================================================

SERVICE_NAME = os.getenv("OTEL_SERVICE_NAME", "overleaf-mcp")
SERVICE_VERSION = os.getenv("OTEL_SERVICE_VERSION", "1.0.0")
DEPLOYMENT_ENVIRONMENT = os.getenv("DEPLOYMENT_ENVIRONMENT", "local")


def is_test_environment() -> bool:
    """Detect if running in test environment."""
    return "PYTEST_CURRENT_TEST" in os.environ or "CI" in os.environ or "GITHUB_ACTIONS" in os.environ


# Disable metrics in test/CI environments by default
default_metrics_enabled = "false" if is_test_environment() else "true"
METRICS_ENABLED = os.getenv("MCP_METRICS_ENABLED", default_metrics_enabled).lower() == "true"

# Metrics instances
meter = None
tool_calls_counter = None
tool_call_duration = None
prometheus_reader = None

_metrics_initialized = False


def get_resource() -> Resource:
    """Create OpenTelemetry resource with service information."""
    return Resource.create(
        {
            "service.name": SERVICE_NAME,
            "service.version": SERVICE_VERSION,
            "deployment.environment": DEPLOYMENT_ENVIRONMENT,
            "host.name": socket.gethostname(),
        }
    )


def initialize_metrics() -> None:
    """Initialize metrics collection with a Prometheus reader."""
    global meter, tool_calls_counter, tool_call_duration, prometheus_reader

    if not METRICS_ENABLED:
        return

    prometheus_reader = PrometheusMetricReader()
    meter_provider = MeterProvider(resource=get_resource(), metric_readers=[prometheus_reader])
    metrics.set_meter_provider(meter_provider)
    meter = metrics.get_meter(__name__)

    tool_calls_counter = meter.create_counter(
        name="mcp_tool_calls_total",
        description="Total number of MCP tool calls",
        unit="1",
    )
    tool_call_duration = meter.create_histogram(
        name="mcp_tool_call_duration_seconds",
        description="Duration of MCP tool calls",
        unit="s",
    )


def is_metrics_enabled() -> bool:
    """Check if metrics collection is enabled."""
    return METRICS_ENABLED and meter is not None


def record_tool_call_start(tool_name: str, args: tuple, kwargs: dict) -> float | None:
    """Record start of tool call, return start time."""
    if not is_metrics_enabled():
        return None
    return time.perf_counter()


def _record(tool_name: str, start_time: float | None, status: str) -> None:
    attributes = {"tool_name": tool_name, "status": status, "environment": DEPLOYMENT_ENVIRONMENT}
    if tool_calls_counter:
        tool_calls_counter.add(1, attributes)
    if tool_call_duration and start_time is not None:
        tool_call_duration.record(time.perf_counter() - start_time, attributes)


def record_tool_call_success(tool_name: str, start_time: float | None, result_size: int = 0) -> None:
    """Record successful tool call."""
    if is_metrics_enabled():
        _record(tool_name, start_time, "success")


def record_tool_call_error(tool_name: str, start_time: float | None, error: Exception) -> None:
    """Record failed tool call, labelled with the error code when there is one."""
    if is_metrics_enabled():
        _record(tool_name, start_time, getattr(error, "error_code", "error"))


def get_metrics_export() -> tuple[str, str]:
    """Export metrics in Prometheus format."""
    if not is_metrics_enabled() or not prometheus_reader:
        return "# Metrics not available\n", "text/plain"
    return generate_latest().decode("utf-8"), CONTENT_TYPE_LATEST


def get_metrics_summary() -> dict[str, Any]:
    """Get metrics summary for debugging."""
    if not is_metrics_enabled():
        return {"status": "disabled"}
    return {
        "status": "active",
        "service_name": SERVICE_NAME,
        "service_version": SERVICE_VERSION,
        "environment": DEPLOYMENT_ENVIRONMENT,
        "prometheus_enabled": prometheus_reader is not None,
    }


def ensure_metrics_initialized() -> None:
    """Initialize metrics once, when the server starts."""
    global _metrics_initialized
    if _metrics_initialized:
        return
    if METRICS_ENABLED and not is_test_environment():
        initialize_metrics()
    _metrics_initialized = True


def shutdown_metrics() -> None:
    """Shutdown metrics collection."""
    if prometheus_reader:
        prometheus_reader.shutdown()
