# Copyright (c) 2025 Damien Boisvert (AlphaGameDeveloper)
#
# This software is released under the MIT License.
# https://opensource.org/licenses/MIT

import os
from prometheus_client import CollectorRegistry, Counter, Histogram, CONTENT_TYPE_LATEST, generate_latest, multiprocess
from prometheus_client.registry import REGISTRY

# Counts every request, labelled by sanitized path
total_requests = Counter(
    "http_requests_total",
    "Number of get requests.",
    ["path"],
)

response_duration = Histogram(
    "http_response_duration_seconds",
    "Duration of HTTP responses.",
    ["path"],
)

# Paths that matched nothing share one series
NOT_FOUND_PATH = "<not-found>"

def record_metrics(path: str, duration: float, status: int = 200):
    if status == 404:
        path = NOT_FOUND_PATH
    total_requests.labels(path=path).inc()
    response_duration.labels(path=path).observe(duration)

def render_metrics() -> tuple[bytes, str]:
    """Exposition payload and content type for a /metrics response.

    Under gunicorn each worker keeps its own samples; with
    PROMETHEUS_MULTIPROC_DIR set they are merged from the shared directory.
    """
    if os.getenv("PROMETHEUS_MULTIPROC_DIR"):
        registry = CollectorRegistry()
        multiprocess.MultiProcessCollector(registry)
        return generate_latest(registry), CONTENT_TYPE_LATEST
    return generate_latest(REGISTRY), CONTENT_TYPE_LATEST
