"""Prometheus metrics for the Card Advisor service.

Metrics are organized into two categories:

Business Metrics (for Product):
- card_advisor_generation_total: Generation runs by outcome
- card_advisor_candidates_evaluated: Candidates scored per run
- card_advisor_recommendations_persisted_total: Rows written by replace runs
- card_advisor_top_score: Score of the best recommendation of the last run

Technical Metrics (for Engineering/SRE):
- card_advisor_generation_latency_seconds: End-to-end generation latency
- card_advisor_http_requests_total: HTTP requests by endpoint/status
- card_advisor_http_request_latency_seconds: HTTP latency by endpoint
"""

import time
from contextlib import contextmanager
from typing import Generator

from prometheus_client import Counter, Histogram, Gauge, REGISTRY, generate_latest
from prometheus_client.exposition import CONTENT_TYPE_LATEST


# =============================================================================
# Business Metrics
# =============================================================================

generation_total = Counter(
    "card_advisor_generation_total",
    "Total number of recommendation generation runs",
    ["outcome"],  # success, dependency_error, persistence_error
)

candidates_evaluated = Histogram(
    "card_advisor_candidates_evaluated",
    "Number of (category, card) candidates scored per generation run",
    buckets=[0, 1, 5, 10, 25, 50, 100, 250],
)

recommendations_persisted = Counter(
    "card_advisor_recommendations_persisted_total",
    "Total number of recommendation rows written by replace transactions",
)

top_score_gauge = Gauge(
    "card_advisor_top_score",
    "Score of the best recommendation produced by the most recent run",
)


# =============================================================================
# Technical Metrics
# =============================================================================

generation_latency = Histogram(
    "card_advisor_generation_latency_seconds",
    "Recommendation generation latency in seconds",
    buckets=[0.01, 0.05, 0.1, 0.25, 0.5, 1.0, 2.5, 5.0],
)

http_requests_total = Counter(
    "card_advisor_http_requests_total",
    "Total HTTP requests by endpoint and status",
    ["method", "endpoint", "status"],
)

http_request_latency = Histogram(
    "card_advisor_http_request_latency_seconds",
    "HTTP request latency by endpoint",
    ["method", "endpoint"],
    buckets=[0.01, 0.05, 0.1, 0.25, 0.5, 1.0, 2.5, 5.0],
)


# =============================================================================
# Helper Functions
# =============================================================================

def record_generation_success(candidate_count: int, persisted_count: int, top_score: float | None) -> None:
    """Record a successful generation run."""
    generation_total.labels(outcome="success").inc()
    candidates_evaluated.observe(candidate_count)
    recommendations_persisted.inc(persisted_count)
    top_score_gauge.set(top_score if top_score is not None else 0)


def record_generation_failure(outcome: str) -> None:
    """Record a failed generation run (dependency_error or persistence_error)."""
    generation_total.labels(outcome=outcome).inc()


@contextmanager
def track_generation_latency() -> Generator[None, None, None]:
    """Context manager to track generation latency."""
    start = time.perf_counter()
    try:
        yield
    finally:
        duration = time.perf_counter() - start
        generation_latency.observe(duration)


def record_http_request(method: str, endpoint: str, status: int, duration: float) -> None:
    """Record an HTTP request."""
    http_requests_total.labels(method=method, endpoint=endpoint, status=str(status)).inc()
    http_request_latency.labels(method=method, endpoint=endpoint).observe(duration)


def get_metrics() -> bytes:
    """Get current metrics in Prometheus format."""
    return generate_latest(REGISTRY)


def get_metrics_content_type() -> str:
    """Get the content type for metrics response."""
    return CONTENT_TYPE_LATEST
