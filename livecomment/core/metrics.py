"""Prometheus metrics for the livecomment service."""

import os

from prometheus_client import (
    CONTENT_TYPE_LATEST,
    CollectorRegistry,
    Counter,
    Gauge,
    Histogram,
    Info,
    generate_latest,
    multiprocess,
)

REGISTRY = CollectorRegistry()

# gunicorn and friends export through a shared directory
if "prometheus_multiproc_dir" in os.environ:
    multiprocess.MultiProcessCollector(REGISTRY)


APP_INFO = Info(
    "livecomment_app",
    "Application information",
    registry=REGISTRY,
)


# ============================================
# HTTP Request Metrics
# ============================================
HTTP_REQUESTS_TOTAL = Counter(
    "http_requests_total",
    "Total HTTP requests",
    ["method", "endpoint", "status_code"],
    registry=REGISTRY,
)

HTTP_REQUEST_DURATION_SECONDS = Histogram(
    "http_request_duration_seconds",
    "HTTP request duration in seconds",
    ["method", "endpoint"],
    buckets=[0.005, 0.01, 0.025, 0.05, 0.1, 0.25, 0.5, 1.0, 2.5, 5.0],
    registry=REGISTRY,
)

HTTP_REQUESTS_IN_PROGRESS = Gauge(
    "http_requests_in_progress",
    "Number of HTTP requests currently in progress",
    ["method", "endpoint"],
    registry=REGISTRY,
)


# ============================================
# Livecomment Metrics
# ============================================
LIVECOMMENTS_POSTED_TOTAL = Counter(
    "livecomments_posted_total",
    "Livecomments accepted and stored",
    registry=REGISTRY,
)

LIVECOMMENTS_REJECTED_TOTAL = Counter(
    "livecomments_rejected_total",
    "Livecomments refused because they contained an NG word",
    registry=REGISTRY,
)

LIVECOMMENTS_PURGED_TOTAL = Counter(
    "livecomments_purged_total",
    "Existing livecomments deleted after an NG word registration",
    registry=REGISTRY,
)

NG_WORDS_REGISTERED_TOTAL = Counter(
    "ng_words_registered_total",
    "NG words registered by stream owners",
    registry=REGISTRY,
)

LIVECOMMENT_REPORTS_TOTAL = Counter(
    "livecomment_reports_total",
    "Abuse reports filed against livecomments",
    registry=REGISTRY,
)

PURGE_DURATION_SECONDS = Histogram(
    "ng_word_purge_duration_seconds",
    "Time spent scanning and purging a stream after an NG word registration",
    buckets=[0.001, 0.005, 0.01, 0.05, 0.1, 0.5, 1.0, 5.0],
    registry=REGISTRY,
)


def get_metrics() -> bytes:
    """Generate latest metrics in Prometheus format."""
    return generate_latest(REGISTRY)


def get_content_type() -> str:
    return CONTENT_TYPE_LATEST


def set_app_info(version: str, environment: str) -> None:
    APP_INFO.info({
        "version": version,
        "environment": environment,
    })
