"""Prometheus metrics for ERP fetches, Tally syncs, and outstanding balances"""

from prometheus_client import Counter, Histogram, Gauge

from ledger_gateway.domain.models import AgeingBuckets

# ERP API metrics
erp_fetch_failures_counter = Counter(
    "erp_fetch_failures_total",
    "Failed ERP API calls",
    ["resource"],  # transactions | parties | bnpl_limits | tally_sync_log
)

erp_fetch_latency_histogram = Histogram(
    "erp_fetch_latency_seconds",
    "ERP API response time",
    ["resource"],
    buckets=[0.05, 0.1, 0.25, 0.5, 1.0, 2.5, 5.0],
)

# Tally sync metrics
tally_sync_counter = Counter(
    "ledger_tally_sync_total",
    "Tally sync triggers by outcome",
    ["sync_type", "outcome"],  # push | pull, success | failed
)

# Outstanding balances from the latest ageing computation
outstanding_gauge = Gauge(
    "ledger_outstanding_amount",
    "Outstanding balance per ageing bucket",
    ["ledger", "bucket"],  # receivables | payables
)

# Service health
request_duration_histogram = Histogram(
    "http_request_duration_seconds",
    "HTTP request latency",
    ["method", "endpoint", "status"],
)


def record_ageing(ledger: str, buckets: AgeingBuckets) -> None:
    """Publish the latest ageing buckets for receivables or payables"""
    for bucket, amount in buckets.as_dict().items():
        outstanding_gauge.labels(ledger=ledger, bucket=bucket).set(float(amount))


def record_tally_sync(sync_type: str, succeeded: bool) -> None:
    outcome = "success" if succeeded else "failed"
    tally_sync_counter.labels(sync_type=sync_type, outcome=outcome).inc()
