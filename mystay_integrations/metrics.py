"""
Prometheus metrics for the MyStay integration layer
"""

from prometheus_client import Counter, Histogram

# Provider call metrics
provider_requests_total = Counter(
    'mystay_integration_requests_total',
    'Total third-party provider calls',
    ['domain', 'provider', 'method', 'status']
)

provider_request_duration = Histogram(
    'mystay_integration_request_duration_seconds',
    'Third-party provider call latency',
    ['domain', 'provider']
)

# Config store metrics
config_updates_total = Counter(
    'mystay_integration_config_updates_total',
    'Per-hotel integration config writes',
    ['domain', 'outcome']
)

# Manager metrics
connectors_created_total = Counter(
    'mystay_integration_connectors_created_total',
    'Connector instances built by the integration manager',
    ['domain', 'source']
)


def record_provider_call(domain: str, provider: str, method: str, status: str, duration_seconds: float) -> None:
    """Record one provider HTTP exchange; status is the HTTP code or 'transport_error'"""
    provider_requests_total.labels(domain=domain, provider=provider, method=method, status=status).inc()
    provider_request_duration.labels(domain=domain, provider=provider).observe(duration_seconds)
