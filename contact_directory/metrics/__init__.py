# type: ignore
# pyright: reportMissingImports=false, reportGeneralTypeErrors=false
"""
Prometheus metrics — single source of truth for all metric objects.
Imported by services and middleware. Never instantiated in controllers.
"""
from prometheus_client import Counter, Gauge, Histogram

# ── HTTP Metrics (used by middleware) ──
REQUEST_COUNT = Counter(
    "http_requests_total", "Total HTTP requests", ["method", "endpoint", "status"]
)
REQUEST_LATENCY = Histogram(
    "http_request_duration_seconds", "HTTP request latency", ["method", "endpoint"]
)
HTTP_ERRORS = Counter(
    "http_errors_total", "Total HTTP errors", ["method", "endpoint", "status"]
)

# ── Business Metrics (updated by service layer only) ──
EMPLOYEES_CREATED = Counter(
    "employees_created_total", "Total employee records created"
)
EMPLOYEES_TOTAL = Gauge(
    "employees_total", "Employee records currently stored"
)
INTAKE_REJECTED = Counter(
    "employee_intake_rejected_total", "Intake batches rejected", ["reason"]
)
INTAKE_BATCH_SIZE = Histogram(
    "employee_intake_batch_size",
    "Records per submitted batch",
    buckets=[1, 5, 10, 50, 100, 500, 1000, 5000],
)
INTAKE_DURATION = Histogram(
    "employee_intake_duration_seconds", "Time spent in the intake pipeline"
)
