"""
Prometheus metrics definitions for the gateway.
All metrics are registered here and can be imported by other modules.
"""
from prometheus_client import Counter, Histogram

# HTTP request metrics
http_requests_total = Counter(
    'http_requests_total',
    'Total HTTP requests',
    ['method', 'path', 'status']
)

http_request_duration_seconds = Histogram(
    'http_request_duration_seconds',
    'HTTP request duration in seconds',
    ['method', 'path'],
    buckets=[0.005, 0.01, 0.025, 0.05, 0.1, 0.25, 0.5, 1.0, 2.5, 5.0, 10.0]
)

# Error metrics
errors_total = Counter(
    'errors_total',
    'Total errors',
    ['error_type']
)

# Upload metrics
uploads_total = Counter(
    'uploads_total',
    'Total images uploaded to Drive'
)

upload_bytes = Histogram(
    'upload_bytes',
    'Size of uploaded images in bytes',
    buckets=[1024, 10240, 102400, 524288, 1048576, 2097152, 5242880]
)

# Provider (Google Drive) metrics
drive_requests_total = Counter(
    'drive_requests_total',
    'Total Google Drive API requests',
    ['operation']
)

drive_failures_total = Counter(
    'drive_failures_total',
    'Total Google Drive API failures',
    ['operation', 'reason']
)

drive_request_duration_seconds = Histogram(
    'drive_request_duration_seconds',
    'Google Drive API request duration in seconds',
    ['operation'],
    buckets=[0.05, 0.1, 0.25, 0.5, 1.0, 2.5, 5.0, 10.0, 30.0]
)
