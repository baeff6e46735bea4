# londontimes/metrics.py

from prometheus_client import Counter, Histogram

# Define Prometheus metrics

# Timetable Cache Metrics
LOOKUP_RESULTS = Counter('londontimes_lookup_results_total', 'Timetable lookups by outcome', ['status'])
TIMETABLE_LOADS = Counter('londontimes_timetable_loads_total', 'Timetable documents loaded into the store', ['source'])

# Conversion Metrics
CONVERSION_FAILURES = Counter('londontimes_conversion_failures_total', 'Prayer times that could not be converted to UTC', ['prayer'])

# API Metrics
API_REQUEST_DURATION_SECONDS = Histogram('londontimes_api_request_duration_seconds', 'API request duration in seconds', ['endpoint'])
