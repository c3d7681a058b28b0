"""Constants for OpenTelemetry metrics."""

# Metric name prefixes
METRIC_PREFIX = "gamerstation"

# Upstream API metrics (Blizzard, Data Dragon)
UPSTREAM_API_CALLS_TOTAL = f"{METRIC_PREFIX}.upstream_api.calls_total"
UPSTREAM_API_CALL_DURATION = f"{METRIC_PREFIX}.upstream_api.call_duration"
UPSTREAM_API_RATE_LIMITS = f"{METRIC_PREFIX}.upstream_api.rate_limits_total"

# HTTP surface metrics
HTTP_REQUESTS_TOTAL = f"{METRIC_PREFIX}.http.requests_total"
HTTP_REQUEST_DURATION = f"{METRIC_PREFIX}.http.request_duration"

# Summoner index metrics
SUMMONERS_LOGGED = f"{METRIC_PREFIX}.summoner_index.logged_total"
SUMMONER_SUGGESTIONS = f"{METRIC_PREFIX}.summoner_index.suggestions_total"

# Common label keys
LABEL_UPSTREAM = "upstream"
LABEL_ENDPOINT_TYPE = "endpoint_type"
LABEL_STATUS_CODE = "status_code"
LABEL_ERROR_TYPE = "error_type"
LABEL_ROUTE = "route"
LABEL_METHOD = "method"
LABEL_OUTCOME = "outcome"
