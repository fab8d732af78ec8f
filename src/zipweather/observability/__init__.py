"""
zipweather.observability

Observability package.

Responsibilities:
- Structured logging configuration and request-scoped log context.
- Trace context propagation and span lifecycle (OpenTelemetry).
"""

# Package marker.


# --- Module Notes -----------------------------------------------------------
# Neither submodule installs global state; apps configure both in `create_app`.
