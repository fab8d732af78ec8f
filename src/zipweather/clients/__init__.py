"""
zipweather.clients

Outbound HTTP client package.

Responsibilities:
- Wrap each remote call (location provider, weather provider, resolution service)
  in its own client span with trace context injected into the request headers.
- Classify transport/decoding failures at the boundary where they happen.
"""

# Package marker.


# --- Module Notes -----------------------------------------------------------
# Services depend on these clients, never on httpx directly.
