"""
zipweather.api

API package for the entry and resolution services.

Responsibilities:
- FastAPI app factories and router modules.
- API-layer dependency wiring, error rendering and request-bound cancellation.
"""

# Package marker.


# --- Module Notes -----------------------------------------------------------
# The API layer should remain thin: trace extraction + delegation to services.
