"""
zipweather.domain

Pure domain layer shared by both services.

Responsibilities:
- Postal-code shape validation and temperature conversion.
- Request/response models and the pipeline error taxonomy.
"""

# Package marker.


# --- Module Notes -----------------------------------------------------------
# Nothing in this package performs I/O; clients and services depend on it, not the reverse.
