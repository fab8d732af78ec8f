"""
zipweather.services

Service-layer package.

Responsibilities:
- Sequence the per-request pipeline of each hop over the outbound clients.
- Raise classified `PipelineError`s; rendering to HTTP happens in the API layer.
"""

# Package marker.


# --- Module Notes -----------------------------------------------------------
# Services are transport-agnostic: they take a trace Context and return domain models.
