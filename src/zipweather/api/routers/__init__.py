"""
zipweather.api.routers

Router modules for both services.
"""

# Package marker.


# --- Module Notes -----------------------------------------------------------
# Each service mounts `health` plus exactly one of `entry` or `resolution`.
