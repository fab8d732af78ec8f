"""
zipweather.domain.validation

Postal-code (CEP) shape validation.
"""

from __future__ import annotations

import re

# ASCII only: `\d` would also accept other Unicode decimal digits.
_ZIPCODE_RE = re.compile(r"[0-9]{8}")


def is_valid_zipcode(code: str) -> bool:
    # No normalization: "01310-900" is rejected rather than stripped.
    return _ZIPCODE_RE.fullmatch(code) is not None


# --- Module Notes -----------------------------------------------------------
# Shared by both services so the entry hop rejects exactly what the resolution hop would.
