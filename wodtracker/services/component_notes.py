"""Split the legacy notes envelope into free text and WOD detail.

Older rows stored WOD detail inside workout_components.notes as
{"wod_details": {...}, "custom_notes": "..."}. New rows use the wod_details
column; this helper recovers the two parts from a legacy notes value.
"""

from __future__ import annotations

import json
from typing import Any


def split_legacy_notes(notes: str | None) -> tuple[str | None, dict[str, Any] | None]:
    """
    Return (free_text, wod_details).
    Anything that is not a JSON object carrying "wod_details" is plain text.
    """
    if not notes:
        return notes, None
    try:
        parsed = json.loads(notes)
    except (TypeError, ValueError):
        return notes, None
    if not isinstance(parsed, dict) or not parsed.get("wod_details"):
        return notes, None
    return parsed.get("custom_notes") or None, parsed["wod_details"]
