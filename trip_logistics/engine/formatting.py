from __future__ import annotations


def format_duration(minutes: int) -> str:
    """Render minutes as ``45m``, ``2h`` or ``2h 35m`` for travel cards."""
    if minutes < 60:
        return f"{minutes}m"
    hours, mins = divmod(minutes, 60)
    if mins == 0:
        return f"{hours}h"
    return f"{hours}h {mins}m"
