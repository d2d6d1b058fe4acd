"""SSE (Server-Sent Events) formatting for streamed chat and video progress."""

import json
from typing import Any, Dict


def format_sse_event(data: Dict[str, Any], event_type: str = "message") -> str:
    """
    Format data as SSE event for forwarding to frontend.

    Args:
        data: Event data to format
        event_type: Event type name (optional)

    Returns:
        Formatted SSE event string
    """
    lines = []

    if event_type and event_type != "message":
        lines.append(f"event: {event_type}")

    lines.append(f"data: {json.dumps(data)}")
    lines.append("")  # Empty line signals end of event

    return "\n".join(lines) + "\n"
