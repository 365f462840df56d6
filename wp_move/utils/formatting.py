"""Formatting utilities for display"""

from typing import Optional


def format_duration(seconds: Optional[float]) -> str:
    """Format a duration for the result panels

    Examples:
        >>> format_duration(0.25)
        '250ms'
        >>> format_duration(65)
        '1m 5s'
    """
    if seconds is None or seconds < 0:
        return "n/a"
    if seconds < 1:
        return f"{seconds * 1000:.0f}ms"
    if seconds < 60:
        return f"{seconds:.1f}s"
    minutes, secs = divmod(int(seconds), 60)
    if minutes < 60:
        return f"{minutes}m {secs}s"
    hours, minutes = divmod(minutes, 60)
    return f"{hours}h {minutes}m"
