"""
Time formatting utilities for human-readable output.
"""


def format_duration(seconds: float) -> str:
    """
    Format a duration in seconds to a human-readable string.

    Args:
        seconds: Duration in seconds

    Returns:
        Formatted time string (e.g., "850.00 us", "123.45 ms", "2.34 s", "1m 30.50s")
    """
    ms = seconds * 1000
    if ms < 1:
        return f"{seconds * 1_000_000:.2f} us"
    elif ms < 1000:
        return f"{ms:.2f} ms"
    elif ms < 60000:
        return f"{seconds:.2f} s"
    else:
        minutes = int(seconds / 60)
        remainder = seconds % 60
        return f"{minutes}m {remainder:.2f}s"
