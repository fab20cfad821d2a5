"""Human readable elapsed-time strings."""

import math


def format_elapsed(seconds: float) -> str:
    """Format ``seconds`` using the coarsest unit that stays readable.

    >>> format_elapsed(0.742)
    '742ms'
    >>> format_elapsed(3.5)
    '3.50s'
    >>> format_elapsed(3661)
    '1h 1m 1s'
    """
    if seconds < 1:
        return f"{seconds * 1000:.0f}ms"
    if seconds < 10:
        return f"{seconds:.2f}s"
    if seconds < 60:
        return f"{seconds:.0f}s"

    # Whole seconds from here on so a component never reads "60"
    whole = int(math.floor(seconds + 0.5))
    minutes, secs = divmod(whole, 60)
    if minutes < 60:
        return f"{minutes}m {secs}s"
    hours, minutes = divmod(minutes, 60)
    if hours < 24:
        return f"{hours}h {minutes}m {secs}s"
    return f"{seconds / 86400:.2f}d {hours % 24}h {minutes}m {secs}s"
