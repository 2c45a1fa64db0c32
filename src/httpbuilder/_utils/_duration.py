from datetime import timedelta


def format_duration(duration: timedelta) -> str:
    """Render a duration as a short label such as ``"850µs"``, ``"12.5ms"`` or ``"1.204s"``."""
    seconds = duration.total_seconds()
    if seconds < 0.001:
        return f"{seconds * 1_000_000:.0f}µs"
    if seconds < 1:
        return f"{seconds * 1000:.1f}ms"
    if seconds < 60:
        return f"{seconds:.3f}s"
    minutes, rest = divmod(seconds, 60)
    return f"{int(minutes)}m{rest:.3f}s"
