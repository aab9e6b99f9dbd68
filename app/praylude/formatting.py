"""Human-readable durations for the player and history views."""


def format_clock(seconds: int) -> str:
    """``MM:SS`` (minutes are not wrapped into hours)."""
    minutes, secs = divmod(max(seconds, 0), 60)
    return f"{minutes:02d}:{secs:02d}"


def format_duration(seconds: int) -> str:
    """Whole minutes, truncated: ``"12 min"``."""
    return f"{max(seconds, 0) // 60} min"


def format_total_time(total_minutes: int) -> str:
    if total_minutes <= 0:
        return "0 minutes"

    hours, minutes = divmod(total_minutes, 60)
    if hours == 0:
        return f"{minutes} min"
    if minutes == 0:
        return f"{hours} hr"
    return f"{hours} hr {minutes} min"
