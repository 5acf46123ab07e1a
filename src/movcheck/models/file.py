"""Human-readable size and duration helpers."""


def format_size(size_bytes: int | float) -> str:
    """Convert bytes to human-readable string."""
    if size_bytes < 0:
        return "N/A"
    size = float(size_bytes)
    for unit in ["B", "KB", "MB", "GB", "TB", "PB"]:
        if size < 1024:
            if unit == "B":
                return f"{int(size)} {unit}"
            return f"{size:.2f} {unit}"
        size /= 1024
    return f"{size:.2f} EB"


def format_duration(seconds: float | None) -> str:
    """Return a duration as ``1h 2m 3s`` style text."""
    if not seconds or seconds <= 0:
        return "N/A"
    if seconds < 60:
        return f"{seconds:.1f}s"
    minutes = int(seconds // 60)
    rest = seconds % 60
    if minutes < 60:
        return f"{minutes}m {rest:.1f}s"
    hours = minutes // 60
    minutes = minutes % 60
    return f"{hours}h {minutes}m {rest:.0f}s"
