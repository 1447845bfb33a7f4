"""
Human-readable sizes and durations for the end-of-run summary.
"""

SIZE_UNITS = ("B", "KB", "MB", "GB", "TB")


def format_size(bytes_size: int) -> str:
    """'0 B', '512 B', '3.4 MB', ... Whole bytes are shown without a decimal."""
    if bytes_size < 1024:
        return f"{max(bytes_size, 0)} B"

    size = float(bytes_size)
    for unit in SIZE_UNITS[1:]:
        size /= 1024
        if size < 1024 or unit == SIZE_UNITS[-1]:
            return f"{size:.1f} {unit}"


def format_duration(seconds: float) -> str:
    """Clock-style elapsed time: '0:07', '4:05' or '1:02:03'."""
    minutes, secs = divmod(max(int(seconds), 0), 60)
    hours, minutes = divmod(minutes, 60)
    if hours:
        return f"{hours}:{minutes:02}:{secs:02}"
    return f"{minutes}:{secs:02}"
