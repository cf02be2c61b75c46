"""Unit scaling and formatting helpers for motdyn."""

from datetime import datetime, timedelta

from motdyn.models import UsageFigures

KIB = 1024.0
MIB = KIB * 1024
GIB = MIB * 1024
TIB = GIB * 1024
PIB = TIB * 1024

# Largest threshold first
_BYTE_SCALES: tuple[tuple[float, str], ...] = (
    (PIB, "PB"),
    (TIB, "TB"),
    (GIB, "GB"),
    (MIB, "MB"),
    (KIB, "KB"),
)


def format_uptime(seconds: int) -> str:
    """Format seconds since boot as ``D days, HH:MM:SS`` or ``HH:MM:SS``."""
    days, seconds = divmod(seconds, 86400)
    hours, seconds = divmod(seconds, 3600)
    minutes, seconds = divmod(seconds, 60)
    if days > 0:
        return f"{days} days, {hours:02d}:{minutes:02d}:{seconds:02d}"
    return f"{hours:02d}:{minutes:02d}:{seconds:02d}"


def format_timestamp(moment: datetime) -> str:
    """Format a wall-clock time with its UTC offset, e.g. ``2024-12-27 17:36:25 +08:00``."""
    return f"{moment:%Y-%m-%d %H:%M:%S} {format_utc_offset(moment.utcoffset())}"


def format_utc_offset(offset: timedelta | None) -> str:
    """Render an offset as ``+HH:MM``; naive times count as UTC."""
    total = int(offset.total_seconds()) if offset is not None else 0
    sign = "-" if total < 0 else "+"
    hours, rest = divmod(abs(total), 3600)
    return f"{sign}{hours:02d}:{rest // 60:02d}"


def kb_to_gb(kb: int) -> float:
    """Convert kilobytes to gigabytes (binary)."""
    return kb / 1024.0 / 1024.0


def to_gb_and_ratio(total_kb: int, free_kb: int) -> UsageFigures:
    """
    Reduce a total/available kilobyte pair to used GB, total GB and percent.

    Used never goes negative and the percentage is 0 when total is 0.
    """
    used_kb = max(0, total_kb - free_kb)
    total_gb = kb_to_gb(total_kb)
    used_gb = kb_to_gb(used_kb)
    percent = used_gb / total_gb * 100.0 if total_gb > 0 else 0.0
    return UsageFigures(used=used_gb, total=total_gb, percent=percent)


def format_gb_usage(figures: UsageFigures) -> str:
    return f"{figures.used:.2f}/{figures.total:.2f} GB ({figures.percent:.2f}%)"


def best_unit_scale(size: float) -> tuple[float, str]:
    """Pick the largest 1024-power unit that fits ``size`` bytes."""
    for scale, suffix in _BYTE_SCALES:
        if size >= scale:
            return scale, suffix
    return 1.0, "B"


def human_readable_usage(used: int, total: int) -> tuple[str, str, float]:
    """
    Express used and total bytes in one shared unit.

    The unit is chosen from the larger of the two values, so a line never
    mixes units. Returns (used_str, total_str, percent).
    """
    scale, suffix = best_unit_scale(float(max(used, total)))
    used_f = used / scale
    total_f = total / scale
    percent = used_f / total_f * 100.0 if total_f > 0 else 0.0
    return f"{used_f:.2f} {suffix}", f"{total_f:.2f} {suffix}", percent
