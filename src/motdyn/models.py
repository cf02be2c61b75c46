"""Data models for motdyn."""

from dataclasses import dataclass, field


@dataclass(slots=True, frozen=True)
class UsageFigures:
    """Used/total pair with the derived usage percentage."""

    used: float
    total: float
    percent: float  # 0.0 - 100.0, 0.0 when total is 0


@dataclass(slots=True, frozen=True)
class Fact:
    """A labeled host fact; a ``None`` value marks it unavailable."""

    label: str
    value: str | None
    placeholder: str = "unknown"
    style: str | None = None

    def display(self) -> str:
        """Return the value, or the placeholder when unavailable."""
        return self.value if self.value is not None else self.placeholder


@dataclass(slots=True, frozen=True)
class DiskUsage:
    """Byte usage of a single mount point."""

    label: str  # 'Disk usage (root):', 'Disk usage (NFS):'
    mount_point: str
    used: int  # Bytes
    total: int  # Bytes


@dataclass(slots=True, frozen=True)
class HostSnapshot:
    """Everything shown in one report, in display order."""

    facts: tuple[Fact, ...]
    disks: tuple[DiskUsage, ...] = field(default_factory=tuple)
