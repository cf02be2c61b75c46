"""Host fact readers for motdyn.

Every reader is best-effort: a missing, unreadable or malformed source is
logged at debug level and reported as ``None`` (or a documented default)
instead of raising.
"""

import logging
import os
import subprocess
from collections.abc import Callable, Iterable, Mapping, Sequence
from pathlib import Path
from typing import Protocol, TypeVar

import psutil

from motdyn.models import DiskUsage

logger = logging.getLogger("motdyn.facts")

T = TypeVar("T")

CommandRunner = Callable[[Sequence[str]], str]

UNKNOWN_CPU = "Unknown CPU"
USERS_MARKER = "# users="
WHO_COMMAND = ("who", "-q")
NFS_TYPES = frozenset({"nfs", "nfs4"})
RELEASE_NEEDLE = " release "


def first_success(strategies: Iterable[Callable[[], T | None]]) -> T | None:
    """Run strategies in order and return the first non-``None`` result."""
    for strategy in strategies:
        result = strategy()
        if result is not None:
            return result
    return None


def _parse_count(text: str) -> int:
    """Parse an unsigned integer, falling back to 0."""
    text = text.strip()
    return int(text) if text.isascii() and text.isdigit() else 0


def parse_uptime(text: str) -> int | None:
    """Return whole seconds from ``/proc/uptime`` content (``"25333.53 1022.3"``)."""
    parts = text.split()
    if not parts:
        return None
    try:
        seconds = int(float(parts[0]))
    except (ValueError, OverflowError):
        return None
    return seconds if seconds >= 0 else None


def parse_redhat_release(text: str) -> tuple[str, str] | None:
    """Split ``"CentOS Linux release 7.9.2009 (Core)"`` into name and version."""
    line = text.strip()
    name, sep, version = line.partition(RELEASE_NEEDLE)
    if not sep:
        return None
    return name, version


def parse_os_release(text: str) -> tuple[str, str] | None:
    """Extract ``NAME`` and ``VERSION_ID`` from os-release content."""
    name: str | None = None
    version: str | None = None
    for line in text.splitlines():
        if line.startswith("NAME="):
            name = line[len("NAME="):].strip().strip("\"'")
        elif line.startswith("VERSION_ID="):
            version = line[len("VERSION_ID="):].strip().strip("\"'")
    if name is None or version is None:
        return None
    return name, version


def parse_cpuinfo(text: str) -> tuple[str, int]:
    """Return the first ``model name`` and the number of ``processor`` records."""
    brand = UNKNOWN_CPU
    count = 0
    for line in text.splitlines():
        if line.startswith("processor"):
            count += 1
        elif line.startswith("model name") and brand == UNKNOWN_CPU:
            _, sep, value = line.partition(":")
            if sep:
                brand = value.strip()
    return brand, count


def parse_meminfo(text: str) -> tuple[int, int, int, int]:
    """
    Parse ``/proc/meminfo`` into kilobyte counts.

    Returns (mem_total, mem_available, swap_total, swap_free). When
    ``MemAvailable`` is missing or zero, ``MemFree`` is used instead.
    """
    values = {"MemTotal:": 0, "MemAvailable:": 0, "SwapTotal:": 0, "SwapFree:": 0}
    for line in text.splitlines():
        parts = line.split()
        if len(parts) < 2:
            continue
        if parts[0] in values:
            values[parts[0]] = _parse_count(parts[1])

    mem_available = values["MemAvailable:"]
    if mem_available == 0:
        mem_available = _mem_free(text) or 0
    return values["MemTotal:"], mem_available, values["SwapTotal:"], values["SwapFree:"]


def _mem_free(text: str) -> int | None:
    for line in text.splitlines():
        if line.startswith("MemFree:"):
            parts = line[len("MemFree:"):].split()
            if not parts or not (parts[0].isascii() and parts[0].isdigit()):
                return None
            return int(parts[0])
    return None


def parse_user_count(output: str) -> int:
    """Find ``# users=N`` in ``who -q`` output; 0 when absent or malformed."""
    for line in output.splitlines():
        pos = line.find(USERS_MARKER)
        if pos != -1:
            return _parse_count(line[pos + len(USERS_MARKER):])
    return 0


def parse_mounts(text: str) -> list[tuple[str, str]]:
    """Return (mount_point, fs_type) pairs from mount-table content."""
    mounts = []
    for line in text.splitlines():
        fields = line.split()
        if len(fields) < 3:
            continue
        mounts.append((fields[1], fields[2]))
    return mounts


def mount_label(mount_point: str, fs_type: str) -> str | None:
    """Label for mounts shown in the report, ``None`` for the rest."""
    if mount_point == "/":
        return "Disk usage (root):"
    if fs_type in NFS_TYPES:
        return "Disk usage (NFS):"
    return None


def run_command(command: Sequence[str]) -> str:
    """Run a command and return its stdout; the exit status is ignored."""
    result = subprocess.run(
        list(command),
        capture_output=True,
        encoding="utf-8",
        errors="replace",
        check=False,
    )
    return result.stdout


class DiskProbe(Protocol):
    def usage(self, mount_point: str) -> tuple[int, int] | None:
        """Return (total_bytes, used_bytes), or ``None`` if the query fails."""
        ...


class PsutilDiskProbe:
    """Filesystem statistics through ``psutil.disk_usage`` (``statvfs``)."""

    def usage(self, mount_point: str) -> tuple[int, int] | None:
        try:
            stats = psutil.disk_usage(mount_point)
        except OSError as e:
            logger.debug("disk usage query for %s failed: %s", mount_point, e)
            return None
        return stats.total, stats.used


def default_disk_probe() -> DiskProbe | None:
    """The platform's disk probe, or ``None`` without ``statvfs`` support."""
    if psutil.POSIX:
        return PsutilDiskProbe()
    return None


class FactsProvider:
    """
    Reads host facts from a pseudo-filesystem tree and the process environment.

    All paths are resolved below ``root`` so an alternate tree can stand in
    for the live system.
    """

    def __init__(
        self,
        root: str | Path = "/",
        environ: Mapping[str, str] | None = None,
        runner: CommandRunner | None = None,
        disk_probe: DiskProbe | None = None,
    ) -> None:
        """
        Initialize the FactsProvider.

        Args:
            root: Filesystem root that well-known paths are resolved against.
            environ: Environment variables. Defaults to ``os.environ``.
            runner: Executes external commands and returns their stdout.
            disk_probe: Filesystem statistics capability; ``None`` disables
                disk usage reporting.
        """
        self._root = Path(root)
        self._environ = os.environ if environ is None else environ
        self._runner = runner or run_command
        self.disk_probe = disk_probe

    @classmethod
    def for_host(cls) -> "FactsProvider":
        """Provider for the live system."""
        return cls(disk_probe=default_disk_probe())

    @property
    def environ(self) -> Mapping[str, str]:
        return self._environ

    def path(self, absolute: str) -> Path:
        return self._root / absolute.lstrip("/")

    def read_text(self, absolute: str) -> str | None:
        """Read a whole file, ``None`` if it cannot be read."""
        path = self.path(absolute)
        try:
            return path.read_text(encoding="utf-8")
        except (OSError, UnicodeDecodeError) as e:
            logger.debug("cannot read %s: %s", path, e)
            return None

    def read_first_line(self, absolute: str) -> str | None:
        """First line of a file, trimmed; ``None`` for unreadable or empty files."""
        path = self.path(absolute)
        try:
            with open(path, encoding="utf-8") as f:
                line = f.readline()
        except (OSError, UnicodeDecodeError) as e:
            logger.debug("cannot read %s: %s", path, e)
            return None
        if not line:
            return None
        return line.strip()

    def uptime_seconds(self) -> int | None:
        text = self.read_text("/proc/uptime")
        if text is None:
            return None
        seconds = parse_uptime(text)
        if seconds is None:
            logger.debug("unparsable uptime counter: %r", text)
        return seconds

    def os_identity(self) -> tuple[str, str]:
        """(name, version) from the first identity source that answers."""
        identity = first_success([
            self._redhat_release,
            self._os_release,
        ])
        if identity is not None:
            return identity
        return "Linux", self.read_first_line("/proc/sys/kernel/ostype") or "Linux"

    def _redhat_release(self) -> tuple[str, str] | None:
        text = self.read_text("/etc/redhat-release")
        return parse_redhat_release(text) if text is not None else None

    def _os_release(self) -> tuple[str, str] | None:
        text = self.read_text("/etc/os-release")
        return parse_os_release(text) if text is not None else None

    def kernel_release(self) -> str | None:
        return self.read_first_line("/proc/sys/kernel/osrelease")

    def hostname(self) -> str | None:
        return self.read_first_line("/proc/sys/kernel/hostname")

    def cpu_info(self) -> tuple[str, int] | None:
        text = self.read_text("/proc/cpuinfo")
        return parse_cpuinfo(text) if text is not None else None

    def mem_info(self) -> tuple[int, int, int, int]:
        text = self.read_text("/proc/meminfo")
        if text is None:
            return 0, 0, 0, 0
        return parse_meminfo(text)

    def current_user(self) -> str | None:
        return self._environ.get("USER") or self._environ.get("LOGNAME") or None

    def origin_address(self) -> str | None:
        parts = self._environ.get("SSH_CONNECTION", "").split()
        return parts[0] if parts else None

    def logged_in_user_count(self) -> int:
        try:
            output = self._runner(WHO_COMMAND)
        except OSError as e:
            logger.debug("%s failed: %s", " ".join(WHO_COMMAND), e)
            return 0
        return parse_user_count(output)

    def disk_usages(self) -> list[DiskUsage]:
        """Usage of the root and NFS mounts, in mount-table order."""
        if self.disk_probe is None:
            return []
        text = self.read_text("/proc/mounts")
        if text is None:
            return []

        usages = []
        for mount_point, fs_type in parse_mounts(text):
            label = mount_label(mount_point, fs_type)
            if label is None:
                continue
            result = self.disk_probe.usage(mount_point)
            if result is None:
                continue
            total, used = result
            usages.append(DiskUsage(label=label, mount_point=mount_point, used=used, total=total))
        return usages
