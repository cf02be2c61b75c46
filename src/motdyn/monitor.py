"""Host snapshot assembly for motdyn."""

from collections.abc import Callable
from datetime import datetime

from motdyn.facts import UNKNOWN_CPU, FactsProvider
from motdyn.formatting import format_gb_usage, format_timestamp, format_uptime, to_gb_and_ratio
from motdyn.models import Fact, HostSnapshot


def local_now() -> datetime:
    """Current wall-clock time with the local UTC offset attached."""
    return datetime.now().astimezone()


class HostMonitor:
    """
    Collects every host fact once and assembles them in display order.

    The monitor keeps no state between collections; each call reads the
    provider afresh.
    """

    def __init__(
        self,
        provider: FactsProvider,
        clock: Callable[[], datetime] = local_now,
    ) -> None:
        """
        Initialize the HostMonitor.

        Args:
            provider: Source of host facts.
            clock: Returns the current time for the timestamp line.
        """
        self._provider = provider
        self._clock = clock

    def collect_snapshot(self) -> HostSnapshot:
        """Collect a snapshot of the current host state."""
        provider = self._provider

        uptime = provider.uptime_seconds()
        os_name, os_version = provider.os_identity()

        cpu = provider.cpu_info()
        cpu_value = f"{cpu[0]} ({cpu[1]} cores)" if cpu is not None else None

        mem_total, mem_free, swap_total, swap_free = provider.mem_info()
        memory = to_gb_and_ratio(mem_total, mem_free)
        swap = to_gb_and_ratio(swap_total, swap_free)

        user = provider.current_user() or "unknown"
        origin = provider.origin_address() or "unknown"

        facts = (
            Fact("Current time (TZ):", format_timestamp(self._clock()), style="bright_yellow"),
            Fact(
                "System uptime:",
                format_uptime(uptime) if uptime is not None else None,
                style="bright_yellow",
            ),
            Fact("Operating system:", f"{os_name} {os_version}", style="bright_yellow"),
            Fact(
                "Kernel version:",
                provider.kernel_release(),
                placeholder="Unknown kernel",
                style="bright_green",
            ),
            Fact(
                "Host name:",
                provider.hostname(),
                placeholder="Unknown host",
                style="bright_yellow",
            ),
            Fact("CPU:", cpu_value, placeholder=f"{UNKNOWN_CPU} (0 cores)", style="bright_magenta"),
            Fact("Memory used/total:", format_gb_usage(memory)),
            Fact("Swap used/total:", format_gb_usage(swap)),
            Fact("Current user:", f"{user} (from {origin})", style="bright_cyan"),
            Fact("Login user count:", str(provider.logged_in_user_count()), style="bright_cyan"),
        )
        return HostSnapshot(facts=facts, disks=tuple(provider.disk_usages()))
