"""Shared fixtures: a synthetic pseudo-filesystem tree for motdyn readers."""

from pathlib import Path

import pytest

CPUINFO = """processor\t: 0
vendor_id\t: GenuineIntel
model name\t: Intel(R) Xeon(R) CPU E5-2680 v4 @ 2.40GHz

processor\t: 1
vendor_id\t: GenuineIntel
model name\t: Some Other CPU

"""

MEMINFO = """MemTotal:        2097152 kB
MemFree:          524288 kB
MemAvailable:    1048576 kB
SwapTotal:       1048576 kB
SwapFree:        1048576 kB
"""

MOUNTS = """sysfs /sys sysfs rw,nosuid,nodev,noexec,relatime 0 0
/dev/sda1 / ext4 rw,relatime 0 0
tmpfs /run tmpfs rw,nosuid,nodev 0 0
server:/export /mnt/share nfs4 rw,relatime 0 0
"""

OS_RELEASE = """PRETTY_NAME="Ubuntu 22.04.4 LTS"
NAME="Ubuntu"
VERSION_ID="22.04"
ID=ubuntu
"""


def write_tree(root: Path, files: dict[str, str]) -> Path:
    """Write ``{absolute_path: content}`` below ``root``."""
    for absolute, content in files.items():
        path = root / absolute.lstrip("/")
        path.parent.mkdir(parents=True, exist_ok=True)
        path.write_text(content, encoding="utf-8")
    return root


class FakeDiskProbe:
    """Disk probe answering from a fixed table; unknown mounts fail."""

    def __init__(self, table: dict[str, tuple[int, int]]) -> None:
        self.table = table
        self.queried: list[str] = []

    def usage(self, mount_point: str) -> tuple[int, int] | None:
        self.queried.append(mount_point)
        return self.table.get(mount_point)


def fake_who(output: str):
    def _runner(command):
        assert tuple(command) == ("who", "-q")
        return output

    return _runner


@pytest.fixture
def host_root(tmp_path: Path) -> Path:
    """A complete Linux-style pseudo-filesystem tree."""
    return write_tree(
        tmp_path / "host",
        {
            "/proc/uptime": "90061.42 180000.10\n",
            "/proc/cpuinfo": CPUINFO,
            "/proc/meminfo": MEMINFO,
            "/proc/mounts": MOUNTS,
            "/proc/sys/kernel/osrelease": "6.5.0-27-generic\n",
            "/proc/sys/kernel/hostname": "web-01\n",
            "/proc/sys/kernel/ostype": "Linux\n",
            "/etc/os-release": OS_RELEASE,
        },
    )


@pytest.fixture
def empty_root(tmp_path: Path) -> Path:
    """A tree with none of the expected files."""
    root = tmp_path / "empty"
    root.mkdir()
    return root
