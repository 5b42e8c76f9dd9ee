import os
import time

import psutil

from sysapi.errors import MetricReadError
from sysapi.models.host import DiskUsage, UptimeStatus


def get_uptime() -> UptimeStatus:
    """Return the number of whole seconds since the host was booted."""
    try:
        boot_time = psutil.boot_time()
    except (OSError, RuntimeError) as exc:
        raise MetricReadError(f"Failed to get uptime: {exc}") from exc

    return UptimeStatus(uptime_seconds=max(int(time.time() - boot_time), 0))


def compute_disk_usage(blocks: int, free_blocks: int, block_size: int) -> DiskUsage:
    """
    Turn raw filesystem block counters into a DiskUsage.

    A filesystem reporting zero blocks yields used_percent 0.0 instead of
    dividing by zero.
    """
    total_bytes = blocks * block_size
    free_bytes = free_blocks * block_size
    used_bytes = total_bytes - free_bytes
    used_percent = used_bytes / total_bytes * 100 if total_bytes else 0.0

    return DiskUsage(
        total_bytes=total_bytes,
        free_bytes=free_bytes,
        used_bytes=used_bytes,
        used_percent=used_percent,
    )


def get_disk_usage(path: str = "/") -> DiskUsage:
    """
    Collect usage of the filesystem mounted at ``path``.

    os.statvfs is used directly instead of psutil.disk_usage because free
    space has to include root-reserved blocks (f_bfree, not f_bavail).
    """
    try:
        stat = os.statvfs(path)
    except OSError as exc:
        raise MetricReadError(f"Failed to get disk usage for {path}: {exc}") from exc

    return compute_disk_usage(stat.f_blocks, stat.f_bfree, stat.f_frsize)
