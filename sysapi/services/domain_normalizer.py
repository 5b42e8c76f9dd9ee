from typing import Mapping, NamedTuple, Optional

from sysapi.models.vm import VirtualMachine, VmStatus

# virDomainState codes. NOSTATE (0), PMSUSPENDED (7) and codes added by
# newer libvirt releases map to Unknown.
_DOMAIN_STATES = {
    1: VmStatus.RUNNING,
    2: VmStatus.BLOCKED,
    3: VmStatus.PAUSED,
    4: VmStatus.SHUTDOWN,
    5: VmStatus.SHUTOFF,
    6: VmStatus.CRASHED,
}

# memoryStats() key of the "actual balloon" counter
BALLOON_STAT_KEY = "actual"


class RawDomain(NamedTuple):
    """Per-domain query results; None marks a query that failed."""

    name: Optional[str] = None
    state: Optional[int] = None
    vcpus: Optional[int] = None
    max_memory_kib: Optional[int] = None
    memory_stats: Optional[Mapping[str, int]] = None


def state_to_status(state: Optional[int]) -> VmStatus:
    if state is None:
        return VmStatus.UNKNOWN
    return _DOMAIN_STATES.get(state, VmStatus.UNKNOWN)


def kib_to_mib(value: Optional[int]) -> int:
    if value is None or value < 0:
        return 0
    return int(value) // 1024


def balloon_kib(memory_stats: Optional[Mapping[str, int]]) -> Optional[int]:
    """Return the actual balloon size in KiB, or None if it was not reported."""
    if not memory_stats:
        return None
    return memory_stats.get(BALLOON_STAT_KEY)


def normalize_domain(raw: RawDomain) -> VirtualMachine:
    """
    Build a VirtualMachine from raw query results.

    Every field has a fallback, so a record is produced no matter which
    queries failed: empty name, Unknown status and zero for all counters.
    Used memory is taken from the balloon counter only; no other statistic
    is substituted when it is missing.
    """
    vcpus = raw.vcpus if raw.vcpus is not None and raw.vcpus >= 0 else 0

    return VirtualMachine(
        name=raw.name or "",
        status=state_to_status(raw.state),
        cpu_usage=vcpus,
        memory_total_mb=kib_to_mib(raw.max_memory_kib),
        memory_used_mb=kib_to_mib(balloon_kib(raw.memory_stats)),
    )
