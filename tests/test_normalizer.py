import pytest

from sysapi.models.vm import VmStatus
from sysapi.services.domain_normalizer import (
    RawDomain,
    kib_to_mib,
    normalize_domain,
    state_to_status,
)


@pytest.mark.parametrize(
    "code, expected",
    [
        (1, VmStatus.RUNNING),
        (2, VmStatus.BLOCKED),
        (3, VmStatus.PAUSED),
        (4, VmStatus.SHUTDOWN),
        (5, VmStatus.SHUTOFF),
        (6, VmStatus.CRASHED),
    ],
)
def test_known_state_codes_map_to_status(code, expected):
    assert state_to_status(code) is expected


@pytest.mark.parametrize("code", [0, 7, 42, -1, None])
def test_other_state_codes_map_to_unknown(code):
    assert state_to_status(code) is VmStatus.UNKNOWN


def test_kib_to_mib_uses_integer_division():
    assert kib_to_mib(2097152) == 2048
    assert kib_to_mib(1023) == 0
    assert kib_to_mib(1536) == 1
    assert kib_to_mib(None) == 0


def test_normalize_domain_full_record():
    raw = RawDomain(
        name="web01",
        state=1,
        vcpus=4,
        max_memory_kib=4194304,
        memory_stats={"actual": 2098176, "rss": 1500000},
    )

    vm = normalize_domain(raw)

    assert vm.name == "web01"
    assert vm.status is VmStatus.RUNNING
    assert vm.cpu_usage == 4
    assert vm.memory_total_mb == 4096
    assert vm.memory_used_mb == 2049


def test_missing_balloon_counter_means_zero_used_memory():
    """Other statistics such as rss must not stand in for the balloon value."""
    raw = RawDomain(name="db", state=5, vcpus=2, max_memory_kib=1048576,
                    memory_stats={"rss": 524288, "available": 1000000})

    vm = normalize_domain(raw)

    assert vm.memory_total_mb == 1024
    assert vm.memory_used_mb == 0


def test_all_queries_failed_still_yields_record():
    vm = normalize_domain(RawDomain())

    assert vm.name == ""
    assert vm.status is VmStatus.UNKNOWN
    assert vm.cpu_usage == 0
    assert vm.memory_total_mb == 0
    assert vm.memory_used_mb == 0
