import logging
from contextlib import contextmanager
from typing import Any, Callable, Iterator, List, Optional

from sysapi.errors import UpstreamUnavailable
from sysapi.logging_config import LOGGER_NAME
from sysapi.models.vm import VirtualMachine
from sysapi.services.domain_normalizer import RawDomain, normalize_domain


class LibvirtClient:
    """
    Read-only view of the domains known to a libvirt hypervisor.

    A new connection is opened for every call and closed before returning,
    so instances hold no hypervisor state between requests and can be
    shared freely. The libvirt module itself can be injected via ``driver``;
    by default it is imported on first use.
    """

    def __init__(
        self,
        uri: str = "qemu:///system",
        driver: Any = None,
        logger: Optional[logging.Logger] = None,
    ):
        self.uri = uri
        self._driver = driver
        base = logger or logging.getLogger(LOGGER_NAME)
        self.logger = logging.getLogger(f"{base.name}.{self.__class__.__name__}")

    @property
    def driver(self) -> Any:
        if self._driver is None:
            try:
                import libvirt
            except ImportError as exc:
                raise UpstreamUnavailable(
                    "libvirt Python bindings are not installed"
                ) from exc
            self._driver = libvirt
        return self._driver

    @contextmanager
    def connection(self) -> Iterator[Any]:
        """Open a hypervisor connection that is closed on every exit path."""
        driver = self.driver
        try:
            conn = driver.open(self.uri)
        except driver.libvirtError as exc:
            self.logger.error("Failed to connect to libvirt at %s: %s", self.uri, exc)
            raise UpstreamUnavailable("Failed to connect to Libvirt") from exc
        if conn is None:
            # very old bindings return None instead of raising
            self.logger.error("Failed to connect to libvirt at %s", self.uri)
            raise UpstreamUnavailable("Failed to connect to Libvirt")

        try:
            yield conn
        finally:
            try:
                conn.close()
            except driver.libvirtError as exc:
                self.logger.warning("Closing libvirt connection failed: %s", exc)

    def _query(self, label: str, what: str, func: Callable[[], Any]) -> Any:
        """Run one per-domain query; a libvirt error yields None."""
        try:
            return func()
        except self.driver.libvirtError as exc:
            self.logger.debug("Query %s failed for domain %s: %s", what, label, exc)
            return None

    def _query_domain(self, domain: Any, index: int) -> RawDomain:
        name = self._query(f"#{index}", "name", domain.name)
        label = name or f"#{index}"

        state = self._query(label, "state", domain.state)
        info = self._query(label, "info", domain.info)
        max_memory = self._query(label, "maxMemory", domain.maxMemory)
        memory_stats = self._query(label, "memoryStats", domain.memoryStats)

        return RawDomain(
            name=name,
            # state() returns [state, reason], info() returns
            # [state, maxMem, memory, nrVirtCpu, cpuTime]
            state=state[0] if state else None,
            vcpus=info[3] if info and len(info) > 3 else None,
            max_memory_kib=max_memory,
            memory_stats=memory_stats,
        )

    def list_virtual_machines(self) -> List[VirtualMachine]:
        """
        Return one VirtualMachine per domain, running or not.

        Raises UpstreamUnavailable if the connection cannot be opened or the
        domains cannot be listed. Failures of individual per-domain queries
        only reset the affected fields to their defaults.
        """
        with self.connection() as conn:
            try:
                domains = conn.listAllDomains(0)
            except self.driver.libvirtError as exc:
                self.logger.error("Failed to list libvirt domains: %s", exc)
                raise UpstreamUnavailable("Failed to list VMs") from exc

            domains = list(domains or [])
            vms: List[VirtualMachine] = []
            index = 0
            while domains:
                # each handle is freed once queried, before the connection closes
                domain = domains.pop(0)
                vms.append(normalize_domain(self._query_domain(domain, index)))
                del domain
                index += 1

        self.logger.debug("Collected %d virtual machines from %s", len(vms), self.uri)
        return vms


def get_vm_client(uri: str, logger: Optional[logging.Logger] = None) -> LibvirtClient:
    return LibvirtClient(uri=uri, logger=logger)


def list_virtual_machines(
    uri: str, logger: Optional[logging.Logger] = None
) -> List[VirtualMachine]:
    """Collect the current VM inventory of the hypervisor at ``uri``."""
    return get_vm_client(uri, logger).list_virtual_machines()
