class SysApiError(Exception):
    """Base class for all errors raised by sysapi."""


class ConfigError(SysApiError):
    """Startup configuration is missing, unreadable or invalid."""


class UpstreamUnavailable(SysApiError):
    """The hypervisor could not be reached or refused to enumerate domains."""


class MetricReadError(SysApiError):
    """An OS-level metric (uptime, filesystem stats, os-release) could not be read."""
