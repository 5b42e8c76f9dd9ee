from enum import Enum

from pydantic import BaseModel, Field


class VmStatus(str, Enum):
    RUNNING = "Running"
    BLOCKED = "Blocked"
    PAUSED = "Paused"
    SHUTDOWN = "Shutdown"
    SHUTOFF = "Shutoff"
    CRASHED = "Crashed"
    UNKNOWN = "Unknown"


class VirtualMachine(BaseModel):
    """Snapshot of a single hypervisor domain."""

    name: str = Field(..., description="Domain name as assigned by the hypervisor")
    status: VmStatus = Field(..., description="Lifecycle state of the domain")
    cpu_usage: int = Field(
        0,
        ge=0,
        description="Number of virtual CPUs configured for the domain (not a utilisation)",
    )
    memory_total_mb: int = Field(
        0,
        ge=0,
        description="Configured maximum memory in MiB",
    )
    memory_used_mb: int = Field(
        0,
        ge=0,
        description="Balloon-reported memory in MiB, 0 if the guest does not report it",
    )
