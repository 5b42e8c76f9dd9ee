from pydantic import BaseModel, Field


class VersionInfo(BaseModel):
    """Version of the running sysapi service."""

    version: str = Field(..., description="Semantic version string")


class UptimeStatus(BaseModel):
    """Time since the host was booted."""

    uptime_seconds: int = Field(
        ...,
        ge=0,
        description="Number of seconds since the system was booted",
    )


class DiskUsage(BaseModel):
    """Capacity and usage of the monitored filesystem."""

    total_bytes: int = Field(..., ge=0, description="Filesystem size in bytes")
    free_bytes: int = Field(..., ge=0, description="Free bytes, including root-reserved blocks")
    used_bytes: int = Field(..., ge=0, description="total_bytes minus free_bytes")
    used_percent: float = Field(
        ...,
        ge=0,
        le=100,
        description="used_bytes relative to total_bytes in percent",
    )
