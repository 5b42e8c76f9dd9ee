import os
from functools import lru_cache
from typing import Optional

from pydantic import BaseModel, Field, ValidationError

from sysapi.errors import ConfigError
from sysapi.keyvalue import parse_key_value

DEFAULT_CONFIG_PATH = "/etc/sysapi/sysapi.conf"


class Settings(BaseModel):
    # HTTP listener
    address: str = Field(
        default="0.0.0.0",
        description="Address the HTTP server binds to",
    )
    port: int = Field(
        default=8069,
        ge=1,
        le=65535,
        description="TCP port the HTTP server listens on",
    )

    # Logging
    logfile: Optional[str] = Field(
        default=None,
        description="Path of the JSON-lines log file (required to start the server)",
    )
    log_level: str = Field(
        default="INFO",
        description="Minimum level written to the log file",
    )

    # Data sources
    libvirt_uri: str = Field(
        default="qemu:///system",
        description="Connection URI of the local hypervisor management endpoint",
    )
    disk_path: str = Field(
        default="/",
        description="Mount point reported by the disk usage endpoint",
    )
    os_release_path: str = Field(
        default="/etc/os-release",
        description="Location of the os-release file",
    )

    @classmethod
    def from_file(cls, path: str) -> "Settings":
        """
        Load settings from a ``key=value`` config file.

        Unknown keys are ignored. Any read or validation problem is reported
        as ConfigError, since the server must not start with a broken config.
        """
        try:
            with open(path, encoding="utf-8") as handle:
                text = handle.read()
        except OSError as exc:
            raise ConfigError(f"cannot read config file {path}: {exc}") from exc

        values = parse_key_value(text, strip=True)
        known = {key: value for key, value in values.items() if key in cls.model_fields}
        try:
            return cls(**known)
        except ValidationError as exc:
            raise ConfigError(f"invalid config file {path}: {exc}") from exc

    @classmethod
    def from_env(cls) -> "Settings":
        # SYSAPI_CONFIG points at a config file; without it the defaults apply
        path = os.getenv("SYSAPI_CONFIG")
        if path:
            return cls.from_file(path)
        return cls()

    def with_overrides(self, **overrides: object) -> "Settings":
        """Return a copy with every non-None override applied and re-validated."""
        update = {key: value for key, value in overrides.items() if value is not None}
        try:
            return type(self)(**{**self.model_dump(), **update})
        except ValidationError as exc:
            raise ConfigError(f"invalid setting: {exc}") from exc


@lru_cache(maxsize=1)
def get_settings() -> Settings:
    return Settings.from_env()
