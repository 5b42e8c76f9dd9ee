from typing import Dict

from sysapi.errors import MetricReadError
from sysapi.keyvalue import parse_key_value


def parse_os_release(text: str) -> Dict[str, str]:
    """Parse os-release content; values are returned raw, quotes included."""
    return parse_key_value(text)


def get_os_release(path: str = "/etc/os-release") -> Dict[str, str]:
    try:
        with open(path, encoding="utf-8") as handle:
            text = handle.read()
    except OSError as exc:
        raise MetricReadError(f"Failed to read {path}: {exc}") from exc

    return parse_os_release(text)
