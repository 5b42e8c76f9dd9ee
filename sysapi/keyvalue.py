from typing import Dict


def parse_key_value(text: str, strip: bool = False) -> Dict[str, str]:
    """
    Parse ``KEY=VALUE`` lines into a dict.

    Blank lines and lines starting with '#' are skipped, lines without '='
    are ignored and only the first '=' splits, so values may contain '='.
    With strip=True whitespace around keys and values is removed.
    """
    result: Dict[str, str] = {}
    for line in text.split("\n"):
        if line.endswith("\r"):
            line = line[:-1]
        if strip:
            line = line.strip()
        if not line or line.startswith("#"):
            continue
        if "=" not in line:
            continue
        key, value = line.split("=", 1)
        if strip:
            key, value = key.strip(), value.strip()
        result[key] = value
    return result
