"""Remediation hints appended to fork failures."""

from typing import Dict

_HINTS: Dict[str, str] = {
    "fork_may_exist": (
        "Database fork '{database}' may already exist. "
        "Set 'replace: true' to overwrite it, or use a different name."
    ),
    "fork_still_exists": (
        "Database fork '{database}' still exists after deletion attempt. Please check manually."
    ),
}


def remediation_hint(code: str, **kwargs: str) -> str:
    if code not in _HINTS:
        raise KeyError(f"Unknown remediation hint key: {code}")

    return _HINTS[code].format(**kwargs)
