import re
from typing import Optional

# Durations like "10 min", "5 minutes", "1 hour", "30 seconds", "45 detik", "10 menit", "1 jam"
DURATION_REGEX = re.compile(
    r'(\d+)\s*(sec|secs|second|seconds|detik|min|mins|minute|minutes|menit|hr|hrs|hour|hours|jam)\b',
    re.IGNORECASE,
)

DEFAULT_STEP_SECONDS = 5 * 60


def _unit_seconds(unit: str) -> int:
    unit = unit.lower()
    if unit.startswith(("hr", "hour")) or unit == "jam":
        return 3600
    if unit.startswith("sec") or unit == "detik":
        return 1
    return 60


def suggest_step_seconds(step_text: str) -> Optional[int]:
    """
    Countdown length for an instruction step, from the durations it mentions.
    "1 hour 30 minutes" adds up. Returns None when no duration is mentioned.
    """
    if not step_text:
        return None

    total = 0
    for match in DURATION_REGEX.finditer(step_text):
        total += int(match.group(1)) * _unit_seconds(match.group(2))

    return total or None
