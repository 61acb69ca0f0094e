"""
Finds cooking durations in recipe directions ("simmer 10-15 minutes").
"""

import re
from dataclasses import dataclass
from typing import List

TIMER_PATTERN = re.compile(
    r"(\d+)\s*[-–]?\s*(\d+)?\s*(minutes?|mins?|hours?|hrs?|hr|seconds?|secs?)",
    re.IGNORECASE,
)


@dataclass
class ParsedTimer:
    total_seconds: int
    display_label: str


def parse_direction_timers(direction: str) -> List[ParsedTimer]:
    """
    Extract every duration in a direction step.

    Ranges use the upper bound ("10-15 minutes" -> 15 min); zero values are skipped.
    """
    timers = []
    for match in TIMER_PATTERN.finditer(direction or ""):
        value = int(match.group(2) or match.group(1))
        if value <= 0:
            continue

        unit = match.group(3).lower()
        if unit.startswith("h"):
            seconds = value * 3600
            label = "1 hr" if value == 1 else f"{value} hrs"
        elif unit.startswith("s"):
            seconds = value
            label = f"{value} sec"
        else:
            seconds = value * 60
            label = f"{value} min"

        timers.append(ParsedTimer(total_seconds=seconds, display_label=label))
    return timers
