"""Pattern matching and normalization helpers shared by the alert parsers."""

import re
from typing import Iterable, List, Optional, Sequence, Tuple, TypeVar

from .models import SERVICE_TYPES, AlertRecord

R = TypeVar("R", bound=AlertRecord)

MONTHS = (
    "January", "February", "March", "April", "May", "June",
    "July", "August", "September", "October", "November", "December",
)
WEEKDAYS = ("Sunday", "Monday", "Tuesday", "Wednesday", "Thursday", "Friday", "Saturday")

MONTH_NAMES = "|".join(MONTHS)
WEEKDAY_NAMES = "|".join(WEEKDAYS)

# "11 p.m.", "1:30 am", "12 PM"
TIME_TEXT = r"\d{1,2}(?::\d{2})?\s*(?:a\.m\.|p\.m\.|am|pm)"
TIME_PATTERN = re.compile(rf"({TIME_TEXT})", re.IGNORECASE)

DATE_PATTERN = re.compile(rf"({MONTH_NAMES})\s+(\d{{1,2}}),\s+(\d{{4}})", re.IGNORECASE)
LINE_PATTERN = re.compile(r"line\s+(\d+)", re.IGNORECASE)
STATION_SUFFIX_PATTERN = re.compile(r"\s+stations?$", re.IGNORECASE)
WEEKEND_PATTERN = re.compile(r"this\s+weekend|saturday|sunday|weekend", re.IGNORECASE)
ENTITY_PATTERN = re.compile(r"&[^;]+;")
CLOCK_PATTERN = re.compile(r"^(\d{1,2})(?::(\d{2}))?\s*(am|pm)?")

HTML_ENTITIES = {
    "&nbsp;": " ",
    "&#8211;": "–",
    "&amp;": "&",
    "&lt;": "<",
    "&gt;": ">",
    "&quot;": '"',
    "&#39;": "'",
}

# Ordered fallback chain: (name, pattern) pairs tried first to last.
PatternChain = Sequence[Tuple[str, re.Pattern]]


def first_match(patterns: PatternChain, text: Optional[str]) -> Tuple[Optional[str], Optional[re.Match]]:
    """
    Search text with each pattern in order and stop at the first hit.

    Args:
        patterns: Ordered (name, compiled pattern) pairs.
        text: Text to search. None or empty never matches.

    Returns:
        (name, match) of the winning pattern, or (None, None).
    """
    if not text:
        return None, None
    for name, pattern in patterns:
        match = pattern.search(text)
        if match:
            return name, match
    return None, None


def clean_html_entities(text: Optional[str]) -> Optional[str]:
    """Decode the HTML entities found in advisory markup. Unknown entities are kept."""
    if text is None:
        return None
    return ENTITY_PATTERN.sub(lambda m: HTML_ENTITIES.get(m.group(0), m.group(0)), text)


def contains_time_info(text: Optional[str]) -> bool:
    if not text:
        return False
    return TIME_PATTERN.search(text) is not None


def extract_times(text: Optional[str]) -> List[str]:
    """Return every time-of-day mention in text, in order."""
    if not text:
        return []
    return TIME_PATTERN.findall(text)


def normalize_time_display(time_str: str) -> str:
    """Strip periods and upper-case the meridiem: "11 p.m." -> "11 PM"."""
    return time_str.replace(".", "").upper()


def convert_to_24_hour(time_str: Optional[str]) -> Optional[str]:
    """
    Convert a 12-hour time mention to 24-hour "HH:MM".

    Examples:
        "11 p.m." -> "23:00", "12 AM" -> "00:00", "1:30 am" -> "01:30"

    Returns:
        The converted time, or None if time_str has no leading hour.
    """
    if not time_str:
        return None

    clean_time = time_str.replace(".", "").strip().lower()
    match = CLOCK_PATTERN.match(clean_time)
    if not match:
        return None

    hours = int(match.group(1))
    minutes = match.group(2) or "00"
    period = match.group(3)

    if period == "pm" and hours != 12:
        hours += 12
    if period == "am" and hours == 12:
        hours = 0

    return f"{hours:02d}:{minutes}"


def standardize_date(date_str: Optional[str]) -> Optional[str]:
    """Normalize a "Month D, YYYY" date; other text is returned trimmed."""
    if not date_str or not date_str.strip():
        return None

    match = DATE_PATTERN.search(date_str)
    if match:
        return f"{match.group(1)} {match.group(2)}, {match.group(3)}"

    return date_str.strip()


def extract_line_number(line_name: Optional[str]) -> Optional[str]:
    """Turn "line 2 (bloor-danforth)" into "Line 2"; unrecognized names pass through."""
    if not line_name:
        return None

    match = LINE_PATTERN.search(line_name)
    if match:
        return f"Line {match.group(1)}"

    return line_name


def clean_station_name(station_name: Optional[str]) -> Optional[str]:
    """Trim, drop a trailing "station"/"stations" and collapse whitespace."""
    if not station_name:
        return None

    name = STATION_SUFFIX_PATTERN.sub("", station_name.strip())
    return re.sub(r"\s+", " ", name)


def determine_service_type(text: Optional[str]) -> Optional[str]:
    """Guess the service type from keywords, checked subway, bus, streetcar, train."""
    if not text:
        return None

    lower_text = text.lower()
    for service_type in SERVICE_TYPES:
        if service_type in lower_text:
            return service_type

    return None


def is_weekend_disruption(text: Optional[str]) -> bool:
    if not text:
        return False
    return WEEKEND_PATTERN.search(text) is not None


def keep_meaningful(records: Iterable[R]) -> List[R]:
    """Drop records that carry none of their meaningful fields."""
    return [record for record in records if record.is_meaningful()]
