"""Parser for plain-text service bulletins (service disruptions and accessibility issues)."""

import logging
import re
from typing import List, Optional

from .models import (
    ACCESSIBILITY_ISSUE,
    SERVICE_DISRUPTION,
    AccessibilityIssue,
    BulletinRecord,
    ServiceDisruption,
)
from .season import DEFAULT_SEASON, ServiceSeason
from .utils import (
    TIME_TEXT,
    WEEKDAY_NAMES,
    clean_station_name,
    convert_to_24_hour,
    first_match,
)

logger = logging.getLogger(__name__)

# Overnight closures end at 5 a.m. unless the notice says otherwise
DEFAULT_RESUMPTION_TIME = "05:00"

NOTICE_BOUNDARY_PATTERN = re.compile(
    rf"(?=On\s+(?:{WEEKDAY_NAMES})|This\s+weekend|^[A-Za-z\s-]+:\s+(?:Elevator|Escalator))",
    re.IGNORECASE | re.MULTILINE,
)
ACCESSIBILITY_PATTERN = re.compile(
    r"^([A-Za-z\s-]+):\s+(Elevator|Escalator)\s*([A-Za-z0-9]*)\s+out\s+of\s+service\s+(.+)",
    re.IGNORECASE,
)
ACCESSIBILITY_LOCATION_PATTERNS = (
    ("between", re.compile(r"between\s+(.+?)\s+and\s+(.+?)(?:\.|$)", re.IGNORECASE)),
    ("from_to", re.compile(r"from\s+(.+?)\s+to\s+(.+?)(?:\.|$)", re.IGNORECASE)),
)

WEEKEND_PATTERN = re.compile(r"This\s+weekend", re.IGNORECASE)
START_TIME_PATTERN = re.compile(
    rf"(?:(?P<start_by>start\s+by)|starting\s+at)\s+(?P<time>{TIME_TEXT})", re.IGNORECASE
)
SERVICE_TYPE_PATTERN = re.compile(r"(subway|bus|streetcar|train)\s+service", re.IGNORECASE)
SERVICE_LOCATION_PATTERNS = (
    ("followed_by_clause", re.compile(
        r"between\s+([A-Za-z\s]+?)\s+and\s+([A-Za-z\s]+?)(?:\s+stations?)?\s+(?:will|,|due)",
        re.IGNORECASE,
    )),
    ("followed_by_stations", re.compile(
        r"between\s+([A-Za-z\s]+?)\s+and\s+([A-Za-z\s]+?)(?:\s+stations?)",
        re.IGNORECASE,
    )),
    ("no_subway_service", re.compile(
        r"no\s+subway\s+service\s+between\s+([A-Za-z\s]+?)\s+and\s+([A-Za-z\s]+?)(?:\s+stations?)?(?:\s*,)",
        re.IGNORECASE,
    )),
)
WORK_TYPE_PATTERN = re.compile(r"due\s+to\s+([^.]+)", re.IGNORECASE)
SHUTTLE_CLAUSE_PATTERN = re.compile(r"\s*shuttle\s+buses.*$", re.IGNORECASE)


def split_notices(text: Optional[str]) -> List[str]:
    """
    Split a bulletin into individual notices.

    A notice starts at "On <Weekday>", at "This weekend", or at a line of the
    form "<Station>: Elevator|Escalator". Empty fragments are discarded.
    """
    if not text:
        return []
    fragments = NOTICE_BOUNDARY_PATTERN.split(text)
    return [fragment.strip() for fragment in fragments if fragment.strip()]


def parse_accessibility_issue(notice: str) -> Optional[AccessibilityIssue]:
    """
    Parse an elevator/escalator outage notice.

    Returns:
        AccessibilityIssue, or None if the notice is not an outage notice.
    """
    match = ACCESSIBILITY_PATTERN.match(notice)
    if not match:
        return None

    item = AccessibilityIssue(
        station=match.group(1).strip(),
        equipment_type=match.group(2).lower(),
        equipment_id=match.group(3).strip() or None,
        description=match.group(4).strip(),
    )

    _, location_match = first_match(ACCESSIBILITY_LOCATION_PATTERNS, item.description)
    if location_match:
        item.location_start = location_match.group(1).strip()
        item.location_end = location_match.group(2).strip()

    return item


class BulletinParser:
    """
    Parses text bulletins into ServiceDisruption and AccessibilityIssue records.

    Bulletins name weekdays and day numbers but no month or year; those come
    from the season the parser is configured with.
    """

    def __init__(self, season: Optional[ServiceSeason] = None):
        """
        Initialize the parser.

        Args:
            season: Reference window for dating notices. Defaults to DEFAULT_SEASON.
        """
        self.season = season or DEFAULT_SEASON
        self._date_pattern = re.compile(
            rf"(?:On\s+)?({WEEKDAY_NAMES}),?\s+(?:{self.season.month_name}\s+)?(\d{{1,2}})",
            re.IGNORECASE,
        )

    def parse(self, text: Optional[str]) -> List[BulletinRecord]:
        """
        Parse every notice in a bulletin.

        Args:
            text: Raw bulletin text; None or blank text yields no records.

        Returns:
            Records in the order their notices appear. Notices that match
            neither kind are skipped.
        """
        if not text or not text.strip():
            return []

        records: List[BulletinRecord] = []
        notices = split_notices(text)
        for notice in notices:
            record = self.parse_notice(notice)
            if record is not None:
                records.append(record)

        logger.debug(f"Parsed {len(records)} records from {len(notices)} notices")
        return records

    def parse_notice(self, notice: str) -> Optional[BulletinRecord]:
        """Classify one notice; accessibility issues take precedence."""
        item = parse_accessibility_issue(notice)
        if item is not None:
            return item

        disruption = self.parse_service_disruption(notice)
        if disruption is None:
            logger.debug(f"Skipping notice with no recognizable fields: {notice[:50]}")
        return disruption

    def parse_service_disruption(self, notice: str) -> Optional[ServiceDisruption]:
        """
        Parse a planned service change notice.

        Returns:
            ServiceDisruption, or None if no date, service type or location
            could be found.
        """
        item = ServiceDisruption()

        self._extract_dates(notice, item)
        self._extract_times(notice, item)
        self._extract_service_type(notice, item)
        self._extract_locations(notice, item)
        self._extract_work_type(notice, item)

        if item.is_meaningful():
            return item
        return None

    def parse_service_disruptions(self, text: Optional[str]) -> List[ServiceDisruption]:
        return [record for record in self.parse(text) if record.kind == SERVICE_DISRUPTION]

    def parse_accessibility_issues(self, text: Optional[str]) -> List[AccessibilityIssue]:
        return [record for record in self.parse(text) if record.kind == ACCESSIBILITY_ISSUE]

    def _extract_dates(self, notice: str, item: ServiceDisruption) -> None:
        match = self._date_pattern.search(notice)
        if match:
            item.start_date = self.season.format_day(int(match.group(2)))

        # "This weekend" wins over any weekday mention
        if WEEKEND_PATTERN.search(notice):
            item.start_date = self.season.weekend_start_date()

    @staticmethod
    def _extract_times(notice: str, item: ServiceDisruption) -> None:
        """
        Extract the closure time.

        "will start by 11 a.m." is when service resumes, so it becomes the end
        time and the start stays unknown. "starting at 11 p.m." is the start of
        the closure, which runs to DEFAULT_RESUMPTION_TIME.
        """
        match = START_TIME_PATTERN.search(notice)
        if not match:
            return

        time_24 = convert_to_24_hour(match.group("time"))
        if match.group("start_by"):
            item.end_time = time_24
        else:
            item.start_time = time_24

        if item.start_time and not item.end_time:
            item.end_time = DEFAULT_RESUMPTION_TIME

    @staticmethod
    def _extract_service_type(notice: str, item: ServiceDisruption) -> None:
        match = SERVICE_TYPE_PATTERN.search(notice)
        if match:
            item.service_type = match.group(1).lower()

    @staticmethod
    def _extract_locations(notice: str, item: ServiceDisruption) -> None:
        name, match = first_match(SERVICE_LOCATION_PATTERNS, notice)
        if match:
            logger.debug(f"Locations matched by {name}")
            item.location_start = clean_station_name(match.group(1))
            item.location_end = clean_station_name(match.group(2))

    @staticmethod
    def _extract_work_type(notice: str, item: ServiceDisruption) -> None:
        match = WORK_TYPE_PATTERN.search(notice)
        if match:
            item.work_type = SHUTTLE_CLAUSE_PATTERN.sub("", match.group(1).strip())


def parse_bulletin_alerts(text: Optional[str], season: Optional[ServiceSeason] = None) -> List[BulletinRecord]:
    """Parse a text bulletin with a BulletinParser for the given season."""
    return BulletinParser(season).parse(text)
