"""Parser for service advisory API responses with embedded HTML."""

import json
import logging
import re
from typing import Any, Callable, List, Optional, Tuple

from .models import MarkupAlert, ParseError
from .utils import (
    MONTH_NAMES,
    extract_line_number,
    extract_times as find_times,
    first_match,
    normalize_time_display,
)

logger = logging.getLogger(__name__)

LINE_INFO_PATTERN = re.compile(r"line\s+(\d+)\s*\([^)]+\)", re.IGNORECASE)
STATION_PAIR_PATTERN = re.compile(
    r"([A-Za-z\s]+?)\s+to\s+([A-Za-z\s]+?)\s+stations?\s*[–-]", re.IGNORECASE
)
WORK_TYPE_PATTERN = re.compile(r"[–-]\s*([^<]+?)(?:on\s+|starting)", re.IGNORECASE)
TITLE_PATTERN = re.compile(r'<span class="field-satitle">([^<]+)</span>')
END_DATE_PATTERN = re.compile(r'<span class="field-endeffectivedate">([^<]+)</span>')

START_DATE_PATTERNS = (
    # the date may be followed by a nested <span>&nbsp;</span>
    ("effective_date", re.compile(r'<span class="ed-start-date field-starteffectivedate">([^<]+)')),
    # the label span is empty, the date is the text right after it
    ("label_wrapper", re.compile(r'<span class="sa-start-date-label-wrapper"></span>([^<]+)')),
    ("bare_date", re.compile(rf"((?:{MONTH_NAMES})\s+\d{{1,2}},\s+\d{{4}})")),
)

# (title phrases, work type), checked in order
WORK_TYPE_REFINEMENTS: Tuple[Tuple[Tuple[str, ...], str], ...] = (
    (("early closure", "nightly early closure"), "early closure"),
    (("late opening",), "late opening"),
    (("full weekend closure",), "weekend closure"),
    (("full-day closure",), "full-day closure"),
    (("early nightly closure",), "early nightly closure"),
)


def extract_line_info(html: Optional[str], alert: MarkupAlert) -> None:
    if not html:
        return
    match = LINE_INFO_PATTERN.search(html)
    if match:
        alert.line = extract_line_number(match.group(0))
        alert.service_type = "subway"


def extract_station_info(html: Optional[str], alert: MarkupAlert) -> None:
    """Read "<A> to <B> stations –" into location_start/location_end."""
    if not html:
        return
    match = STATION_PAIR_PATTERN.search(html)
    if match:
        alert.location_start = match.group(1).strip()
        alert.location_end = match.group(2).strip()


def extract_work_type(html: Optional[str], alert: MarkupAlert) -> None:
    if not html:
        return
    match = WORK_TYPE_PATTERN.search(html)
    if match:
        alert.work_type = match.group(1).strip()


def extract_title(html: Optional[str], alert: MarkupAlert) -> None:
    if not html:
        return
    match = TITLE_PATTERN.search(html)
    if match:
        alert.title = match.group(1).strip()


def extract_dates(html: Optional[str], alert: MarkupAlert) -> None:
    """
    Extract the effective dates.

    The start date is taken from the first of START_DATE_PATTERNS that matches;
    the end date only from its dedicated span.
    """
    if not html:
        return

    name, match = first_match(START_DATE_PATTERNS, html)
    if match:
        logger.debug(f"Start date for {alert.id} matched by {name}")
        alert.start_date = match.group(1).strip()

    end_match = END_DATE_PATTERN.search(html)
    if end_match:
        alert.end_date = end_match.group(1).strip()


def extract_times(html: Optional[str], alert: MarkupAlert) -> None:
    """
    Read up to two times from the title, kept in 12-hour display form ("11 PM").

    Only the title is scanned; html is accepted to keep the extractor signature.
    """
    times = find_times(alert.title)
    if times:
        alert.start_time = normalize_time_display(times[0])
        if len(times) > 1:
            alert.end_time = normalize_time_display(times[1])


def refine_work_type(html: Optional[str], alert: MarkupAlert) -> None:
    """Replace work_type with a known closure category named in the title."""
    if not alert.title:
        return
    title = alert.title.lower()
    for phrases, work_type in WORK_TYPE_REFINEMENTS:
        if any(phrase in title for phrase in phrases):
            alert.work_type = work_type
            return


Extractor = Callable[[Optional[str], MarkupAlert], None]

# Order matters: times and refinement read the title set by extract_title.
MARKUP_EXTRACTORS: Tuple[Extractor, ...] = (
    extract_line_info,
    extract_station_info,
    extract_work_type,
    extract_title,
    extract_dates,
    extract_times,
    refine_work_type,
)


class MarkupAlertParser:
    """Parses service advisory API responses into MarkupAlert records."""

    def __init__(self, extractors: Tuple[Extractor, ...] = MARKUP_EXTRACTORS):
        """
        Initialize the parser.

        Args:
            extractors: Field extractors applied to every entry, in order.
        """
        self.extractors = extractors

    def parse(self, api_response: Any) -> List[MarkupAlert]:
        """
        Parse an API response.

        Args:
            api_response: Decoded response dict, or its JSON text.

        Returns:
            List of MarkupAlert objects in response order. Entries without a
            line, start location or start date are dropped.

        Raises:
            ParseError: If api_response is text that is not valid JSON.
        """
        data = self._decode(api_response)
        results = data.get("Results") if isinstance(data, dict) else None
        results = results or []

        alerts: List[MarkupAlert] = []
        for result in results:
            alert = self.parse_entry(result)
            if alert.is_meaningful():
                alerts.append(alert)
            else:
                logger.debug(f"Dropping entry {alert.id}: no line, location or date found")

        logger.debug(f"Parsed {len(alerts)} alerts from {len(results)} entries")
        return alerts

    def parse_entry(self, result: dict) -> MarkupAlert:
        """Run every extractor over one API entry; the record may be empty."""
        alert = MarkupAlert(id=result.get("Id"), url=result.get("Url"))
        html = result.get("Html")
        for extractor in self.extractors:
            extractor(html, alert)
        return alert

    @staticmethod
    def _decode(api_response: Any) -> Any:
        if api_response is None:
            return {}
        if not isinstance(api_response, (str, bytes, bytearray)):
            return api_response
        try:
            return json.loads(api_response)
        except ValueError as e:
            logger.error(f"Failed to decode API response: {e}")
            raise ParseError(f"Invalid API response: {e}") from e


def parse_markup_alerts(api_response: Any) -> List[MarkupAlert]:
    """Parse an API response with the default extractor chain."""
    return MarkupAlertParser().parse(api_response)
