"""Main TTC alert parser class."""

import logging
from typing import Any, List, Optional, Sequence

from .bulletin_parser import BulletinParser
from .formatters import format_alerts_table, format_results_tables
from .markup_parser import MarkupAlertParser
from .models import AccessibilityIssue, BulletinRecord, MarkupAlert, ServiceDisruption
from .season import ServiceSeason
from .utils import clean_html_entities

logger = logging.getLogger(__name__)


class TTCAlertParser:
    """
    Parses TTC service alerts from the advisory API and from text bulletins.

    This class provides methods to:
    - Parse API responses into MarkupAlert records
    - Parse text bulletins into service disruptions and accessibility issues
    - Print parsed records as console tables
    """

    def __init__(self, season: Optional[ServiceSeason] = None):
        """
        Initialize the parser.

        Args:
            season: Reference window used to date text bulletins. Defaults to
                    DEFAULT_SEASON.
        """
        self.markup_parser = MarkupAlertParser()
        self.bulletin_parser = BulletinParser(season)

    def parse_api_alerts(self, api_response: Any) -> List[MarkupAlert]:
        """
        Parse a service advisory API response.

        Args:
            api_response: Decoded response dict or its JSON text.

        Returns:
            List of MarkupAlert objects.

        Raises:
            ParseError: If api_response is not valid JSON.
        """
        return self.markup_parser.parse(api_response)

    def parse_text_alerts(self, text: Optional[str]) -> List[BulletinRecord]:
        """
        Parse a text bulletin.

        Args:
            text: Raw bulletin text.

        Returns:
            List of ServiceDisruption and AccessibilityIssue objects in text order.
        """
        return self.bulletin_parser.parse(text)

    def parse_service_disruptions(self, text: Optional[str]) -> List[ServiceDisruption]:
        return self.bulletin_parser.parse_service_disruptions(text)

    def parse_accessibility_issues(self, text: Optional[str]) -> List[AccessibilityIssue]:
        return self.bulletin_parser.parse_accessibility_issues(text)

    def display_api_alerts_table(self, alerts: Sequence[MarkupAlert]) -> None:
        print(format_alerts_table(alerts))

    def display_text_alerts_table(self, records: Sequence[BulletinRecord]) -> None:
        print(format_results_tables(records))

    @staticmethod
    def clean_html(text: Optional[str]) -> Optional[str]:
        """Decode HTML entities such as &amp; and &#8211;."""
        return clean_html_entities(text)
