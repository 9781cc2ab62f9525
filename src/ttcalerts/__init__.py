"""ttcalerts - Structured records from TTC service advisories and text bulletins."""

__version__ = "0.1.0"

from .models import (
    AlertRecord,
    MarkupAlert,
    ServiceDisruption,
    AccessibilityIssue,
    BulletinRecord,
    ParseError,
    SERVICE_DISRUPTION,
    ACCESSIBILITY_ISSUE,
)
from .season import ServiceSeason, DEFAULT_SEASON
from .markup_parser import MarkupAlertParser, parse_markup_alerts
from .bulletin_parser import BulletinParser, parse_bulletin_alerts
from .alert_parser import TTCAlertParser
from .utils import clean_html_entities, convert_to_24_hour

__all__ = [
    "TTCAlertParser",
    "MarkupAlertParser",
    "BulletinParser",
    "parse_markup_alerts",
    "parse_bulletin_alerts",
    "clean_html_entities",
    "convert_to_24_hour",
    "ServiceSeason",
    "DEFAULT_SEASON",
    "AlertRecord",
    "MarkupAlert",
    "ServiceDisruption",
    "AccessibilityIssue",
    "BulletinRecord",
    "ParseError",
    "SERVICE_DISRUPTION",
    "ACCESSIBILITY_ISSUE",
]
