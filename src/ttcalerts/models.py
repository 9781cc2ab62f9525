"""Data models for TTC alert records."""

from dataclasses import dataclass, fields
from typing import Any, ClassVar, Dict, Optional, Tuple, Union

SERVICE_DISRUPTION = "service_disruption"
ACCESSIBILITY_ISSUE = "accessibility_issue"

SERVICE_TYPES = ("subway", "bus", "streetcar", "train")
EQUIPMENT_TYPES = ("elevator", "escalator")


class ParseError(ValueError):
    """Raised when an API response cannot be decoded as JSON."""


@dataclass
class AlertRecord:
    """Fields shared by every parsed alert."""
    start_date: Optional[str] = None  # "Month D, YYYY"
    end_date: Optional[str] = None
    start_time: Optional[str] = None
    end_time: Optional[str] = None
    service_type: Optional[str] = None  # one of SERVICE_TYPES
    location_start: Optional[str] = None
    location_end: Optional[str] = None
    work_type: Optional[str] = None
    description: Optional[str] = None

    kind: ClassVar[Optional[str]] = None
    MEANINGFUL_FIELDS: ClassVar[Tuple[str, ...]] = ()

    def is_meaningful(self) -> bool:
        """Return True if at least one of MEANINGFUL_FIELDS is set."""
        return any(getattr(self, name) for name in self.MEANINGFUL_FIELDS)

    def get(self, field_name: str, default: Any = None) -> Any:
        """Read a field by name, falling back to default when unset or unknown."""
        value = getattr(self, field_name, None)
        return default if value is None else value

    def to_dict(self) -> Dict[str, Any]:
        """Return a JSON-serializable mapping of the record."""
        data: Dict[str, Any] = {}
        if self.kind is not None:
            data["kind"] = self.kind
        for f in fields(self):
            data[f.name] = getattr(self, f.name)
        return data


@dataclass
class MarkupAlert(AlertRecord):
    """Alert parsed from one entry of the service advisory API."""
    id: Optional[str] = None
    url: Optional[str] = None
    line: Optional[str] = None  # e.g. "Line 1"
    title: Optional[str] = None

    MEANINGFUL_FIELDS: ClassVar[Tuple[str, ...]] = ("line", "location_start", "start_date")


@dataclass
class ServiceDisruption(AlertRecord):
    """Planned service change parsed from a text bulletin."""
    kind: ClassVar[Optional[str]] = SERVICE_DISRUPTION
    MEANINGFUL_FIELDS: ClassVar[Tuple[str, ...]] = ("start_date", "service_type", "location_start")


@dataclass
class AccessibilityIssue(AlertRecord):
    """Elevator or escalator outage parsed from a text bulletin."""
    station: Optional[str] = None
    equipment_type: Optional[str] = None  # one of EQUIPMENT_TYPES
    equipment_id: Optional[str] = None  # e.g. "2B2E"

    kind: ClassVar[Optional[str]] = ACCESSIBILITY_ISSUE
    MEANINGFUL_FIELDS: ClassVar[Tuple[str, ...]] = ("station",)


BulletinRecord = Union[ServiceDisruption, AccessibilityIssue]
