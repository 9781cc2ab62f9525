"""Console, JSON, CSV and HTML renderers for parsed alert records."""

import json
import logging
from collections import Counter
from typing import Any, Dict, List, Optional, Sequence, Tuple, Union

import pandas as pd

from .models import ACCESSIBILITY_ISSUE, SERVICE_DISRUPTION, AlertRecord

logger = logging.getLogger(__name__)

Record = Union[AlertRecord, Dict[str, Any]]

NOT_AVAILABLE = "N/A"

# (header, field) pairs per export type
CSV_COLUMNS: Dict[str, Tuple[Tuple[str, str], ...]] = {
    "alerts": (
        ("ID", "id"),
        ("Line", "line"),
        ("Title", "title"),
        ("Work Type", "work_type"),
        ("Start Date", "start_date"),
        ("End Date", "end_date"),
        ("Start Time", "start_time"),
        ("End Time", "end_time"),
    ),
    "disruptions": (
        ("Date", "start_date"),
        ("Start Time", "start_time"),
        ("End Time", "end_time"),
        ("Service", "service_type"),
        ("From", "location_start"),
        ("To", "location_end"),
        ("Work Type", "work_type"),
    ),
    "accessibility": (
        ("Station", "station"),
        ("Equipment", "equipment_type"),
        ("Equipment ID", "equipment_id"),
        ("From", "location_start"),
        ("To", "location_end"),
        ("Description", "description"),
    ),
}


def _field(record: Record, name: str, default: Any = None) -> Any:
    value = record.get(name)
    return default if value is None else value


def _kind(record: Record) -> Optional[str]:
    if isinstance(record, AlertRecord):
        return record.kind
    return record.get("kind")


def _as_dict(record: Record) -> Dict[str, Any]:
    if isinstance(record, AlertRecord):
        return record.to_dict()
    return dict(record)


def _span(start: Optional[str], end: Optional[str], joiner: str) -> str:
    """Join a start/end pair, falling back to whichever side is present."""
    if start and end:
        return f"{start}{joiner}{end}"
    return start or end or NOT_AVAILABLE


def _clip(value: Any, width: int) -> str:
    return str(value)[:width]


def _render_table(title: Optional[str], rows: List[list], columns: List[str], rule_width: int) -> str:
    rule = "─" * rule_width
    table = pd.DataFrame(rows, columns=columns).to_string(index=False, justify="left")
    lines = [title] if title else []
    lines.extend([rule, table, rule])
    return "\n".join(lines)


def format_alerts_table(alerts: Sequence[Record]) -> str:
    """Render API alerts as a fixed-width console table."""
    if not alerts:
        return "No alerts to display."

    rows = [
        [
            _clip(_field(alert, "id", NOT_AVAILABLE), 8),
            _field(alert, "line", NOT_AVAILABLE),
            _field(alert, "severity", NOT_AVAILABLE),
            _clip(_field(alert, "title", NOT_AVAILABLE), 58),
            _clip(_field(alert, "description", NOT_AVAILABLE), 80),
        ]
        for alert in alerts
    ]
    table = _render_table(
        "Formatted TTC Alert Results:",
        rows,
        ["ID", "Line", "Severity", "Title", "Description"],
        160,
    )
    return f"{table}\nTotal alerts: {len(alerts)}"


def format_service_disruptions_table(disruptions: Sequence[Record]) -> str:
    rows = [
        [
            _clip(_field(item, "start_date", NOT_AVAILABLE), 13),
            _clip(_span(_field(item, "start_time"), _field(item, "end_time"), "-"), 10),
            _clip(_span(_field(item, "location_start"), _field(item, "location_end"), " to "), 33),
            _clip(_field(item, "service_type", NOT_AVAILABLE), 8),
            _clip(_field(item, "work_type", NOT_AVAILABLE), 23),
            "Active",
        ]
        for item in disruptions
    ]
    return _render_table(
        "=== SERVICE DISRUPTIONS ===",
        rows,
        ["Date", "Time", "Locations", "Service", "Work Type", "Status"],
        140,
    )


def format_accessibility_issues_table(issues: Sequence[Record]) -> str:
    rows = [
        [
            _field(item, "station", NOT_AVAILABLE),
            _field(item, "equipment_type", NOT_AVAILABLE),
            _field(item, "equipment_id", NOT_AVAILABLE),
            _clip(_span(_field(item, "location_start"), _field(item, "location_end"), " to "), 38),
            "Out of Service",
        ]
        for item in issues
    ]
    return _render_table(
        "=== ACCESSIBILITY ISSUES ===",
        rows,
        ["Station", "Equipment", "ID", "Location", "Status"],
        130,
    )


def format_results_tables(records: Sequence[Record]) -> str:
    """Render bulletin records as one table per kind."""
    if not records:
        return "No data to display."

    disruptions = [r for r in records if _kind(r) == SERVICE_DISRUPTION]
    issues = [r for r in records if _kind(r) == ACCESSIBILITY_ISSUE]

    sections = []
    if disruptions:
        sections.append(format_service_disruptions_table(disruptions))
    if issues:
        sections.append(format_accessibility_issues_table(issues))
    return "\n\n".join(sections)


def format_as_json(data: Union[Record, Sequence[Record]], title: str) -> str:
    """Render records as indented JSON under a title line."""
    if isinstance(data, (AlertRecord, dict)):
        payload: Any = _as_dict(data)
    else:
        payload = [_as_dict(record) for record in data]
    return f"{title}:\n{json.dumps(payload, indent=2, ensure_ascii=False)}"


def format_summary(records: Sequence[Record]) -> str:
    """Summarize record counts by kind, disruptions by line and issues by station."""
    lines = ["=== PARSING SUMMARY ==="]
    if not records:
        lines.append("No data to summarize.")
        return "\n".join(lines)

    kinds = Counter(_kind(r) for r in records)
    lines.append(f"Total items parsed: {len(records)}")
    lines.append(f"Service disruptions: {kinds[SERVICE_DISRUPTION]}")
    lines.append(f"Accessibility issues: {kinds[ACCESSIBILITY_ISSUE]}")
    lines.append(f"API alerts: {kinds[None]}")

    if kinds[SERVICE_DISRUPTION]:
        by_line = Counter(
            _field(r, "line", "Unknown") for r in records if _kind(r) == SERVICE_DISRUPTION
        )
        lines.append("")
        lines.append("Service disruptions by line:")
        lines.extend(f"  {line}: {count}" for line, count in by_line.items())

    if kinds[ACCESSIBILITY_ISSUE]:
        by_station = Counter(
            _field(r, "station", "Unknown") for r in records if _kind(r) == ACCESSIBILITY_ISSUE
        )
        lines.append("")
        lines.append("Accessibility issues by station:")
        lines.extend(f"  {station}: {count}" for station, count in by_station.items())

    return "\n".join(lines)


def _to_frame(records: Sequence[Record], columns: Optional[Tuple[Tuple[str, str], ...]]) -> pd.DataFrame:
    if columns is None:
        first = _as_dict(records[0])
        columns = tuple((name, name) for name in first)
    rows = [[_field(record, name, "") for _, name in columns] for record in records]
    return pd.DataFrame(rows, columns=[header for header, _ in columns])


def format_as_csv(records: Sequence[Record], record_type: str = "alerts") -> str:
    """
    Export records as CSV.

    Args:
        records: Parsed records.
        record_type: "alerts", "disruptions" or "accessibility" select a fixed
            column set; anything else exports every field of the first record.

    Returns:
        CSV text with a header row, or "" when there are no records.
    """
    if not records:
        return ""

    columns = CSV_COLUMNS.get(record_type)
    if columns is None:
        logger.debug(f"No column set for {record_type!r}, exporting all fields")
    return _to_frame(records, columns).to_csv(index=False, lineterminator="\n").rstrip("\n")


def format_as_html(records: Sequence[Record], title: str = "TTC Data") -> str:
    """Export records as an HTML table with every field of the first record."""
    if not records:
        return f"<h2>{title}</h2><p>No data available.</p>"

    table = _to_frame(records, None).to_html(index=False, escape=True, border=1)
    return f"<h2>{title}</h2>\n{table}"
