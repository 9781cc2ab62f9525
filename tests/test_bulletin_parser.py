"""Tests for the text bulletin parser."""

import sys
import unittest
from datetime import date
from pathlib import Path

# Add src to path so we can import ttcalerts
sys.path.insert(0, str(Path(__file__).parent.parent / "src"))

from ttcalerts.models import (
    ACCESSIBILITY_ISSUE,
    SERVICE_DISRUPTION,
    AccessibilityIssue,
    ServiceDisruption,
)
from ttcalerts.bulletin_parser import (
    DEFAULT_RESUMPTION_TIME,
    SERVICE_LOCATION_PATTERNS,
    BulletinParser,
    parse_accessibility_issue,
    parse_bulletin_alerts,
    split_notices,
)
from ttcalerts.season import ServiceSeason
from ttcalerts.utils import first_match

SUNDAY_NOTICE = (
    "On Sunday, July 27, subway service between St George and Broadview stations "
    "will start by 11 a.m., due to planned track work. Shuttle buses will operate."
)
SATURDAY_NOTICE = (
    "On Saturday, July 26, there will be no subway service between Kipling and Keele "
    "stations, due to planned track work. Shuttle buses will operate."
)
WEEKEND_NOTICE = (
    "This weekend, there will be no subway service between St George and St Andrew "
    "stations, starting at 11 p.m. July 25, due to planned track work. "
    "Shuttle buses will only operate on Friday."
)

BULLETIN = f"""{SUNDAY_NOTICE}

{SATURDAY_NOTICE}

{WEEKEND_NOTICE}

Bessarion: Elevator out of service between concourse and Line 4 platform.

Kipling: Elevator out of service between Aukland Rd entrance and concourse.

Spadina: Escalator 2B2E out of service from Line 2 Kennedy platform to south concourse.

Dupont: Escalator 2S7E out of service from Dupont St north side entrance to concourse."""


class TestServiceDisruptions(unittest.TestCase):
    """Test parsing of planned service change notices."""

    def test_start_by_notice(self):
        """Test that "start by" sets the resumption time only."""
        results = parse_bulletin_alerts(SUNDAY_NOTICE)

        self.assertEqual(len(results), 1)
        item = results[0]
        self.assertIsInstance(item, ServiceDisruption)
        self.assertEqual(item.kind, SERVICE_DISRUPTION)
        self.assertEqual(item.start_date, "July 27, 2025")
        self.assertEqual(item.end_time, "11:00")
        self.assertIsNone(item.start_time)
        self.assertEqual(item.service_type, "subway")
        self.assertEqual(item.location_start, "St George")
        self.assertEqual(item.location_end, "Broadview")
        self.assertEqual(item.work_type, "planned track work")

    def test_weekend_notice(self):
        results = parse_bulletin_alerts(WEEKEND_NOTICE)

        self.assertEqual(len(results), 1)
        item = results[0]
        self.assertEqual(item.start_date, "July 25, 2025")
        self.assertEqual(item.start_time, "23:00")
        self.assertEqual(item.end_time, DEFAULT_RESUMPTION_TIME)
        self.assertEqual(item.service_type, "subway")
        self.assertEqual(item.location_start, "St George")
        self.assertEqual(item.location_end, "St Andrew")
        self.assertEqual(item.work_type, "planned track work")

    def test_saturday_notice_without_times(self):
        results = parse_bulletin_alerts(SATURDAY_NOTICE)

        self.assertEqual(len(results), 1)
        item = results[0]
        self.assertEqual(item.start_date, "July 26, 2025")
        self.assertEqual(item.location_start, "Kipling")
        self.assertEqual(item.location_end, "Keele")
        self.assertIsNone(item.start_time)
        self.assertIsNone(item.end_time)

    def test_starting_at_defaults_end_time(self):
        notice = ("On Friday, July 25, subway service between Kipling and Keele stations "
                  "will end early, starting at 10 p.m., due to track work.")
        item = parse_bulletin_alerts(notice)[0]

        self.assertEqual(item.start_time, "22:00")
        self.assertEqual(item.end_time, "05:00")

    def test_time_trigger_decides_meaning(self):
        """Test that only the matched trigger decides start versus resumption."""
        notice = ("On Friday, July 25, subway service between Kipling and Keele stations "
                  "will end starting at 10 p.m. Service will start by 6 a.m.")
        item = parse_bulletin_alerts(notice)[0]

        self.assertEqual(item.start_time, "22:00")
        self.assertEqual(item.end_time, "05:00")

    def test_weekend_overrides_weekday(self):
        notice = ("This weekend, from Saturday, July 26, subway service between Kipling "
                  "and Keele stations will be replaced by shuttle buses.")
        item = parse_bulletin_alerts(notice)[0]
        self.assertEqual(item.start_date, "July 25, 2025")

    def test_other_months_are_not_dated(self):
        notice = ("On Sunday, August 3, subway service between Kipling and Keele stations "
                  "will start by 9 a.m.")
        item = parse_bulletin_alerts(notice)[0]

        self.assertIsNone(item.start_date)
        self.assertEqual(item.service_type, "subway")
        self.assertEqual(item.end_time, "09:00")

    def test_shuttle_clause_removed_from_work_type(self):
        notice = ("On Monday, July 28, subway service between Kipling and Keele stations "
                  "will start by 8 a.m., due to signal upgrades shuttle buses will run.")
        item = parse_bulletin_alerts(notice)[0]
        self.assertEqual(item.work_type, "signal upgrades")

    def test_streetcar_service(self):
        notice = "On Tuesday, July 29, streetcar service will be replaced by buses."
        item = parse_bulletin_alerts(notice)[0]

        self.assertEqual(item.service_type, "streetcar")
        self.assertEqual(item.start_date, "July 29, 2025")
        self.assertIsNone(item.location_start)

    def test_location_pattern_priority(self):
        name, match = first_match(SERVICE_LOCATION_PATTERNS, SUNDAY_NOTICE)
        self.assertEqual(name, "followed_by_clause")

        name, match = first_match(SERVICE_LOCATION_PATTERNS, WEEKEND_NOTICE)
        self.assertEqual(name, "followed_by_stations")
        self.assertEqual(match.group(2), "St Andrew")

    def test_no_subway_service_location_pattern(self):
        notice = ("On Saturday, July 26, there will be no subway service between Kipling "
                  "and Keele, due to track work.")
        name, _ = first_match(SERVICE_LOCATION_PATTERNS, notice)
        self.assertEqual(name, "no_subway_service")

        item = parse_bulletin_alerts(notice)[0]
        self.assertEqual(item.location_start, "Kipling")
        self.assertEqual(item.location_end, "Keele")


class TestAccessibilityIssues(unittest.TestCase):
    """Test parsing of elevator and escalator outages."""

    def test_elevator_issue(self):
        results = parse_bulletin_alerts(
            "Bessarion: Elevator out of service between concourse and Line 4 platform."
        )

        self.assertEqual(len(results), 1)
        item = results[0]
        self.assertIsInstance(item, AccessibilityIssue)
        self.assertEqual(item.kind, ACCESSIBILITY_ISSUE)
        self.assertEqual(item.station, "Bessarion")
        self.assertEqual(item.equipment_type, "elevator")
        self.assertIsNone(item.equipment_id)
        self.assertEqual(item.location_start, "concourse")
        self.assertEqual(item.location_end, "Line 4 platform")
        self.assertEqual(item.description, "between concourse and Line 4 platform.")

    def test_escalator_issue_with_id(self):
        results = parse_bulletin_alerts(
            "Spadina: Escalator 2B2E out of service from Line 2 Kennedy platform to south concourse."
        )

        item = results[0]
        self.assertEqual(item.station, "Spadina")
        self.assertEqual(item.equipment_type, "escalator")
        self.assertEqual(item.equipment_id, "2B2E")
        self.assertEqual(item.location_start, "Line 2 Kennedy platform")
        self.assertEqual(item.location_end, "south concourse")

    def test_outage_without_location(self):
        item = parse_accessibility_issue("Union: Elevator out of service until further notice")

        self.assertEqual(item.station, "Union")
        self.assertEqual(item.description, "until further notice")
        self.assertIsNone(item.location_start)
        self.assertIsNone(item.location_end)

    def test_accessibility_takes_precedence(self):
        results = parse_bulletin_alerts(
            "Union: Elevator out of service between subway service level and street."
        )

        self.assertEqual(len(results), 1)
        self.assertEqual(results[0].kind, ACCESSIBILITY_ISSUE)
        self.assertEqual(results[0].location_start, "subway service level")
        self.assertEqual(results[0].location_end, "street")

    def test_not_an_outage(self):
        self.assertIsNone(parse_accessibility_issue("Station: Something is wrong."))

    def test_multiple_issues(self):
        text = """
          Bessarion: Elevator out of service between concourse and Line 4 platform.
          Kipling: Elevator out of service between Aukland Rd entrance and concourse.
        """
        results = parse_bulletin_alerts(text)

        self.assertEqual([r.station for r in results], ["Bessarion", "Kipling"])
        self.assertTrue(all(r.kind == ACCESSIBILITY_ISSUE for r in results))


class TestBulletinParser(unittest.TestCase):
    """Test segmentation, ordering and configuration."""

    def test_split_notices(self):
        notices = split_notices(BULLETIN)

        self.assertEqual(len(notices), 8)
        self.assertTrue(notices[0].startswith("On Sunday"))
        self.assertTrue(notices[2].startswith("This weekend"))
        self.assertEqual(notices[3], "on Friday.")
        self.assertTrue(notices[4].startswith("Bessarion:"))

    def test_full_bulletin_in_order(self):
        results = parse_bulletin_alerts(BULLETIN)

        self.assertEqual(len(results), 7)
        self.assertEqual(
            [r.kind for r in results],
            [SERVICE_DISRUPTION] * 3 + [ACCESSIBILITY_ISSUE] * 4,
        )
        self.assertEqual(results[0].start_date, "July 27, 2025")
        self.assertEqual(results[1].start_date, "July 26, 2025")
        self.assertEqual(results[2].start_date, "July 25, 2025")
        self.assertEqual(
            [r.station for r in results[3:]],
            ["Bessarion", "Kipling", "Spadina", "Dupont"],
        )

    def test_mixed_indented_content(self):
        text = """
          On Sunday, July 27, subway service between St George and Broadview stations will start by 11 a.m.
          Bessarion: Elevator out of service between concourse and Line 4 platform.
          On Saturday, July 26, there will be no subway service between Kipling and Keele stations.
          Spadina: Escalator 2B2E out of service from Line 2 Kennedy platform to south concourse.
        """
        results = parse_bulletin_alerts(text)

        self.assertEqual(len(results), 4)
        self.assertEqual(
            [r.kind for r in results],
            [SERVICE_DISRUPTION, ACCESSIBILITY_ISSUE, SERVICE_DISRUPTION, ACCESSIBILITY_ISSUE],
        )

    def test_duplicates_are_kept(self):
        results = parse_bulletin_alerts(f"{SUNDAY_NOTICE}\n{SUNDAY_NOTICE}")
        self.assertEqual(len(results), 2)
        self.assertEqual(results[0], results[1])

    def test_filter_by_kind(self):
        parser = BulletinParser()

        disruptions = parser.parse_service_disruptions(BULLETIN)
        issues = parser.parse_accessibility_issues(BULLETIN)

        self.assertEqual(len(disruptions), 3)
        self.assertEqual(len(issues), 4)
        self.assertTrue(all(isinstance(r, ServiceDisruption) for r in disruptions))
        self.assertTrue(all(isinstance(r, AccessibilityIssue) for r in issues))

    def test_empty_input(self):
        self.assertEqual(parse_bulletin_alerts(""), [])
        self.assertEqual(parse_bulletin_alerts(None), [])
        self.assertEqual(parse_bulletin_alerts("   \n  "), [])

    def test_text_without_alerts(self):
        self.assertEqual(parse_bulletin_alerts("This is just regular text with no transit alerts."), [])
        self.assertEqual(parse_bulletin_alerts("Station: Something is wrong but not in expected format."), [])

    def test_custom_season(self):
        season = ServiceSeason.for_week_of(date(2026, 8, 12))
        parser = BulletinParser(season)

        weekend = parser.parse(
            "This weekend, there will be no subway service between Kipling and Keele stations."
        )
        sunday = parser.parse(
            "On Sunday, August 16, subway service between Kipling and Keele stations will start by 9 a.m."
        )

        self.assertEqual(weekend[0].start_date, "August 14, 2026")
        self.assertEqual(sunday[0].start_date, "August 16, 2026")
        self.assertEqual(sunday[0].end_time, "09:00")

    def test_season_default(self):
        self.assertEqual(BulletinParser().season.weekend_start, date(2025, 7, 25))


class TestServiceSeason(unittest.TestCase):
    """Test the reference window."""

    def test_for_week_of_snaps_to_friday(self):
        self.assertEqual(ServiceSeason.for_week_of(date(2025, 7, 21)).weekend_start, date(2025, 7, 25))
        self.assertEqual(ServiceSeason.for_week_of(date(2025, 7, 26)).weekend_start, date(2025, 7, 25))
        self.assertEqual(ServiceSeason.for_week_of(date(2025, 7, 27)).weekend_start, date(2025, 7, 25))

    def test_format_day(self):
        season = ServiceSeason(date(2025, 7, 25))
        self.assertEqual(season.month_name, "July")
        self.assertEqual(season.year, 2025)
        self.assertEqual(season.format_day(27), "July 27, 2025")
        self.assertEqual(season.weekend_start_date(), "July 25, 2025")


if __name__ == "__main__":
    unittest.main()
