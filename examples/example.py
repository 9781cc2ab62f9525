"""Example usage of TTCAlertParser."""

import logging
import sys
from pathlib import Path

# Add src to path so we can import ttcalerts
sys.path.insert(0, str(Path(__file__).parent.parent / "src"))

from ttcalerts import ParseError, TTCAlertParser
from ttcalerts.formatters import format_as_json, format_summary

# Set up logging
logging.basicConfig(
    level=logging.INFO,
    format="%(asctime)s - %(name)s - %(levelname)s - %(message)s",
)

logger = logging.getLogger(__name__)

SAMPLE_API_RESPONSE = {
    "Results": [
        {
            "Id": "a38f1477-8709-411c-9963-0b99503532c6",
            "Url": "/service-advisories/subway-service/Line-1-St-George-to-St-Andrew-Early-nightly-closure-July-25-2025",
            "Html": (
                '<div class="sa-title c-news-results__link u-mb-sm">'
                '<span class="field-routename">line 1 (yonge-university)</span>'
                '<span class="sa-dash">&#8211;</span>'
                '<span class="field-satitle">St George to St Andrew stations – '
                "Early nightly closure on Friday, July 25 2025 </span></div>"
                '<div class="sa-effective-date c-news-results__date">'
                '<span class="sa-start-date-label-wrapper"></span>July 25, 2025'
                "<span>&nbsp;</span></div>"
            ),
        },
        {
            "Id": "ee5421dd-4345-4c29-b6b9-871f7d04ba3d",
            "Url": "/service-advisories/subway-service/Line-1-St-George-to-St-Andrew-Full-weekend-closure-July-26-to-27-2025",
            "Html": (
                '<div class="sa-title c-news-results__link u-mb-sm">'
                '<span class="field-routename">line 1 (yonge-university)</span>'
                '<span class="sa-dash">&#8211;</span>'
                '<span class="field-satitle">St George to St Andrew stations – '
                "Full weekend closure on Saturday, July 26 to Sunday, July 27, 2025 </span></div>"
                '<div class="sa-effective-date c-news-results__date">'
                '<span class="ed-start-date field-starteffectivedate">July 26, 2025</span>'
                '<span class="effective-date-tolabel">to </span>'
                '<span class="field-endeffectivedate">July 27, 2025</span></div>'
            ),
        },
    ]
}

SAMPLE_BULLETIN = """On Sunday, July 27, subway service between St George and Broadview stations will start by 11 a.m., due to planned track work. Shuttle buses will operate.

On Saturday, July 26, there will be no subway service between Kipling and Keele stations, due to planned track work. Shuttle buses will operate.

This weekend, there will be no subway service between St George and St Andrew stations, starting at 11 p.m. July 25, due to planned track work. Shuttle buses will only operate on Friday.

Bessarion: Elevator out of service between concourse and Line 4 platform.

Kipling: Elevator out of service between Aukland Rd entrance and concourse.

Spadina: Escalator 2B2E out of service from Line 2 Kennedy platform to south concourse.

Dupont: Escalator 2S7E out of service from Dupont St north side entrance to concourse."""


def run_samples():
    """Parse the built-in API response and bulletin and print every view."""
    parser = TTCAlertParser()

    print(f"\n{'='*70}")
    print("API ALERTS")
    print(f"{'='*70}\n")
    api_alerts = parser.parse_api_alerts(SAMPLE_API_RESPONSE)
    print(format_as_json(api_alerts, "API Parsing Results"))
    parser.display_api_alerts_table(api_alerts)

    print(f"\n{'='*70}")
    print("TEXT BULLETIN")
    print(f"{'='*70}\n")
    records = parser.parse_text_alerts(SAMPLE_BULLETIN)
    print(format_as_json(records, "Text Parsing Results"))
    parser.display_text_alerts_table(records)

    print()
    print(format_summary([*api_alerts, *records]))


def parse_file(path: Path):
    """
    Parse a file and print its records.

    Args:
        path: A .json API response, or any other file as bulletin text.
    """
    parser = TTCAlertParser()
    content = path.read_text(encoding="utf-8")

    if path.suffix.lower() == ".json":
        try:
            alerts = parser.parse_api_alerts(content)
        except ParseError as e:
            print(f"Error: {e}")
            sys.exit(1)
        parser.display_api_alerts_table(alerts)
    else:
        parser.display_text_alerts_table(parser.parse_text_alerts(content))


if __name__ == "__main__":
    if len(sys.argv) > 1:
        parse_file(Path(sys.argv[1]))
    else:
        run_samples()
