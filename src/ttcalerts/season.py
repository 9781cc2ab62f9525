"""Reference window used to date text bulletins."""

from dataclasses import dataclass
from datetime import date, timedelta

FRIDAY = 4  # date.weekday()


@dataclass(frozen=True)
class ServiceSeason:
    """
    Calendar context for bulletins that only name a weekday and day number.

    Bulletins say "On Sunday, July 27" or "This weekend" without a year, so the
    month, year and weekend anchor have to come from the publication window.

    Attributes:
        weekend_start: Friday that "This weekend" refers to. Its month and year
            are used for every weekday-dated notice.
    """
    weekend_start: date

    @classmethod
    def for_week_of(cls, day: date) -> "ServiceSeason":
        """Build a season anchored on the Friday of the week containing day."""
        return cls(day + timedelta(days=FRIDAY - day.weekday()))

    @property
    def month_name(self) -> str:
        return self.weekend_start.strftime("%B")

    @property
    def year(self) -> int:
        return self.weekend_start.year

    def format_day(self, day: int) -> str:
        """Format a bare day number as "Month D, YYYY" within the season."""
        return f"{self.month_name} {day}, {self.year}"

    def weekend_start_date(self) -> str:
        return self.format_day(self.weekend_start.day)


DEFAULT_SEASON = ServiceSeason(date(2025, 7, 25))
