"""
Exceptions raised while checking and reporting time spends.
"""

from datetime import date

from models import DAY_FORMAT


class TimesheetError(Exception):
    """Base class for all ts-notifier errors."""


class UpstreamFetchError(TimesheetError):
    """Day type or work log data could not be fetched."""


class NonWorkingDayError(TimesheetError):
    """The requested day is a holiday or weekend; nothing has to be reported."""

    def __init__(self, day: date):
        self.day = day
        super().__init__(f"non working day; day: {day.strftime(DAY_FORMAT)}")


class NotifyError(TimesheetError):
    """The rendered report could not be delivered."""


class ConfigError(TimesheetError):
    """Config file is missing or malformed."""


class BadDayFormatError(TimesheetError):
    def __init__(self, value: str):
        self.value = value
        super().__init__(f"bad day format: {value!r}")
