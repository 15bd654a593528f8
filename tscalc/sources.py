"""
Collaborator interfaces used by the calculator and the app.
Production clients in ingest/ and notify/ and the test doubles both satisfy them.
"""

from datetime import date, datetime
from typing import List, Protocol

from models import DayType, Issue, WorkLog


class DayTypeFetcher(Protocol):
    def fetch_day_type(self, day: date) -> DayType:
        ...


class WorkLogFetcher(Protocol):
    def user_worked_issues_by_date(self, user: str, day: date) -> List[Issue]:
        ...

    def work_logs_per_issues(self, user: str, started_after: datetime, started_before: datetime, issues: List[Issue]) -> List[WorkLog]:
        ...


class Notifier(Protocol):
    def notify(self, channel: str, message: str) -> None:
        ...
