import sys
import os
from datetime import date, datetime, timezone

import pytest

# Add project root to sys.path so tests can import top-level modules like 'tscalc', 'ingest', 'report', etc.
ROOT = os.path.abspath(os.path.join(os.path.dirname(__file__), '..'))
if ROOT not in sys.path:
    sys.path.insert(0, ROOT)

from models import DayType, Issue, Member, Team, WorkLog  # noqa: E402

DAY = date(2023, 9, 1)


class FakeDayTypeFetcher:
    def __init__(self, day_type=DayType.WORK_DAY, error=None):
        self.day_type = day_type
        self.error = error
        self.calls = []

    def fetch_day_type(self, day):
        self.calls.append(day)
        if self.error:
            raise self.error
        return self.day_type


class FakeWorkLogFetcher:
    """Returns canned issues and work logs per user and records every call."""

    def __init__(self, logs=None, issues_error=None, logs_error=None):
        self.logs = logs or {}
        self.issues_error = issues_error
        self.logs_error = logs_error
        self.issue_calls = []
        self.log_calls = []

    def user_worked_issues_by_date(self, user, day):
        self.issue_calls.append((user, day))
        if self.issues_error:
            raise self.issues_error
        return [Issue(id=f"id-{user}", key="PRJ-1")]

    def work_logs_per_issues(self, user, started_after, started_before, issues):
        self.log_calls.append((user, started_after, started_before, list(issues)))
        if self.logs_error:
            raise self.logs_error
        return list(self.logs.get(user, []))


class FakeNotifier:
    def __init__(self, error=None):
        self.error = error
        self.sent = []

    def notify(self, channel, message):
        if self.error:
            raise self.error
        self.sent.append((channel, message))


def make_log(user, seconds, started=None, key="PRJ-1"):
    started = started or datetime(DAY.year, DAY.month, DAY.day, 10, 0, tzinfo=timezone.utc)
    return WorkLog(key=key, user=user, time_spent_seconds=seconds, started=started, comment="some work")


@pytest.fixture
def ivan():
    return Member(name="Ivan Ivanov", jira_account_id="18gdasid123123jas", mattermost_username="ivanov.i", email="ivanov.i@my.org")


@pytest.fixture
def petr():
    return Member(name="Petr Petrov", jira_account_id="77hjk1aa", mattermost_username="petrov.p")


@pytest.fixture
def team(ivan):
    return Team(name="team1", channel="channel-team1", members=[ivan])
