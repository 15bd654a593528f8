"""
Data models for teams, Jira work logs and calculated time spends.
"""

from datetime import date, datetime, timedelta
from enum import IntEnum
from typing import List, NamedTuple, Optional

# format used for isdayoff.ru requests and error messages
DAY_FORMAT = '%Y%m%d'


class DayType(IntEnum):
    """Type of a calendar day, values match isdayoff.ru response codes."""

    ERROR = -1
    # regular working day, 8 hours
    WORK_DAY = 0
    # holiday or weekend
    NON_WORK_DAY = 1
    # day before holidays, one hour shorter than a regular one
    SHORT_WORK_DAY = 2

    def __str__(self):
        return _DAY_TYPE_NAMES.get(self, 'Day error')


_DAY_TYPE_NAMES = {
    DayType.WORK_DAY: 'Working day',
    DayType.NON_WORK_DAY: 'Non-working day',
    DayType.SHORT_WORK_DAY: 'Short working day',
}


def as_date(day) -> date:
    """Return the calendar date of a date or datetime value."""
    if isinstance(day, datetime):
        return day.date()
    return day


class Member(NamedTuple):
    """Team member as described in the config file."""

    name: str
    # Jira account id, used for fetching work logs
    jira_account_id: str
    # used for tagging the member in the report
    mattermost_username: str
    email: Optional[str] = None


class Team:
    """
    A team with a chat channel and an ordered list of members.
    """

    def __init__(self, name: str, channel: str, members: Optional[List[Member]] = None):
        self.name = name
        self.channel = channel
        self.members = list(members or [])

    def __eq__(self, other):
        if not isinstance(other, Team):
            return NotImplemented
        return (self.name, self.channel, self.members) == (other.name, other.channel, other.members)

    def __repr__(self):
        return f"Team(name={self.name!r}, channel={self.channel!r}, members={len(self.members)})"


class Issue(NamedTuple):
    """Jira issue identifiers: internal id and user-friendly key (PRJ-1)."""

    id: str
    key: str


class WorkLog:
    """
    A single Jira work log record.
    """

    def __init__(self, key: str, user: str, time_spent_seconds: int, started: datetime, comment: str = ''):
        self.key = key
        self.user = user
        self.time_spent_seconds = time_spent_seconds
        self.started = started
        self.comment = comment

    def date(self) -> date:
        """Return the calendar day the record was started on, in its own offset."""
        return self.started.date()

    def __eq__(self, other):
        if not isinstance(other, WorkLog):
            return NotImplemented
        return (self.key, self.user, self.time_spent_seconds, self.started, self.comment) == (
            other.key,
            other.user,
            other.time_spent_seconds,
            other.started,
            other.comment,
        )

    def __repr__(self):
        return f"WorkLog(key={self.key!r}, user={self.user!r}, time_spent_seconds={self.time_spent_seconds}, started={self.started.isoformat()})"


class MemberRemainSpend(NamedTuple):
    member: Member
    remain_spend: timedelta


class TeamRemainSpends(list):
    """Remaining spends of a team, in the order members are configured."""

    def remain_spend(self) -> timedelta:
        """Return the total remaining time of the team."""
        return sum((s.remain_spend for s in self), timedelta())
