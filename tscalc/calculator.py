"""
Remaining time spend calculation.

For a single day and team the calculator checks the day type first; on a
non-working day it stops with NonWorkingDayError. Otherwise it fetches every
member's work logs for the day, sums them up and subtracts the sum from the
expected working time (8h, or 7h on a short day).
"""

import logging
from datetime import datetime, time, timedelta, timezone
from typing import Iterable, Tuple

from errors import NonWorkingDayError, UpstreamFetchError
from models import DAY_FORMAT, DayType, MemberRemainSpend, Team, TeamRemainSpends, WorkLog, as_date
from tscalc.sources import DayTypeFetcher, WorkLogFetcher

logger = logging.getLogger(__name__)

WORK_DAY_TIME = timedelta(hours=8)
SHORT_DAY_REDUCTION = timedelta(hours=1)
# the window ends one second before the next midnight, inclusive
DAY_WINDOW_LENGTH = timedelta(hours=23, minutes=59, seconds=59)


def day_window(day) -> Tuple[datetime, datetime]:
    """Return (start, end) of the day in UTC, end is 23:59:59 of the same day."""
    start = datetime.combine(as_date(day), time(0, 0), tzinfo=timezone.utc)
    return start, start + DAY_WINDOW_LENGTH


def aggregate_time_spent(work_logs: Iterable[WorkLog], user: str, day) -> timedelta:
    """Sum time spent by `user` on `day`.

    Records of other users or other days are ignored even if the source returned them.
    """
    target = as_date(day)
    total_seconds = 0
    for wl in work_logs:
        if wl.user != user:
            continue
        if wl.date() != target:
            continue
        total_seconds += wl.time_spent_seconds
    return timedelta(seconds=total_seconds)


def expected_work_time(day_type: DayType) -> timedelta:
    if day_type == DayType.SHORT_WORK_DAY:
        return WORK_DAY_TIME - SHORT_DAY_REDUCTION
    return WORK_DAY_TIME


def remain_time_spend(spent: timedelta, day_type: DayType) -> timedelta:
    """Return time still to be logged, never negative."""
    return max(timedelta(), expected_work_time(day_type) - spent)


class TimeSpendCalculator:
    """
    Calculates remaining time spends of team members for a day.
    """

    def __init__(self, day_type_fetcher: DayTypeFetcher, work_log_fetcher: WorkLogFetcher):
        self.day_type_fetcher = day_type_fetcher
        self.work_log_fetcher = work_log_fetcher

    def compute_team_remain_spends(self, day, team: Team) -> TeamRemainSpends:
        """Return remaining spends for each member of `team`, in team order.

        Raises NonWorkingDayError on holidays and weekends and UpstreamFetchError
        when the day type or any member's work logs could not be fetched.
        """
        ds = as_date(day).strftime(DAY_FORMAT)
        try:
            day_type = self.day_type_fetcher.fetch_day_type(day)
        except Exception as err:
            raise UpstreamFetchError(f"checking day '{ds}': {err}") from err

        if day_type == DayType.NON_WORK_DAY:
            raise NonWorkingDayError(as_date(day))
        logger.debug("day %s is '%s'", ds, day_type)

        day_start, day_end = day_window(day)
        spends = TeamRemainSpends()
        for member in team.members:
            user = member.jira_account_id
            try:
                issues = self.work_log_fetcher.user_worked_issues_by_date(user, day)
            except Exception as err:
                raise UpstreamFetchError(f"fetching user worked issues: {err}") from err

            try:
                work_logs = self.work_log_fetcher.work_logs_per_issues(user, day_start, day_end, issues)
            except Exception as err:
                raise UpstreamFetchError(f"fetching work logs: {err}") from err

            spent = aggregate_time_spent(work_logs, user, day)
            remain = remain_time_spend(spent, day_type)
            logger.debug("member %s spent %s, remains %s", member.name, spent, remain)
            spends.append(MemberRemainSpend(member=member, remain_spend=remain))

        return spends
