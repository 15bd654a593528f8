"""
Application: checks time spends of every configured team and notifies team channels.
"""

import logging
from datetime import timedelta

from config import Args, Params
from errors import NotifyError
from report.renderer import render_report
from tscalc.calculator import TimeSpendCalculator
from tscalc.sources import DayTypeFetcher, Notifier, WorkLogFetcher

logger = logging.getLogger(__name__)


class App:
    def __init__(self, args: Args, params: Params, day_type_fetcher: DayTypeFetcher, work_log_fetcher: WorkLogFetcher, notifier: Notifier):
        self.args = args
        self.params = params
        self.day_type_fetcher = day_type_fetcher
        self.work_log_fetcher = work_log_fetcher
        self.notifier = notifier

    def run(self) -> None:
        """Report remaining time spends of every team, in config order.

        The first failing team aborts the run; calculator errors are raised unchanged.
        """
        calc = TimeSpendCalculator(self.day_type_fetcher, self.work_log_fetcher)
        for team in self.params.teams:
            spends = calc.compute_team_remain_spends(self.args.day, team)
            if spends.remain_spend() == timedelta():
                logger.info("all members of team '%s' have written their timelogs", team.name)

            report = render_report(spends, self.args.day)
            try:
                self.notifier.notify(team.channel, report)
            except Exception as err:
                raise NotifyError(f"notify about remaining team '{team.name}' time spends: {err}") from err
            logger.info("notification for team '%s' sent", team.name)
