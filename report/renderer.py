"""
Report renderer: builds the team time spend report posted to the team channel.
The text comes from the Jinja2 template report/templates/team_report.txt.j2.
"""

import os
from datetime import timedelta
from typing import Iterable

from jinja2 import Environment, FileSystemLoader, StrictUndefined, select_autoescape

from models import MemberRemainSpend, as_date

TEMPLATE_NAME = 'team_report.txt.j2'
# date format of the report header
REPORT_DAY_FORMAT = '%Y.%m.%d'


def format_duration(value: timedelta) -> str:
    """Render a duration as 2h0m0s, 30m0s or 45s.

    Leading zero units are omitted, seconds are always shown.
    """
    total = int(value.total_seconds())
    if total == 0:
        return '0s'
    sign = '-' if total < 0 else ''
    hours, rest = divmod(abs(total), 3600)
    minutes, seconds = divmod(rest, 60)
    if hours:
        return f"{sign}{hours}h{minutes}m{seconds}s"
    if minutes:
        return f"{sign}{minutes}m{seconds}s"
    return f"{sign}{seconds}s"


def _environment() -> Environment:
    tmpl_dir = os.path.join(os.path.dirname(__file__), 'templates')
    env = Environment(
        loader=FileSystemLoader(tmpl_dir),
        autoescape=select_autoescape(['html', 'xml']),
        undefined=StrictUndefined,
    )
    env.filters['duration'] = format_duration
    return env


def render_report(spends: Iterable[MemberRemainSpend], day) -> str:
    """Render the team report for `day`.

    Members who logged everything are left out; if nobody owes time the body is a single success line.
    """
    debtors = [s for s in spends if s.remain_spend > timedelta()]
    tmpl = _environment().get_template(TEMPLATE_NAME)
    return tmpl.render(day_label=as_date(day).strftime(REPORT_DAY_FORMAT), debtors=debtors)
