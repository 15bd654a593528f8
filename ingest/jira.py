"""
Jira work log client used by the time spend calculator.
Fetches issues a user logged time on and the work log records of those issues.
"""

import logging
from datetime import date, datetime
from typing import Any, Dict, List, Optional

import requests

from errors import UpstreamFetchError
from models import Issue, WorkLog, as_date

logger = logging.getLogger(__name__)

# format of the 'started' field, e.g. 2023-09-01T10:00:00.000+0300
STARTED_FORMAT = '%Y-%m-%dT%H:%M:%S.%f%z'


class JiraError(UpstreamFetchError):
    """Jira request failed or returned unexpected data."""


def _to_millis(dt: datetime) -> int:
    return int(dt.timestamp() * 1000)


class JiraClient:
    """Minimal Jira REST API v2 client for work logs.

    Authentication is basic auth with the user email and an API token.
    """

    def __init__(self, session: requests.Session, base_url: str, user_email: str, auth_token: str, timeout: float = 10.0, page_size: int = 50):
        self.session = session
        self.base_url = base_url.rstrip('/')
        self.auth = (user_email, auth_token)
        self.headers = {"Accept": "application/json"}
        self.timeout = timeout
        self.page_size = page_size

    def _get_json(self, url: str, params: Dict[str, Any], what: str) -> Dict[str, Any]:
        logger.debug("GET %s %s", url, params)
        try:
            resp = self.session.get(url, headers=self.headers, params=params, auth=self.auth, timeout=self.timeout)
        except requests.RequestException as ex:
            raise JiraError(f"sending '{what}' request: {ex}") from ex
        if resp.status_code != 200:
            raise JiraError(f"jira return {resp.status_code} rsp code on '{what}' request")
        try:
            return resp.json()
        except ValueError as ex:
            raise JiraError(f"decoding jira '{what}' response: {ex}") from ex

    def _get_paged(self, url: str, params: Dict[str, Any], items_key: str, what: str) -> List[Dict[str, Any]]:
        items: List[Dict[str, Any]] = []
        start_at = 0
        while True:
            page_params = dict(params, startAt=start_at, maxResults=self.page_size)
            data = self._get_json(url, page_params, what)
            page = data.get(items_key) or []
            items.extend(page)
            start_at += len(page)
            if not page or start_at >= int(data.get('total', 0) or 0):
                break
        return items

    def user_worked_issues_by_date(self, user: str, day: date) -> List[Issue]:
        """Return issues `user` logged time on during `day`."""
        jql = f"worklogDate={as_date(day).strftime('%Y-%m-%d')} AND worklogAuthor={user}"
        url = f"{self.base_url}/rest/api/2/search"
        raw = self._get_paged(url, {"jql": jql, "fields": "summary"}, 'issues', 'search issues')
        return [Issue(id=str(i.get('id', '')), key=i.get('key', '')) for i in raw]

    def work_logs_per_issues(self, user: str, started_after: datetime, started_before: datetime, issues: List[Issue]) -> List[WorkLog]:
        """Return work logs of `user` on `issues` started within the given window.

        Records of other authors and records with an unparsable start time are skipped.
        """
        params = {
            "startedAfter": _to_millis(started_after),
            "startedBefore": _to_millis(started_before),
        }
        work_logs: List[WorkLog] = []
        for issue in issues:
            url = f"{self.base_url}/rest/api/2/issue/{issue.key}/worklog"
            for raw in self._get_paged(url, params, 'worklogs', 'get worklogs'):
                wl = _parse_work_log(raw, issue, user)
                if wl is not None:
                    work_logs.append(wl)
        return work_logs


def _parse_work_log(raw: Dict[str, Any], issue: Issue, user: str) -> Optional[WorkLog]:
    author = raw.get('author') or {}
    if author.get('accountId') != user:
        return None
    try:
        started = datetime.strptime(raw.get('started') or '', STARTED_FORMAT)
    except ValueError:
        logger.debug("skipping work log %s of %s: bad started value %r", raw.get('id'), issue.key, raw.get('started'))
        return None
    comment = raw.get('comment')
    if not isinstance(comment, str):
        # v3-style rich text comments are not supported
        comment = ''
    return WorkLog(
        key=issue.key,
        user=user,
        time_spent_seconds=int(raw.get('timeSpentSeconds', 0) or 0),
        started=started,
        comment=comment,
    )
