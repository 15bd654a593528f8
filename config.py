"""
Configuration loading: YAML config file with Jira, Mattermost and team settings,
plus command line date parsing.
"""

import os
from datetime import date, datetime, timezone
from typing import Any, Dict, List, Optional

import yaml

from errors import BadDayFormatError, ConfigError
from models import Member, Team

DEFAULT_CONFIG_PATH = './config.yml'
ARG_DAY_FORMAT = '%Y-%m-%d'
DEFAULT_TIMEOUT = 10.0

# environment variables taking precedence over tokens in the config file
JIRA_TOKEN_ENV = 'JIRA_AUTH_TOKEN'
MATTERMOST_TOKEN_ENV = 'MATTERMOST_AUTH_TOKEN'


class JiraParams:
    def __init__(self, url: str = '', user_email: str = '', auth_token: str = ''):
        self.url = url
        self.user_email = user_email
        self.auth_token = auth_token


class MattermostParams:
    def __init__(self, url: str = '', auth_token: str = ''):
        self.url = url
        self.auth_token = auth_token


class Params:
    """
    Parsed config file.
    """

    def __init__(
        self,
        jira: Optional[JiraParams] = None,
        mattermost: Optional[MattermostParams] = None,
        teams: Optional[List[Team]] = None,
        isdayoff_url: Optional[str] = None,
        timeout: float = DEFAULT_TIMEOUT,
    ):
        self.jira = jira or JiraParams()
        self.mattermost = mattermost or MattermostParams()
        self.teams = list(teams or [])
        self.isdayoff_url = isdayoff_url
        self.timeout = timeout


class Args:
    """Command line parameters."""

    def __init__(self, config_path: str, day: date):
        self.config_path = config_path
        self.day = day


def today() -> date:
    return datetime.now(timezone.utc).date()


def parse_day(value: str) -> date:
    """Parse a YYYY-MM-DD command line date."""
    try:
        return datetime.strptime(value, ARG_DAY_FORMAT).date()
    except (TypeError, ValueError):
        raise BadDayFormatError(value)


def _section(doc: Dict[str, Any], key: str) -> Dict[str, Any]:
    value = doc.get(key) or {}
    if not isinstance(value, dict):
        raise ConfigError(f"'{key}' section must be a mapping")
    return value


def _parse_member(raw: Any, team_name: str) -> Member:
    if not isinstance(raw, dict):
        raise ConfigError(f"team '{team_name}': member must be a mapping")
    jira_id = raw.get('jira_account_id')
    mm_username = raw.get('mattermost_username')
    if not jira_id or not mm_username:
        raise ConfigError(f"team '{team_name}': member {raw.get('name')!r} needs jira_account_id and mattermost_username")
    return Member(
        name=str(raw.get('name') or ''),
        jira_account_id=str(jira_id),
        mattermost_username=str(mm_username),
        email=raw.get('email') or None,
    )


def _parse_team(raw: Any) -> Team:
    if not isinstance(raw, dict):
        raise ConfigError("team must be a mapping")
    name = raw.get('name')
    channel = raw.get('channel')
    if not name or not channel:
        raise ConfigError(f"team {name!r} needs name and channel")
    members = [_parse_member(m, name) for m in (raw.get('members') or [])]
    return Team(name=str(name), channel=str(channel), members=members)


def parse_config(doc: Any, env: Optional[Dict[str, str]] = None) -> Params:
    """Build Params from a parsed YAML document.

    Tokens from `env` (os.environ by default) override the ones in the document.
    """
    if env is None:
        env = os.environ
    if doc is None:
        doc = {}
    if not isinstance(doc, dict):
        raise ConfigError("config root must be a mapping")

    jira_raw = _section(doc, 'jira')
    mm_raw = _section(_section(doc, 'notifier'), 'mattermost')
    jira = JiraParams(
        url=jira_raw.get('url') or '',
        user_email=jira_raw.get('user_email') or '',
        auth_token=env.get(JIRA_TOKEN_ENV) or jira_raw.get('auth_token') or '',
    )
    mattermost = MattermostParams(
        url=mm_raw.get('url') or '',
        auth_token=env.get(MATTERMOST_TOKEN_ENV) or mm_raw.get('auth_token') or '',
    )

    teams_raw = doc.get('teams') or []
    if not isinstance(teams_raw, list):
        raise ConfigError("'teams' must be a list")

    try:
        timeout = float(_section(doc, 'http').get('timeout', DEFAULT_TIMEOUT))
    except (TypeError, ValueError):
        raise ConfigError("http.timeout must be a number")

    return Params(
        jira=jira,
        mattermost=mattermost,
        teams=[_parse_team(t) for t in teams_raw],
        isdayoff_url=_section(doc, 'isdayoff').get('url') or None,
        timeout=timeout,
    )


def read_config(path: str, env: Optional[Dict[str, str]] = None) -> Params:
    """Read and parse the YAML config file at `path`."""
    try:
        with open(path, 'r', encoding='utf-8') as f:
            doc = yaml.safe_load(f)
    except OSError as ex:
        raise ConfigError(f"reading config file '{path}': {ex}") from ex
    except yaml.YAMLError as ex:
        raise ConfigError(f"unmarshal config file data: {ex}") from ex
    return parse_config(doc, env)
