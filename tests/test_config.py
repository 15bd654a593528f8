import textwrap
from datetime import date

import pytest

from config import JIRA_TOKEN_ENV, MATTERMOST_TOKEN_ENV, parse_config, parse_day, read_config
from errors import BadDayFormatError, ConfigError
from models import Member

CONFIG = textwrap.dedent(
    """
    jira:
      url: https://jira.example.com
      user_email: bot@example.com
      auth_token: jira-token
    notifier:
      mattermost:
        url: https://mm.example.com
        auth_token: mm-token
    teams:
      - name: team1
        channel: chan1
        members:
          - name: Ivan Ivanov
            jira_account_id: 18gdasid123123jas
            mattermost_username: ivanov.i
            email: ivanov.i@my.org
          - name: Petr Petrov
            jira_account_id: 77hjk1aa
            mattermost_username: petrov.p
      - name: team2
        channel: chan2
    """
)


def test_read_config(tmp_path):
    path = tmp_path / "config.yml"
    path.write_text(CONFIG, encoding="utf-8")

    params = read_config(str(path), env={})

    assert params.jira.url == "https://jira.example.com"
    assert params.jira.user_email == "bot@example.com"
    assert params.jira.auth_token == "jira-token"
    assert params.mattermost.url == "https://mm.example.com"
    assert params.mattermost.auth_token == "mm-token"
    assert params.isdayoff_url is None
    assert params.timeout == 10.0
    assert [t.name for t in params.teams] == ["team1", "team2"]
    assert params.teams[0].members == [
        Member("Ivan Ivanov", "18gdasid123123jas", "ivanov.i", "ivanov.i@my.org"),
        Member("Petr Petrov", "77hjk1aa", "petrov.p", None),
    ]
    assert params.teams[1].members == []


def test_env_tokens_override_file(tmp_path):
    path = tmp_path / "config.yml"
    path.write_text(CONFIG, encoding="utf-8")

    params = read_config(str(path), env={JIRA_TOKEN_ENV: "env-jira", MATTERMOST_TOKEN_ENV: "env-mm"})

    assert params.jira.auth_token == "env-jira"
    assert params.mattermost.auth_token == "env-mm"


def test_optional_sections():
    params = parse_config({"isdayoff": {"url": "http://localhost"}, "http": {"timeout": 2}}, env={})
    assert params.isdayoff_url == "http://localhost"
    assert params.timeout == 2.0
    assert params.mattermost.url == ""
    assert params.teams == []


def test_missing_file(tmp_path):
    with pytest.raises(ConfigError, match="reading config file"):
        read_config(str(tmp_path / "nope.yml"), env={})


def test_invalid_yaml(tmp_path):
    path = tmp_path / "config.yml"
    path.write_text("teams: [unclosed", encoding="utf-8")
    with pytest.raises(ConfigError, match="unmarshal config file data"):
        read_config(str(path), env={})


@pytest.mark.parametrize(
    "doc",
    [
        ["not", "a", "mapping"],
        {"teams": {"name": "x"}},
        {"teams": [{"name": "team1"}]},
        {"teams": [{"name": "team1", "channel": "c", "members": [{"name": "no ids"}]}]},
        {"http": {"timeout": "soon"}},
    ],
)
def test_invalid_config(doc):
    with pytest.raises(ConfigError):
        parse_config(doc, env={})


def test_parse_day():
    assert parse_day("2023-09-01") == date(2023, 9, 1)
    with pytest.raises(BadDayFormatError):
        parse_day("01.09.2023")
