"""
CLI entry point for ts-notifier. Wires the pipeline: config -> day type & work logs -> report -> notify
"""

import argparse
import logging
import sys

import requests

from app import App
from config import DEFAULT_CONFIG_PATH, Args, Params, parse_day, read_config, today
from errors import BadDayFormatError, ConfigError, NonWorkingDayError, TimesheetError
from ingest.isdayoff import IsDayOffClient
from ingest.jira import JiraClient
from notify.mattermost import MattermostNotifier
from notify.stdout import StdoutNotifier

logger = logging.getLogger(__name__)

# process exit codes
EXIT_OK = 0
EXIT_PARSE_ARGS = 1
EXIT_READ_CONFIG = 2
EXIT_CHECK_TS = 3


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(description="Time spends notifier: reminds team members to log their working time in Jira")
    parser.add_argument("-c", "--config", type=str, default=DEFAULT_CONFIG_PATH, help="Path to configuration file")
    parser.add_argument("-d", "--date", type=str, default="", help="What day is to be reported, format: YYYY-MM-DD (default: today, UTC)")
    parser.add_argument("-v", "--verbose", action="store_true", help="Enable debug logging")
    return parser


def _build_notifier(session: requests.Session, params: Params):
    """Use Mattermost when its URL is configured, otherwise print reports to stdout."""
    if not params.mattermost.url:
        logger.info("mattermost url is not set, printing reports to stdout")
        return StdoutNotifier()
    return MattermostNotifier(session, params.mattermost.url, params.mattermost.auth_token)


def build_app(args: Args, params: Params, session: requests.Session) -> App:
    day_types = IsDayOffClient(session, params.isdayoff_url, timeout=params.timeout)
    jira = JiraClient(session, params.jira.url, params.jira.user_email, params.jira.auth_token, timeout=params.timeout)
    return App(args, params, day_types, jira, _build_notifier(session, params))


def main(argv=None) -> int:
    parser = build_parser()
    ns = parser.parse_args(argv)
    logging.basicConfig(
        level=logging.DEBUG if ns.verbose else logging.INFO,
        format='%(asctime)s - %(levelname)s - %(name)s - %(message)s',
    )

    try:
        day = parse_day(ns.date) if ns.date else today()
    except BadDayFormatError as ex:
        print(f"parsing args: {ex}, try 'YYYY-MM-DD'")
        return EXIT_PARSE_ARGS
    args = Args(config_path=ns.config, day=day)

    try:
        params = read_config(args.config_path)
    except ConfigError as ex:
        print(f"reading config file: {ex}")
        return EXIT_READ_CONFIG

    with requests.Session() as session:
        try:
            build_app(args, params, session).run()
        except NonWorkingDayError as ex:
            logger.info("nothing to report: %s", ex)
            return EXIT_OK
        except TimesheetError as ex:
            print(f"check remaining time spends & notify: {ex}")
            return EXIT_CHECK_TS
    return EXIT_OK


if __name__ == "__main__":
    sys.exit(main())
