"""
Mattermost notifier: posts the team report to the team channel.
API: https://api.mattermost.com/#tag/posts/operation/CreatePost
"""

import logging

import requests

from errors import NotifyError

logger = logging.getLogger(__name__)

DEFAULT_TIMEOUT = 3.0


class MattermostNotifier:
    """Posts messages to Mattermost channels with a personal access token."""

    def __init__(self, session: requests.Session, base_url: str, auth_token: str, timeout: float = DEFAULT_TIMEOUT):
        self.session = session
        self.base_url = base_url.rstrip('/')
        self.headers = {
            "Accept": "application/json",
            "Authorization": f"Bearer {auth_token}",
        }
        self.timeout = timeout

    def notify(self, channel: str, message: str) -> None:
        url = f"{self.base_url}/api/v4/posts"
        payload = {"channel_id": channel, "message": message}
        logger.debug("POST %s channel=%s", url, channel)
        try:
            resp = self.session.post(url, json=payload, headers=self.headers, timeout=self.timeout)
        except requests.RequestException as ex:
            raise NotifyError(f"sending 'post message to channel' request: {ex}") from ex

        if resp.status_code != 201:
            raise NotifyError(f"mattermost return {resp.status_code} rsp code, expected 201 response")

        try:
            post = resp.json()
        except ValueError as ex:
            raise NotifyError(f"parsing 'post message to channel' response: {ex}") from ex
        logger.debug("created post %s", post.get('id') if isinstance(post, dict) else None)
