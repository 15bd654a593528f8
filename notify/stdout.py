"""
Notifier printing reports to standard output, used when Mattermost is not configured.
"""


class StdoutNotifier:
    def notify(self, channel: str, message: str) -> None:
        print(message)
