from typing import Optional


class SlackConfig:
    def __init__(self, webhook_url: Optional[str] = None, channel: Optional[str] = None):
        """
        Configuration for Slack notifications.

        Parameters:
        ----------
        webhook_url : Optional[str]
            Incoming webhook URL. Notifications are disabled when not set.

        channel : Optional[str]
            Channel the messages are posted to.
        """
        self.webhook_url = webhook_url
        self.channel = channel

    @property
    def enabled(self) -> bool:
        return bool(self.webhook_url)

    @classmethod
    def from_parser(cls, parser) -> "SlackConfig":
        return cls(
            webhook_url=parser.get("slack_webhook_url"),
            channel=parser.get("slack_channel"),
        )
