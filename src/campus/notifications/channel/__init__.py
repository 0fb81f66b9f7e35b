"""Email channel registry.

Defaults to the in-memory fake; a real gateway adapter is installed with
``set_email_channel`` at startup.
"""

from campus.notifications.channel.email_port import EmailPort
from campus.notifications.channel.fake_email import FakeEmailChannel

_current_channel: EmailPort | None = None


def get_email_channel() -> EmailPort:
    global _current_channel
    if _current_channel is None:
        _current_channel = FakeEmailChannel()
    return _current_channel


def set_email_channel(channel: EmailPort) -> None:
    global _current_channel
    _current_channel = channel


def reset_email_channel() -> None:
    global _current_channel
    _current_channel = None
