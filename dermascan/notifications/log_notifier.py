from dermascan.logging.logger import Log
from dermascan.notifications.base import BaseNotifier


class LogNotifier(BaseNotifier):
    """Writes user-facing messages to the application log.

    Keeps every message in order so headless callers can inspect them.
    """

    def __init__(self) -> None:
        self.messages: list[tuple[str, str]] = []

    def notify(self, title: str, message: str) -> None:
        self.messages.append((title, message))
        Log.info(f"[{title}] {message}")
