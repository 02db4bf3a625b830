from abc import ABC, abstractmethod


class BaseNotifier(ABC):
    """Contract for surfacing user-facing messages (alerts, toasts)."""

    @abstractmethod
    def notify(self, title: str, message: str) -> None:
        """Show a titled message to the user. Must not raise."""
