from dermascan.auth.base import BaseAuthProvider, BaseProfileCompletionGuard
from dermascan.notifications.base import BaseNotifier
from dermascan.scans.models import AuthUser


class StaticAuthProvider(BaseAuthProvider):
    """Auth provider with a fixed identity, switchable via sign_in/sign_out."""

    def __init__(self, user: AuthUser | None = None) -> None:
        self._user = user

    def current_user(self) -> AuthUser | None:
        return self._user

    def sign_in(self, user: AuthUser) -> None:
        self._user = user

    def sign_out(self) -> None:
        self._user = None


class StaticProfileGuard(BaseProfileCompletionGuard):
    """Profile guard backed by a flag; prompts through the notifier."""

    def __init__(self, notifier: BaseNotifier, complete: bool = False) -> None:
        self._notifier = notifier
        self._complete = complete

    @property
    def is_profile_complete(self) -> bool:
        return self._complete

    def mark_complete(self, complete: bool = True) -> None:
        self._complete = complete

    def ensure_profile_complete(self, action_label: str) -> bool:
        if self._complete:
            return True
        self._notifier.notify(
            "Complete Your Profile",
            f"Please complete your demographic profile to {action_label}.",
        )
        return False
