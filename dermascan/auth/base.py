from abc import ABC, abstractmethod

from dermascan.scans.models import AuthUser


class BaseAuthProvider(ABC):
    """Contract for the signed-in identity source."""

    @abstractmethod
    def current_user(self) -> AuthUser | None:
        """Return the signed-in user, or None when nobody is signed in."""


class BaseProfileCompletionGuard(ABC):
    """Contract for the profile-completeness precondition."""

    @property
    @abstractmethod
    def is_profile_complete(self) -> bool: ...

    @abstractmethod
    def ensure_profile_complete(self, action_label: str) -> bool:
        """Return True when the action may proceed.

        When the profile is incomplete the guard surfaces its own prompt
        and returns False.
        """
