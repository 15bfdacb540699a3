"""Base identity provider interface for tradejournal."""

from abc import ABC, abstractmethod
from typing import Callable, Optional

from tradejournal.models import User

SIGNED_IN = "SIGNED_IN"
SIGNED_OUT = "SIGNED_OUT"

AuthCallback = Callable[[str, Optional[User]], None]


class Subscription:
    """Handle returned by ``on_auth_state_change``."""

    def __init__(self, listeners: list[AuthCallback], callback: AuthCallback):
        self._listeners = listeners
        self._callback = callback

    @property
    def active(self) -> bool:
        return self._callback in self._listeners

    def unsubscribe(self) -> None:
        """Stop delivering events to the callback."""
        if self._callback in self._listeners:
            self._listeners.remove(self._callback)


class BaseIdentityProvider(ABC):
    """Abstract base class for identity providers.

    Providers authenticate users and broadcast ``SIGNED_IN`` and
    ``SIGNED_OUT`` events to subscribers. Failures raise ``AuthFailure``.
    """

    def __init__(self):
        self._listeners: list[AuthCallback] = []

    def on_auth_state_change(self, callback: AuthCallback) -> Subscription:
        """Subscribe to identity change events.

        Args:
            callback: Called with the event name and the user (None on
                sign out).

        Returns:
            Subscription that can be cancelled with ``unsubscribe()``.
        """
        self._listeners.append(callback)
        return Subscription(self._listeners, callback)

    def _emit(self, event: str, user: Optional[User]) -> None:
        for listener in list(self._listeners):
            listener(event, user)

    @abstractmethod
    def sign_up(self, email: str, password: str, full_name: Optional[str] = None) -> User:
        """Register a new user and sign them in.

        Args:
            email: User email.
            password: Plain text password.
            full_name: Optional display name.

        Returns:
            The new user.

        Raises:
            AuthFailure: If the email is taken or the credentials are invalid.
        """
        pass

    @abstractmethod
    def sign_in(self, email: str, password: str) -> User:
        """Authenticate an existing user.

        Returns:
            The signed in user.

        Raises:
            AuthFailure: If the credentials are wrong.
        """
        pass

    @abstractmethod
    def sign_out(self) -> None:
        """Invalidate the current session."""
        pass

    @abstractmethod
    def get_current_user(self) -> Optional[User]:
        """Get the signed in user.

        Returns:
            User if a session is active, None otherwise.
        """
        pass
