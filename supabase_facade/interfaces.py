"""
Narrow interfaces of the sub-clients consumed by the facade.
"""

from abc import ABC, abstractmethod
from typing import Any, Callable, Dict, Optional

# (event, session) -> None
AuthStateListener = Callable[[Any, Optional[Any]], None]

# (url, headers, auto_refresh_token) -> AuthOperations
AuthFactory = Callable[[str, Dict[str, str], bool], "AuthOperations"]

# (url, headers, schema) -> data client
DatabaseFactory = Callable[[str, Dict[str, str], str], Any]

# (url, headers) -> storage client
StorageFactory = Callable[[str, Dict[str, str]], Any]

# (endpoint, params) -> realtime client
RealtimeFactory = Callable[[str, Dict[str, str]], Any]


class AuthOperations(ABC):
    """Abstract interface for the auth sub-client held by the facade.

    The auth sub-client owns the session. The facade only reads ``session``
    and fills or clears the single ``on_auth_state_change`` slot; the sign-in
    and session operations are what callers reach through ``client.auth``.
    """

    @property
    @abstractmethod
    def session(self) -> Optional[Any]:
        """Current session, or None when nobody is signed in."""
        pass

    @property
    @abstractmethod
    def on_auth_state_change(self) -> Optional[AuthStateListener]:
        """Listener invoked on every session lifecycle event."""
        pass

    @on_auth_state_change.setter
    @abstractmethod
    def on_auth_state_change(self, listener: Optional[AuthStateListener]) -> None:
        pass

    @abstractmethod
    def sign_up(self, credentials: Dict[str, Any]) -> Any:
        """Create a new user account."""
        pass

    @abstractmethod
    def sign_in_with_password(self, credentials: Dict[str, Any]) -> Any:
        """Sign in with email or phone and password."""
        pass

    @abstractmethod
    def sign_in_with_otp(self, credentials: Dict[str, Any]) -> Any:
        """Send a one-time password or magic link."""
        pass

    @abstractmethod
    def set_session(self, access_token: str, refresh_token: str) -> Any:
        """Install an existing session."""
        pass

    @abstractmethod
    def refresh_session(self, refresh_token: Optional[str] = None) -> Any:
        """Exchange the refresh token for a new session."""
        pass

    @abstractmethod
    def get_user(self, jwt: Optional[str] = None) -> Any:
        """Get the user for ``jwt`` or for the current session."""
        pass

    @abstractmethod
    def sign_out(self, **options: Any) -> None:
        """Sign out and clear the current session."""
        pass
