"""
Supabase authentication client implementation.
"""

import logging
from typing import Any, Dict, Optional

from supabase_auth import SyncGoTrueClient

from .interfaces import AuthOperations, AuthStateListener

logger = logging.getLogger(__name__)


class SupabaseAuthClient(AuthOperations):
    """GoTrue-backed auth sub-client with a single auth state listener slot.

    GoTrue supports any number of subscribers; the facade needs exactly one
    slot where the last assignment wins. The adapter subscribes to GoTrue the
    first time the slot is filled and drops that subscription when the slot is
    cleared. Everything else is delegated to GoTrue, and GoTrue errors reach
    the caller unchanged.
    """

    def __init__(
        self,
        url: str,
        headers: Dict[str, str],
        auto_refresh_token: bool = True,
        gotrue_client: Optional[SyncGoTrueClient] = None,
    ):
        self.url = url
        self.client_name = "SupabaseAuthClient"
        self.logger = logging.getLogger(f"{__name__}.{self.client_name}")
        self._gotrue = gotrue_client or SyncGoTrueClient(
            url=url,
            headers=dict(headers),
            auto_refresh_token=auto_refresh_token,
        )
        self._listener: Optional[AuthStateListener] = None
        self._subscription: Optional[Any] = None

    @property
    def gotrue(self) -> SyncGoTrueClient:
        """Get the underlying GoTrue client."""
        return self._gotrue

    @property
    def session(self) -> Optional[Any]:
        return self._gotrue.get_session()

    @property
    def on_auth_state_change(self) -> Optional[AuthStateListener]:
        return self._listener

    @on_auth_state_change.setter
    def on_auth_state_change(self, listener: Optional[AuthStateListener]) -> None:
        self._listener = listener
        if listener is None:
            self._unsubscribe()
        elif self._subscription is None:
            self._subscription = self._gotrue.on_auth_state_change(self._dispatch)
            self.logger.debug("Subscribed to GoTrue auth state changes")

    def _dispatch(self, event: Any, session: Optional[Any]) -> None:
        listener = self._listener
        if listener is None:
            return
        listener(event, session)

    def _unsubscribe(self) -> None:
        if self._subscription is None:
            return
        self._subscription.unsubscribe()
        self._subscription = None
        self.logger.debug("Unsubscribed from GoTrue auth state changes")

    # Delegated auth operations

    def sign_up(self, credentials: Dict[str, Any]) -> Any:
        """Create a new user account."""
        return self._gotrue.sign_up(credentials)

    def sign_in_with_password(self, credentials: Dict[str, Any]) -> Any:
        """Sign in with email or phone and password."""
        return self._gotrue.sign_in_with_password(credentials)

    def sign_in_with_otp(self, credentials: Dict[str, Any]) -> Any:
        """Send a one-time password or magic link."""
        return self._gotrue.sign_in_with_otp(credentials)

    def set_session(self, access_token: str, refresh_token: str) -> Any:
        """Install an existing session, e.g. one received from a browser."""
        return self._gotrue.set_session(access_token, refresh_token)

    def refresh_session(self, refresh_token: Optional[str] = None) -> Any:
        """Exchange the refresh token for a new session."""
        return self._gotrue.refresh_session(refresh_token)

    def get_user(self, jwt: Optional[str] = None) -> Any:
        """Get the user for ``jwt`` or for the current session."""
        return self._gotrue.get_user(jwt)

    def sign_out(self, **options: Any) -> None:
        """Sign out and clear the current session."""
        if options:
            self._gotrue.sign_out(options)
        else:
            self._gotrue.sign_out()
