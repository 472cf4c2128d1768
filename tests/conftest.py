"""
Test configuration and fixtures for the Supabase client facade.
Provides in-memory stand-ins for the auth, database, storage and realtime
sub-clients so no test touches the network.
"""

from typing import Any, Dict, Optional

import pytest

from supabase_facade import ClientOptions, SupabaseClient
from supabase_facade.interfaces import AuthOperations, AuthStateListener

TEST_URL = "https://proj.supabase.co"
TEST_KEY = "test-anon-key"


class FakeSession:
    """Minimal session carrying only an access token."""

    def __init__(self, access_token: str):
        self.access_token = access_token


class FakeAuthClient(AuthOperations):
    """Auth sub-client whose session changes only through ``emit``."""

    def __init__(self, url: str, headers: Dict[str, str], auto_refresh_token: bool):
        self.url = url
        self.headers = headers
        self.auto_refresh_token = auto_refresh_token
        self._session: Optional[Any] = None
        self._listener: Optional[AuthStateListener] = None

    @property
    def session(self) -> Optional[Any]:
        return self._session

    @property
    def on_auth_state_change(self) -> Optional[AuthStateListener]:
        return self._listener

    @on_auth_state_change.setter
    def on_auth_state_change(self, listener: Optional[AuthStateListener]) -> None:
        self._listener = listener

    def emit(self, event: str, session: Optional[Any]) -> None:
        """Replace the session and notify the listener, like GoTrue does."""
        self._session = session
        if self._listener is not None:
            self._listener(event, session)

    def sign_up(self, credentials: Dict[str, Any]) -> Any:
        return None

    def sign_in_with_password(self, credentials: Dict[str, Any]) -> Any:
        session = FakeSession(f"token-for-{credentials['email']}")
        self.emit("SIGNED_IN", session)
        return session

    def sign_in_with_otp(self, credentials: Dict[str, Any]) -> Any:
        return None

    def set_session(self, access_token: str, refresh_token: str) -> Any:
        session = FakeSession(access_token)
        self.emit("SIGNED_IN", session)
        return session

    def refresh_session(self, refresh_token: Optional[str] = None) -> Any:
        session = FakeSession(f"{self._session.access_token}-refreshed")
        self.emit("TOKEN_REFRESHED", session)
        return session

    def get_user(self, jwt: Optional[str] = None) -> Any:
        return None

    def sign_out(self, **options: Any) -> None:
        self.emit("SIGNED_OUT", None)


class FakeDatabaseClient:
    def __init__(self, url: str, headers: Dict[str, str], schema: str):
        self.url = url
        self.headers = headers
        self.schema = schema


class FakeStorageClient:
    def __init__(self, url: str, headers: Dict[str, str]):
        self.url = url
        self.headers = headers


class FakeRealtimeClient:
    def __init__(self, endpoint: str, params: Dict[str, str]):
        self.endpoint = endpoint
        self.params = params


@pytest.fixture
def make_session():
    """Build a session carrying the given access token."""
    return FakeSession


@pytest.fixture
def fake_auth() -> FakeAuthClient:
    """Signed-out auth sub-client."""
    return FakeAuthClient(f"{TEST_URL}/auth/v1", {"apikey": TEST_KEY}, True)


@pytest.fixture
def fake_options() -> ClientOptions:
    """Client options wired to the fake sub-clients."""
    return ClientOptions(
        auth_factory=FakeAuthClient,
        database_factory=FakeDatabaseClient,
        storage_factory=FakeStorageClient,
        realtime_factory=FakeRealtimeClient,
    )


@pytest.fixture
def client(fake_options):
    """Facade without an auth state listener."""
    supabase = SupabaseClient(TEST_URL, TEST_KEY, options=fake_options)
    yield supabase
    supabase.close()


@pytest.fixture
def listening_client(fake_options):
    """Facade with the auth state listener registered."""
    supabase = SupabaseClient(
        TEST_URL, TEST_KEY, listen_for_auth_changes=True, options=fake_options
    )
    yield supabase
    supabase.close()
