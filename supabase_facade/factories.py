"""
Header synthesis and sub-client factories.

Every factory call builds a new sub-client. Nothing here caches a client or a
token, so each instance carries the credentials current at the time of the
call.
"""

from dataclasses import dataclass
from typing import Any, Dict, Optional

from postgrest import SyncPostgrestClient
from realtime import AsyncRealtimeClient
from storage3 import SyncStorageClient

from .interfaces import (
    AuthFactory,
    AuthOperations,
    DatabaseFactory,
    RealtimeFactory,
    StorageFactory,
)

API_KEY_HEADER = "apikey"
AUTHORIZATION_HEADER = "Authorization"


def bearer_token(auth: AuthOperations, api_key: str) -> str:
    """Access token of the current session, or ``api_key`` when signed out."""
    session = auth.session
    token = getattr(session, "access_token", None) if session is not None else None
    return token or api_key


def auth_headers(auth: AuthOperations, api_key: str) -> Dict[str, str]:
    """Build the header set for the data and storage sub-clients."""
    return {
        API_KEY_HEADER: api_key,
        AUTHORIZATION_HEADER: f"Bearer {bearer_token(auth, api_key)}",
    }


# Default constructors for the sub-client libraries

def default_auth_factory(
    url: str, headers: Dict[str, str], auto_refresh_token: bool
) -> AuthOperations:
    from .auth_client import SupabaseAuthClient

    return SupabaseAuthClient(url, headers, auto_refresh_token=auto_refresh_token)


def default_database_factory(
    url: str, headers: Dict[str, str], schema: str
) -> SyncPostgrestClient:
    return SyncPostgrestClient(url, schema=schema, headers=headers)


def default_storage_factory(url: str, headers: Dict[str, str]) -> SyncStorageClient:
    # storage3 warns and rewrites the url when the trailing slash is missing
    if not url.endswith("/"):
        url = f"{url}/"
    return SyncStorageClient(url, headers)


def default_realtime_factory(
    endpoint: str, params: Dict[str, str]
) -> AsyncRealtimeClient:
    return AsyncRealtimeClient(endpoint, token=params.get(API_KEY_HEADER), params=params)


@dataclass(frozen=True)
class ClientOptions:
    """Constructors used by ``SupabaseClient`` to build its sub-clients.

    Override any of them to plug in a different implementation, e.g. test
    doubles or clients with custom transports.
    """

    auth_factory: AuthFactory = default_auth_factory
    database_factory: DatabaseFactory = default_database_factory
    storage_factory: StorageFactory = default_storage_factory
    realtime_factory: RealtimeFactory = default_realtime_factory


def create_database_client(
    url: str,
    headers: Dict[str, str],
    schema: str,
    factory: Optional[DatabaseFactory] = None,
) -> Any:
    """Build a relational-data (PostgREST) client."""
    factory = factory or default_database_factory
    return factory(url, headers, schema)


def create_storage_client(
    url: str,
    headers: Dict[str, str],
    factory: Optional[StorageFactory] = None,
) -> Any:
    """Build a storage client."""
    factory = factory or default_storage_factory
    return factory(url, headers)


def create_realtime_client(
    endpoint: str,
    api_key: str,
    factory: Optional[RealtimeFactory] = None,
) -> Any:
    """Build a realtime client authenticated with the static API key only."""
    factory = factory or default_realtime_factory
    return factory(endpoint, {API_KEY_HEADER: api_key})
