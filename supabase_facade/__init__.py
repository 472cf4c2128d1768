"""
Unified Supabase client.

One project url and API key drive the auth, database, storage and realtime
sub-clients. Access them through ``SupabaseClient``:

    client = create_client(url, key, listen_for_auth_changes=True)
    client.auth.sign_in_with_password({"email": email, "password": password})
    rows = client.database.from_("profiles").select("*").execute()
"""

from .client import SupabaseClient, create_client, create_client_from_env
from .config import SupabaseClientConfig, SupabaseSettings
from .auth_client import SupabaseAuthClient
from .endpoints import Endpoints, derive_endpoints
from .exceptions import ClientError, ClientConfigurationError
from .factories import ClientOptions, auth_headers, bearer_token
from .interfaces import AuthOperations

__all__ = [
    "SupabaseClient",
    "create_client",
    "create_client_from_env",
    "SupabaseClientConfig",
    "SupabaseSettings",
    "SupabaseAuthClient",
    "ClientOptions",
    "Endpoints",
    "derive_endpoints",
    "auth_headers",
    "bearer_token",
    "AuthOperations",
    "ClientError",
    "ClientConfigurationError",
]
