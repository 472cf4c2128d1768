"""
Main Supabase client implementation.

``SupabaseClient`` owns one long-lived auth sub-client and synthesises fresh
database, storage and realtime sub-clients on every access, so the bearer
credential they carry always matches the current auth session.
"""

import logging
import weakref
from typing import Any, Dict, Optional

from pydantic import ValidationError

from .config import DEFAULT_SCHEMA, SupabaseClientConfig, SupabaseSettings
from .endpoints import Endpoints, derive_endpoints
from .exceptions import ClientConfigurationError
from .factories import (
    API_KEY_HEADER,
    ClientOptions,
    auth_headers,
    bearer_token,
    create_database_client,
    create_realtime_client,
    create_storage_client,
)
from .interfaces import AuthOperations, AuthStateListener

logger = logging.getLogger(__name__)


def _remove_auth_listener(auth: AuthOperations, listener: AuthStateListener) -> None:
    # Must not reference the SupabaseClient: runs as its weakref finalizer.
    if auth.on_auth_state_change is listener:
        auth.on_auth_state_change = None


class SupabaseClient:
    """Facade over the Supabase auth, database, storage and realtime services.

    Args:
        supabase_url: Unique Supabase project url
        supabase_key: Supabase anonymous API key
        schema: Database schema name, defaults to ``public``
        auto_refresh_token: Whether ``auth`` refreshes tokens automatically
        listen_for_auth_changes: Register a listener on ``auth`` that refreshes
            the database and storage credentials on every auth event
        options: Sub-client constructors, see ``ClientOptions``
        enable_logging: Set to False to silence this client's logger. All
            facade logging, sub-client creation included, goes through it;
            the sub-client libraries log on their own loggers.
    """

    def __init__(
        self,
        supabase_url: str,
        supabase_key: str,
        schema: str = DEFAULT_SCHEMA,
        auto_refresh_token: bool = True,
        listen_for_auth_changes: bool = False,
        options: Optional[ClientOptions] = None,
        enable_logging: bool = True,
    ):
        self.config = SupabaseClientConfig(
            url=supabase_url,
            key=supabase_key,
            schema=schema,
            auto_refresh_token=auto_refresh_token,
            listen_for_auth_changes=listen_for_auth_changes,
            enable_logging=enable_logging,
        )
        self.options = options or ClientOptions()
        self.client_name = "SupabaseClient"
        self.logger = logging.getLogger(f"{__name__}.{self.client_name}")
        if not enable_logging:
            self.logger.setLevel(logging.CRITICAL)

        self._endpoints = derive_endpoints(supabase_url)
        self._auth = self.options.auth_factory(
            self._endpoints.auth_url,
            {API_KEY_HEADER: supabase_key},
            auto_refresh_token,
        )
        self._auth_listener: Optional[AuthStateListener] = None
        self._finalizer: Optional[weakref.finalize] = None

        if listen_for_auth_changes:
            self._set_up_auth_listener()

        self.logger.debug(f"Supabase client created for {supabase_url} (schema={schema})")

    @classmethod
    def from_config(
        cls, config: SupabaseClientConfig, options: Optional[ClientOptions] = None
    ) -> "SupabaseClient":
        """Create a client from a SupabaseClientConfig."""
        return cls(
            config.url,
            config.key,
            schema=config.schema,
            auto_refresh_token=config.auto_refresh_token,
            listen_for_auth_changes=config.listen_for_auth_changes,
            options=options,
            enable_logging=config.enable_logging,
        )

    @property
    def endpoints(self) -> Endpoints:
        """Service URLs derived from the project url at construction."""
        return self._endpoints

    # Clients

    @property
    def auth(self) -> AuthOperations:
        """Auth client for Supabase."""
        return self._auth

    @property
    def database(self) -> Any:
        """Database client for Supabase, built fresh on every access."""
        return self.get_database_client()

    @property
    def storage(self) -> Any:
        """Storage client for Supabase, built fresh on every access."""
        return self.get_storage_client()

    def get_database_client(self) -> Any:
        """Build a PostgREST client carrying the current bearer credential."""
        self.logger.debug(f"Creating database client for {self._endpoints.rest_url}")
        return create_database_client(
            self._endpoints.rest_url,
            self._auth_headers(),
            self.config.schema,
            factory=self.options.database_factory,
        )

    def get_storage_client(self) -> Any:
        """Build a storage client carrying the current bearer credential."""
        self.logger.debug(f"Creating storage client for {self._endpoints.storage_url}")
        return create_storage_client(
            self._endpoints.storage_url,
            self._auth_headers(),
            factory=self.options.storage_factory,
        )

    def _realtime_client(self) -> Any:
        self.logger.debug(f"Creating realtime client for {self._endpoints.realtime_url}")
        return create_realtime_client(
            self._endpoints.realtime_url,
            self.config.key,
            factory=self.options.realtime_factory,
        )

    def _auth_headers(self) -> Dict[str, str]:
        return auth_headers(self._auth, self.config.key)

    # Convenience methods that delegate to sub-clients

    def table(self, table_name: str) -> Any:
        """Get table query builder (database operation)."""
        return self.get_database_client().from_(table_name)

    def from_(self, table_name: str) -> Any:
        """Get table query builder using from_ syntax."""
        return self.get_database_client().from_(table_name)

    def rpc(self, function_name: str, params: Optional[Dict[str, Any]] = None) -> Any:
        """Build an RPC call to a Postgres function."""
        return self.get_database_client().rpc(function_name, params or {})

    # Auth state listener

    @property
    def listening(self) -> bool:
        """Whether the auth state listener is registered."""
        return self._finalizer is not None and self._finalizer.alive

    def _set_up_auth_listener(self) -> None:
        """Register a listener on ``auth`` that refreshes client credentials."""
        client_ref = weakref.ref(self)

        def listener(event: Any, session: Optional[Any]) -> None:
            client = client_ref()
            if client is not None:
                client._refresh_client_headers(event)

        self._auth_listener = listener
        self._auth.on_auth_state_change = listener
        self._finalizer = weakref.finalize(self, _remove_auth_listener, self._auth, listener)
        self.logger.debug("Auth state listener registered")

    def _refresh_client_headers(self, event: Any) -> None:
        """Recompute the Authorization credential after an auth event.

        Database and storage clients are never cached, so the next one built
        reads the latest session. Nothing held by this client needs updating.
        """
        signed_in = bearer_token(self._auth, self.config.key) != self.config.key
        credential = "session token" if signed_in else "anon key"
        self.logger.debug(
            f"Auth state changed ({event}); database and storage clients now use the {credential}"
        )

    # Teardown

    def close(self) -> None:
        """Remove the auth state listener. Safe to call more than once."""
        if self.listening:
            self._finalizer()
            self.logger.debug("Auth state listener removed")
        self._auth_listener = None

    def get_client_info(self) -> Dict[str, Any]:
        """Get client information and configuration, without credentials."""
        return {
            "client_name": self.client_name,
            "url": self.config.url,
            "schema": self.config.schema,
            "endpoints": {
                "auth": self._endpoints.auth_url,
                "rest": self._endpoints.rest_url,
                "realtime": self._endpoints.realtime_url,
                "storage": self._endpoints.storage_url,
            },
            "auto_refresh_token": self.config.auto_refresh_token,
            "listening": self.listening,
            "has_session": self._auth.session is not None,
        }

    def __enter__(self):
        return self

    def __exit__(self, exc_type, exc_val, exc_tb):
        self.close()


def create_client(
    supabase_url: str,
    supabase_key: str,
    options: Optional[ClientOptions] = None,
    **kwargs: Any,
) -> SupabaseClient:
    """Create a SupabaseClient.

    Extra keyword arguments (``schema``, ``auto_refresh_token``,
    ``listen_for_auth_changes``, ``enable_logging``) go to the constructor.
    """
    return SupabaseClient(supabase_url, supabase_key, options=options, **kwargs)


def create_client_from_env(
    settings: Optional[SupabaseSettings] = None,
    options: Optional[ClientOptions] = None,
) -> SupabaseClient:
    """Create a SupabaseClient from SUPABASE_* environment variables.

    Raises:
        ClientConfigurationError: If the project url or key is missing, or a
            SUPABASE_* value cannot be parsed
    """
    if settings is None:
        try:
            settings = SupabaseSettings()
        except ValidationError as e:
            logger.error(f"Failed to load Supabase settings: {e}")
            raise ClientConfigurationError(
                "Invalid SUPABASE_* settings",
                client_name="SupabaseSettings",
                original_error=e,
            )
    config = settings.to_client_config()
    logger.debug(f"Loaded Supabase configuration for {config.url}")
    return SupabaseClient.from_config(config, options=options)
