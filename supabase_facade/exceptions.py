"""
Custom exceptions for the Supabase client facade.

Errors raised by the sub-client libraries (auth, PostgREST, storage, realtime)
are not wrapped here; they reach the caller unchanged.
"""

from typing import Optional


class ClientError(Exception):
    """Base exception for all client-related errors."""

    def __init__(
        self,
        message: str,
        client_name: Optional[str] = None,
        original_error: Optional[Exception] = None,
    ):
        self.message = message
        self.client_name = client_name
        self.original_error = original_error
        super().__init__(message)

    def __str__(self):
        error_msg = self.message
        if self.client_name:
            error_msg = f"[{self.client_name}] {error_msg}"
        if self.original_error:
            error_msg += f" (Original: {str(self.original_error)})"
        return error_msg


class ClientConfigurationError(ClientError):
    """Raised when client settings cannot be loaded.

    This exception is raised when:
    - SUPABASE_URL is missing from the environment
    - Neither SUPABASE_KEY nor SUPABASE_ANON_KEY is set
    """
    pass
