"""
Service endpoint derivation from a Supabase project URL.
"""

from dataclasses import dataclass

AUTH_PATH = "/auth/v1"
REST_PATH = "/rest/v1"
REALTIME_PATH = "/realtime/v1"
STORAGE_PATH = "/storage/v1"


@dataclass(frozen=True)
class Endpoints:
    """Base URLs of the four Supabase services for one project."""

    auth_url: str
    rest_url: str
    realtime_url: str
    storage_url: str


def derive_endpoints(base_url: str) -> Endpoints:
    """Append the fixed service suffixes to ``base_url``.

    The URL is not validated or normalised; a malformed URL surfaces as an
    error from the sub-client that first uses it.
    """
    return Endpoints(
        auth_url=f"{base_url}{AUTH_PATH}",
        rest_url=f"{base_url}{REST_PATH}",
        realtime_url=f"{base_url}{REALTIME_PATH}",
        storage_url=f"{base_url}{STORAGE_PATH}",
    )
