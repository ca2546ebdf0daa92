from supabase import Client, create_client

from lexigem.config.settings import Settings

_client: Client | None = None


def init_client(settings: Settings) -> None:
    """Initialize the global Supabase client from settings."""
    global _client  # noqa: PLW0603
    if not settings.supabase_url or not settings.supabase_api_key:
        raise ValueError("SUPABASE_URL and SUPABASE_API_KEY must be set")
    _client = create_client(settings.supabase_url, settings.supabase_api_key)


def close_client() -> None:
    """Drop the global Supabase client."""
    global _client  # noqa: PLW0603
    _client = None


def get_client() -> Client:
    """Return the initialized Supabase client."""
    if _client is None:
        raise RuntimeError("Supabase client not initialized. Call init_client() first.")
    return _client
