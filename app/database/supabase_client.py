import logging
from supabase import create_client, Client
from app.config.settings import settings

logger = logging.getLogger(__name__)


class SupabaseClient:
    _client: Client = None

    @classmethod
    def get_client(cls) -> Client:
        if cls._client is None:
            logger.info(f"Creating Supabase client for {settings.supabase_url or '<unset url>'}")
            cls._client = create_client(settings.supabase_url, settings.supabase_key)
        return cls._client

    @classmethod
    def reset_client(cls):
        cls._client = None


def get_supabase() -> Client:
    return SupabaseClient.get_client()


def is_unique_violation(error: Exception) -> bool:
    """True when the backend rejected a write because of a unique constraint (Postgres 23505)."""
    if getattr(error, "code", None) == "23505":
        return True
    message = str(error).lower()
    return "duplicate" in message or "unique" in message
