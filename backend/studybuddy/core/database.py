"""
Database connections: Supabase client setup.
"""

from functools import lru_cache
from supabase import create_client, Client

from studybuddy.config import get_settings


@lru_cache
def get_supabase_client() -> Client:
    """Get the Supabase client (singleton, created on first use).

    Uses the service_role key when configured. It bypasses RLS, so every
    query in the services must filter on ``user_id`` itself.
    Falls back to the anon key for local setups without a service key.
    """
    settings = get_settings()
    key = settings.SUPABASE_SERVICE_KEY or settings.SUPABASE_KEY
    return create_client(settings.SUPABASE_URL, key)
