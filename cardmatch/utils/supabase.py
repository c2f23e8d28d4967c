"""Supabase client configuration and connection management."""

from typing import Optional

from supabase import Client, create_client

from cardmatch.config import get_settings
from cardmatch.utils.logger import supabase_logger

_client: Optional[Client] = None


def _get_supabase_credentials() -> tuple[str, str]:
    """Get and validate Supabase credentials from the environment."""
    settings = get_settings()
    url = settings.supabase_url
    key = settings.supabase_service_key

    if not url or not key:
        raise ValueError(
            "SUPABASE_URL and SUPABASE_SERVICE_KEY environment variables are required"
        )

    return url, key


def _create_supabase_client() -> Client:
    url, key = _get_supabase_credentials()

    supabase_logger.info("🔧 Initializing Supabase connection...")
    supabase_logger.info(f"   🌐 URL: {url}")
    supabase_logger.info(f"   🔑 Key: {key[:20]}...")

    try:
        client = create_client(url, key)
    except Exception as e:
        supabase_logger.error(f"❌ Supabase connection failed: {e}")
        raise

    supabase_logger.info("✅ Supabase client created")
    return client


def get_supabase() -> Client:
    """Return the shared Supabase client, creating it on first use."""
    global _client
    if _client is None:
        _client = _create_supabase_client()
    return _client
