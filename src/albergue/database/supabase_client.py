"""
Conexión a Supabase.

Los repositorios reciben un SupabaseClient; fuera de los tests se usa el
singleton de get_supabase_client().
"""

from functools import lru_cache
from typing import Optional

import structlog
from supabase import create_client, Client

from albergue.config import Settings, get_settings

logger = structlog.get_logger()


class SupabaseClient:
    """Wrapper mínimo: los repositorios solo necesitan tablas."""

    def __init__(self, client: Client, url: str = ""):
        self._client = client
        self.url = url

    @property
    def client(self) -> Client:
        return self._client

    def table(self, name: str):
        return self._client.table(name)


def create_supabase_client(settings: Optional[Settings] = None) -> SupabaseClient:
    """
    Crea un cliente nuevo desde la configuración.

    Usa la service key si está configurada, si no la anon key.

    Raises:
        ValueError: Si faltan SUPABASE_URL o las keys
    """
    settings = settings or get_settings()
    key = settings.supabase_service_key or settings.supabase_key

    if not settings.supabase_url or not key:
        raise ValueError(
            "SUPABASE_URL y SUPABASE_KEY (o SUPABASE_SERVICE_KEY) son requeridos."
        )

    if not settings.supabase_service_key:
        logger.warning("Usando anon key de Supabase", url=settings.supabase_url)

    return SupabaseClient(create_client(settings.supabase_url, key), url=settings.supabase_url)


@lru_cache
def get_supabase_client() -> SupabaseClient:
    """Cliente compartido por el proceso."""
    client = create_supabase_client()
    logger.info("Cliente de Supabase inicializado", url=client.url)
    return client
