"""
Repositorios sobre Supabase.

- ShelterRepository: provee el set completo de albergues candidatos
- IntakeRepository: formularios de intake guardados por email
"""

from datetime import datetime, timezone
from typing import Any, Optional

import structlog
from tenacity import Retrying, stop_after_attempt, wait_exponential

from albergue.config import get_settings
from albergue.database.supabase_client import get_supabase_client, SupabaseClient
from albergue.errors import StoreError

logger = structlog.get_logger()

PAGE_SIZE = 1000


class BaseRepository:
    """Clase base para repositorios."""

    def __init__(
        self,
        client: Optional[SupabaseClient] = None,
        retry_attempts: Optional[int] = None,
    ):
        self._client = client or get_supabase_client()
        self._retry_attempts = retry_attempts or get_settings().store_retry_attempts

    @property
    def client(self) -> SupabaseClient:
        return self._client

    def _with_retry(self, operation: str, fn):
        """
        Ejecuta fn con reintentos exponenciales.

        Raises:
            StoreError: Si falla el último intento
        """
        try:
            for attempt in Retrying(
                stop=stop_after_attempt(self._retry_attempts),
                wait=wait_exponential(multiplier=1, min=1, max=8),
                reraise=True,
            ):
                with attempt:
                    return fn()
        except Exception as e:
            logger.error(
                "Error accediendo al store",
                operation=operation,
                attempts=self._retry_attempts,
                error=str(e),
            )
            raise StoreError(f"{operation} failed: {e}") from e


class ShelterRepository(BaseRepository):
    """
    Repositorio de albergues.

    No filtra del lado del servidor: el matcher hace todo el filtrado.
    """

    def __init__(self, client: Optional[SupabaseClient] = None, **kwargs):
        super().__init__(client, **kwargs)
        self.table = get_settings().shelters_table

    def get_all(self) -> list[dict[str, Any]]:
        """Obtiene todos los documentos de albergue (paginado)."""
        shelters = self._with_retry("get_all_shelters", self._fetch_all)
        logger.info("Albergues cargados", total=len(shelters))
        return shelters

    def _fetch_all(self) -> list[dict]:
        rows: list[dict] = []
        start = 0
        while True:
            response = (
                self.client.table(self.table)
                .select("*")
                .range(start, start + PAGE_SIZE - 1)
                .execute()
            )
            batch = response.data or []
            rows.extend(batch)
            if len(batch) < PAGE_SIZE:
                return rows
            start += PAGE_SIZE


class IntakeRepository(BaseRepository):
    """Repositorio de formularios de intake (un registro por email)."""

    def __init__(self, client: Optional[SupabaseClient] = None, **kwargs):
        super().__init__(client, **kwargs)
        self.table = get_settings().intake_table

    def get_by_email(self, email: str) -> Optional[dict]:
        """Obtiene el formulario guardado para un email."""
        normalized = email.strip().lower()

        def _fetch():
            return (
                self.client.table(self.table)
                .select("*")
                .eq("email", normalized)
                .limit(1)
                .execute()
            )

        response = self._with_retry("get_intake", _fetch)
        return response.data[0] if response.data else None

    def upsert(self, form: dict[str, Any]) -> dict:
        """
        Inserta o actualiza un formulario por email.

        Raises:
            ValueError: Si el formulario no tiene email
        """
        email = str(form.get("email") or "").strip().lower()
        if not email:
            raise ValueError("email is required to store an intake form")

        data = {
            **form,
            "email": email,
            "updated_at": datetime.now(timezone.utc).isoformat(),
        }

        def _write():
            return (
                self.client.table(self.table)
                .upsert(data, on_conflict="email")
                .execute()
            )

        response = self._with_retry("upsert_intake", _write)
        logger.info("Formulario de intake guardado", email=email)
        return response.data[0] if response.data else {}
