"""
Módulo de base de datos.

Provee acceso a Supabase y lectura de albergues y formularios.
"""

from albergue.database.supabase_client import (
    create_supabase_client,
    get_supabase_client,
    SupabaseClient,
)
from albergue.database.repositories import (
    IntakeRepository,
    ShelterRepository,
)

__all__ = [
    "create_supabase_client",
    "get_supabase_client",
    "SupabaseClient",
    "IntakeRepository",
    "ShelterRepository",
]
