"""
Configuración centralizada del sistema.
Carga variables de entorno y define settings globales.
"""

from functools import lru_cache
from pathlib import Path
from typing import Optional

from pydantic import Field
from pydantic_settings import BaseSettings, SettingsConfigDict

# Encontrar la raíz del proyecto (donde está el .env)
# config.py -> albergue/ -> src/ -> project root
_PROJECT_ROOT = Path(__file__).resolve().parent.parent.parent
_ENV_FILE = _PROJECT_ROOT / ".env"


class Settings(BaseSettings):
    """Configuración principal de la aplicación."""

    model_config = SettingsConfigDict(
        env_file=str(_ENV_FILE),
        env_file_encoding="utf-8",
        case_sensitive=False,
        extra="ignore",
    )

    # Supabase
    supabase_url: Optional[str] = Field(None, description="URL del proyecto Supabase")
    supabase_key: Optional[str] = Field(None, description="Anon key de Supabase")
    supabase_service_key: Optional[str] = Field(
        None, description="Service role key para operaciones admin"
    )
    shelters_table: str = Field("shelters", description="Tabla de albergues")
    intake_table: str = Field("user_forms", description="Tabla de formularios de intake")
    store_retry_attempts: int = Field(
        3, ge=1, description="Intentos de lectura contra el store antes de fallar"
    )

    # API HTTP
    api_host: str = Field("0.0.0.0", description="Host de escucha de la API")
    api_port: int = Field(8080, description="Puerto de la API")

    # Pesos de los criterios (puntaje máximo de cada uno)
    weight_gender_policy: float = Field(10.0, ge=0)
    weight_stay_length: float = Field(10.0, ge=0)
    weight_location: float = Field(10.0, ge=0)
    weight_pets: float = Field(5.0, ge=0)
    weight_security: float = Field(5.0, ge=0)
    weight_curfew: float = Field(5.0, ge=0)
    weight_communal_living: float = Field(5.0, ge=0)
    weight_smoking: float = Field(5.0, ge=0)
    weight_housing_benefit: float = Field(5.0, ge=0)
    weight_local_connection: float = Field(5.0, ge=0)
    weight_religion: float = Field(5.0, ge=0)
    weight_support_service: float = Field(
        5.0, ge=0, description="Peso de cada servicio de apoyo requerido"
    )

    # Distancias
    location_near_km: float = Field(
        5.0, ge=0, description="Distancia con puntaje completo de ubicación"
    )
    location_cutoff_km: float = Field(
        50.0, gt=0, description="Distancia a partir de la cual la ubicación puntúa 0"
    )
    max_travel_km: Optional[float] = Field(
        None, gt=0, description="Radio máximo: más lejos el albergue se descarta"
    )

    # Concurrencia del matching
    match_max_workers: int = Field(1, ge=1, description="Threads para evaluar candidatos")
    match_parallel_threshold: int = Field(
        200, ge=1, description="Cantidad mínima de candidatos para paralelizar"
    )

    # Logging
    log_level: str = Field("INFO", description="Nivel de logging")


@lru_cache
def get_settings() -> Settings:
    """Obtiene la configuración cacheada."""
    return Settings()


# Constantes del sistema
LONDON_BOROUGHS = [
    "Westminster",
    "Camden",
    "Kensington and Chelsea",
    "Hackney",
    "Tower Hamlets",
    "Southwark",
    "Lambeth",
    "Islington",
    "Haringey",
    "Newham",
    "Waltham Forest",
    "Lewisham",
    "Greenwich",
    "Croydon",
    "Bromley",
    "Hounslow",
    "Ealing",
    "Brent",
    "Barnet",
    "Enfield",
    "Harrow",
    "Hillingdon",
    "Redbridge",
    "Havering",
    "Barking and Dagenham",
    "Bexley",
    "Sutton",
    "Merton",
    "Wandsworth",
    "Richmond upon Thames",
    "Kingston upon Thames",
]

UK_CITIES = [
    "London",
    "Manchester",
    "Birmingham",
    "Leeds",
    "Glasgow",
    "Liverpool",
    "Bristol",
    "Sheffield",
    "Edinburgh",
    "Cardiff",
    "Newcastle",
    "Nottingham",
]
