"""
Utilidades de ubicación: distancia haversine y extracción de ciudad
desde direcciones en texto libre.
"""

import math
import re
from typing import Optional

from albergue.config import LONDON_BOROUGHS, UK_CITIES
from albergue.models import GeoPoint

EARTH_RADIUS_KM = 6371.0

_POSTCODE = re.compile(r"^[a-z]{1,2}\d[a-z\d]?(\s*\d[a-z]{2})?$")
_CITY_NOISE = ("greater", "central", "city centre", "city center", "city")

_BOROUGHS = {b.lower(): "london" for b in LONDON_BOROUGHS}
_CITIES = [c.lower() for c in UK_CITIES]


def haversine_km(a: GeoPoint, b: GeoPoint) -> float:
    """Distancia sobre la esfera terrestre en kilómetros."""
    lat1, lat2 = math.radians(a.lat), math.radians(b.lat)
    dlat = lat2 - lat1
    dlng = math.radians(b.lng - a.lng)
    h = (
        math.sin(dlat / 2) ** 2
        + math.cos(lat1) * math.cos(lat2) * math.sin(dlng / 2) ** 2
    )
    return 2 * EARTH_RADIUS_KM * math.asin(math.sqrt(min(1.0, h)))


def _clean_part(part: str) -> str:
    text = part.strip().lower()
    for noise in _CITY_NOISE:
        text = re.sub(rf"\b{noise}\b", " ", text)
    return " ".join(text.split())


def extract_city(locality: Optional[str]) -> Optional[str]:
    """
    Extrae la ciudad de una dirección tipo "12 High Street, Camden, London, UK".

    Los boroughs de Londres se pliegan a "london". Devuelve None si no se
    reconoce ninguna ciudad (códigos postales, calles sueltas, etc.).
    """
    if not locality:
        return None

    parts = [_clean_part(p) for p in locality.split(",")]
    for part in parts:
        if not part or _POSTCODE.match(part):
            continue
        if part in _CITIES:
            return part
        if part in _BOROUGHS:
            return _BOROUGHS[part]
    # Segundo intento: ciudad conocida dentro de un fragmento más largo
    for part in parts:
        for city in _CITIES:
            if re.search(rf"\b{re.escape(city)}\b", part):
                return city
    return None
