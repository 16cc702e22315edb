"""Coordenadas geográficas."""

from typing import Optional

from pydantic import BaseModel, ConfigDict, Field


class GeoPoint(BaseModel):
    """Punto lat/lng en grados decimales."""

    model_config = ConfigDict(frozen=True)

    lat: float = Field(..., ge=-90, le=90)
    lng: float = Field(..., ge=-180, le=180)

    @classmethod
    def parse(cls, value) -> Optional["GeoPoint"]:
        """
        Construye un GeoPoint desde un dict {'lat', 'lng'} del formulario.

        Coordenadas incompletas o no numéricas devuelven None: la ubicación
        cae al matching por texto.
        """
        if isinstance(value, cls):
            return value
        if not isinstance(value, dict):
            return None
        try:
            lat = float(value.get("lat"))
            lng = float(value.get("lng"))
        except (TypeError, ValueError):
            return None
        if not (-90 <= lat <= 90 and -180 <= lng <= 180):
            return None
        return cls(lat=lat, lng=lng)
