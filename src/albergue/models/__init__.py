"""
Modelos de datos del sistema.

- UserProfile: respuestas del intake normalizadas
- ShelterCandidate: snapshot de un albergue
- MatchResult: resultado explicable por albergue elegible
"""

from albergue.models.enums import (
    Gender,
    GenderPolicy,
    GroupType,
    LocalConnectionPolicy,
    PetPolicy,
    PetSize,
    StayLength,
    StayType,
    SupportNeed,
)
from albergue.models.geo import GeoPoint
from albergue.models.user import UserProfile
from albergue.models.shelter import ShelterCandidate
from albergue.models.match import MatchDetail, MatchResult, ShelterInfo

__all__ = [
    # Enums
    "Gender",
    "GenderPolicy",
    "GroupType",
    "LocalConnectionPolicy",
    "PetPolicy",
    "PetSize",
    "StayLength",
    "StayType",
    "SupportNeed",
    # Entidades
    "GeoPoint",
    "UserProfile",
    "ShelterCandidate",
    # Resultado
    "MatchDetail",
    "MatchResult",
    "ShelterInfo",
]
