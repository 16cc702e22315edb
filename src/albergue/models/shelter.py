"""
Modelo de albergue candidato.

Snapshot de solo lectura de un documento de la colección de albergues,
normalizado para el motor de matching.
"""

from typing import Any, Mapping, Optional

from pydantic import BaseModel, ConfigDict, Field, field_validator

from albergue.models.enums import (
    GenderPolicy,
    LocalConnectionPolicy,
    PetPolicy,
    StayLength,
    SupportNeed,
    parse_int,
    parse_preference,
)
from albergue.models.geo import GeoPoint

# Grupos especializados del documento -> servicio de apoyo
_SPECIALIZED_GROUPS = {
    "people with substance use issues": SupportNeed.SUBSTANCE_USE,
    "people fleeing domestic abuse": SupportNeed.DOMESTIC_ABUSE,
    "care leavers": SupportNeed.CARE_LEAVER,
    "veterans": SupportNeed.VETERAN,
    "people with mental health needs": SupportNeed.MENTAL_HEALTH,
}

# Servicios adicionales del documento -> servicio de apoyo
_ADDITIONAL_SERVICES = {
    "benefits advice": SupportNeed.BENEFITS_ADVICE,
    "substance use support": SupportNeed.SUBSTANCE_USE,
    "mental health support": SupportNeed.MENTAL_HEALTH,
    "access to gp/healthcare services": SupportNeed.MEDICAL,
    "meals": SupportNeed.FOOD,
}


class ShelterCandidate(BaseModel):
    """
    Albergue evaluado contra un perfil.

    gender_policy, max_stay_length y pet_policy son obligatorios: un
    documento sin ellos no es evaluable y el matcher lo descarta.
    """

    model_config = ConfigDict(frozen=True)

    # Identificación
    id: str = Field(..., min_length=1, description="Único dentro de una corrida")
    name: str = Field(default="", description="Nombre del albergue")

    # Ubicación
    locality: Optional[str] = Field(None, description="Dirección en texto")
    location: Optional[GeoPoint] = None

    # Políticas obligatorias
    gender_policy: GenderPolicy
    max_stay_length: StayLength
    pet_policy: PetPolicy

    # Capacidad
    accepts_families: bool = False
    max_family_size: Optional[int] = Field(None, ge=1)
    accepts_couples: bool = False

    # Edad (límites inclusivos, None = sin límite)
    min_age: Optional[int] = Field(None, ge=0)
    max_age: Optional[int] = Field(None, ge=0)

    wheelchair_accessible: Optional[bool] = None

    # Políticas comparables con preferencias (None = desconocido)
    has_security: Optional[bool] = None
    has_curfew: Optional[bool] = None
    communal_living: Optional[bool] = None
    smoking_allowed: Optional[bool] = None

    # Requisitos de admisión (None = desconocido)
    housing_benefit_accepted: Optional[bool] = None
    local_connection: Optional[LocalConnectionPolicy] = None
    allows_all_religions: Optional[bool] = None
    allowed_religions: frozenset[str] = Field(
        default_factory=frozenset, description="En minúsculas; aplica si no admite todas"
    )

    support_services: frozenset[SupportNeed] = Field(default_factory=frozenset)

    @field_validator("id", mode="before")
    @classmethod
    def _stringify_id(cls, value):
        if value is None:
            raise ValueError("shelter id is required")
        return str(value).strip()

    @field_validator("gender_policy", mode="before")
    @classmethod
    def _parse_gender_policy(cls, value):
        policy = GenderPolicy.parse(value)
        if policy is None:
            raise ValueError(f"unrecognised gender policy: {value!r}")
        return policy

    @field_validator("max_stay_length", mode="before")
    @classmethod
    def _parse_stay_length(cls, value):
        stay = StayLength.parse(value)
        if stay is None:
            raise ValueError(f"unrecognised max stay length: {value!r}")
        return stay

    @field_validator("pet_policy", mode="before")
    @classmethod
    def _parse_pet_policy(cls, value):
        policy = PetPolicy.parse(value)
        if policy is None:
            raise ValueError(f"unrecognised pet policy: {value!r}")
        return policy

    @classmethod
    def from_document(cls, doc: Mapping[str, Any]) -> "ShelterCandidate":
        """
        Construye el candidato desde un documento crudo del store.

        Raises:
            pydantic.ValidationError: Si faltan políticas obligatorias
        """
        doc = dict(doc or {})

        locality = doc.get("location")
        if not isinstance(locality, str):
            locality = None

        max_family = parse_int(doc.get("maxFamilySize"))

        # Formato plano del seed o anidado del panel de administración
        religion = doc.get("religionPolicy")
        if not isinstance(religion, Mapping):
            religion = doc

        return cls.model_validate(
            {
                "id": doc.get("id", doc.get("_id")),
                "name": str(doc.get("shelterName") or doc.get("name") or ""),
                "locality": locality,
                "location": GeoPoint.parse(doc.get("location_coordinates")),
                "gender_policy": doc.get("genderPolicy"),
                "max_stay_length": doc.get("maxStayLength"),
                "pet_policy": doc.get("petPolicy"),
                "accepts_families": _flag(doc.get("hasFamily", doc.get("acceptsFamilies"))),
                "max_family_size": max_family if max_family and max_family > 0 else None,
                "accepts_couples": _flag(doc.get("acceptsCouples")),
                "min_age": parse_int(doc.get("minAge")),
                "max_age": parse_int(doc.get("maxAge")),
                "wheelchair_accessible": _wheelchair_access(doc),
                "has_security": parse_preference(doc.get("hasSecurity")),
                "has_curfew": parse_preference(doc.get("hasCurfew", doc.get("curfew"))),
                "communal_living": _communal_living(doc),
                "smoking_allowed": parse_preference(doc.get("smokingAllowed")),
                "housing_benefit_accepted": parse_preference(doc.get("housingBenefitAccepted")),
                "local_connection": LocalConnectionPolicy.parse(doc.get("localConnectionRequired")),
                "allows_all_religions": parse_preference(religion.get("allowAllReligions")),
                "allowed_religions": frozenset(_as_lower_list(religion.get("allowedReligions")) or []),
                "support_services": _support_services(doc),
            }
        )


def _flag(value) -> bool:
    return parse_preference(value) is True


def _as_lower_list(value) -> Optional[list[str]]:
    if value is None:
        return None
    if isinstance(value, str):
        value = [value]
    if not isinstance(value, (list, tuple, set, frozenset)):
        return None
    return [str(v).strip().lower() for v in value if v]


def _wheelchair_access(doc: dict) -> Optional[bool]:
    explicit = parse_preference(doc.get("wheelchairAccessible"))
    if explicit is not None:
        return explicit
    features = _as_lower_list(doc.get("accessibilityFeatures"))
    if features is None:
        return None
    return "wheelchair accessible" in features


def _communal_living(doc: dict) -> Optional[bool]:
    explicit = parse_preference(doc.get("communalLiving"))
    if explicit is not None:
        return explicit
    types = _as_lower_list(doc.get("accommodationTypes"))
    if not types:
        return None
    shared = any("dormitory" in t or "shared" in t for t in types)
    private = any(
        "single" in t or "self-contained" in t or "family rooms" in t for t in types
    )
    return shared and not private


def _support_services(doc: dict) -> frozenset[SupportNeed]:
    services: set[SupportNeed] = set()

    if parse_preference(doc.get("lgbtqFriendly")) is True:
        services.add(SupportNeed.LGBTQ_FRIENDLY)
    if parse_preference(doc.get("hasMedical")) is True:
        services.add(SupportNeed.MEDICAL)
    if parse_preference(doc.get("hasMentalHealth")) is True:
        services.add(SupportNeed.MENTAL_HEALTH)

    for group in _as_lower_list(doc.get("specializedGroups")) or []:
        if group in _SPECIALIZED_GROUPS:
            services.add(_SPECIALIZED_GROUPS[group])
    for service in _as_lower_list(doc.get("additionalServices")) or []:
        if service in _ADDITIONAL_SERVICES:
            services.add(_ADDITIONAL_SERVICES[service])

    food = str(doc.get("foodType") or "").strip().lower()
    if food and not food.startswith("no food"):
        services.add(SupportNeed.FOOD)

    nrpf = str(doc.get("acceptNRPF") or "").strip().lower()
    if nrpf.startswith("yes") or "certain circumstances" in nrpf:
        services.add(SupportNeed.NRPF)

    return frozenset(services)
