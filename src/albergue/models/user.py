"""
Modelo de perfil de usuario.

Representa las respuestas del formulario de intake ya normalizadas,
listas para el motor de matching.
"""

from datetime import date, datetime
from typing import Any, Mapping, Optional

from pydantic import BaseModel, ConfigDict, Field, ValidationError, field_validator

from albergue.errors import IntakeValidationError
from albergue.models.enums import (
    Gender,
    GroupType,
    PetSize,
    StayType,
    SupportNeed,
    parse_int,
    parse_preference,
)
from albergue.models.geo import GeoPoint

# Pregunta del formulario -> necesidad de apoyo (respuesta "Yes")
_SUPPORT_QUESTIONS = {
    "lgbtqFriendly": SupportNeed.LGBTQ_FRIENDLY,
    "medicalConditions": SupportNeed.MEDICAL,
    "mentalHealth": SupportNeed.MENTAL_HEALTH,
    "substanceUse": SupportNeed.SUBSTANCE_USE,
    "domesticAbuse": SupportNeed.DOMESTIC_ABUSE,
    "careLeaver": SupportNeed.CARE_LEAVER,
    "veteran": SupportNeed.VETERAN,
    "foodAssistance": SupportNeed.FOOD,
    "benefitsHelp": SupportNeed.BENEFITS_ADVICE,
}


class UserProfile(BaseModel):
    """
    Perfil inmutable del usuario durante una corrida de matching.

    Los booleanos opcionales (seguridad, toque de queda, vida comunitaria,
    fumador) valen None cuando el usuario no expresó preferencia.
    """

    model_config = ConfigDict(frozen=True)

    gender: Gender = Field(..., description="Obligatorio")
    date_of_birth: Optional[date] = Field(None, description="Para calcular la edad")

    # Grupo
    group_type: GroupType = Field(default=GroupType.INDIVIDUAL)
    group_size: Optional[int] = Field(None, ge=1, description="None = no informado")
    children_count: int = Field(default=0, ge=0)

    # Estadía y ubicación
    desired_stay_type: Optional[StayType] = None
    location: Optional[GeoPoint] = None
    locality: Optional[str] = Field(None, description="Ubicación en texto libre")

    # Requisitos
    wants_women_only: bool = False
    has_pets: bool = False
    pet_size: Optional[PetSize] = None
    needs_wheelchair_access: bool = False

    # Preferencias (None = sin preferencia)
    needs_security: Optional[bool] = None
    has_curfew_tolerance: Optional[bool] = None
    accepts_communal_living: Optional[bool] = None
    is_smoker: Optional[bool] = None

    # Situación (None = no respondió)
    has_housing_benefit: Optional[bool] = None
    has_local_connection: Optional[bool] = None
    religion: Optional[str] = None

    support_needs: frozenset[SupportNeed] = Field(default_factory=frozenset)

    @field_validator("gender", mode="before")
    @classmethod
    def _parse_gender(cls, value):
        gender = Gender.parse(value)
        if gender is None:
            raise ValueError("gender is required")
        return gender

    @field_validator("group_type", mode="before")
    @classmethod
    def _parse_group_type(cls, value):
        return GroupType.parse(value)

    @field_validator("desired_stay_type", mode="before")
    @classmethod
    def _parse_stay_type(cls, value):
        return StayType.parse(value)

    @field_validator("pet_size", mode="before")
    @classmethod
    def _parse_pet_size(cls, value):
        return PetSize.parse(value)

    def age_on(self, day: date) -> Optional[int]:
        """Edad en años cumplidos al día dado (None si no hay fecha de nacimiento)."""
        if self.date_of_birth is None:
            return None
        dob = self.date_of_birth
        years = day.year - dob.year
        if (day.month, day.day) < (dob.month, dob.day):
            years -= 1
        return years

    @classmethod
    def from_intake(
        cls,
        payload: Mapping[str, Any],
        today: Optional[date] = None,
    ) -> "UserProfile":
        """
        Construye el perfil desde las respuestas crudas del formulario.

        today es el día de evaluación: una fecha de nacimiento posterior es
        inválida. Por defecto, el día actual.

        Raises:
            IntakeValidationError: Si falta el género o la fecha es inválida
        """
        if not isinstance(payload, Mapping):
            raise IntakeValidationError("Intake data must be a JSON object")

        gender = Gender.parse(payload.get("gender"))
        if gender is None:
            raise IntakeValidationError("Gender information is required")

        dob = _parse_dob(
            payload.get("dob", payload.get("dateOfBirth")),
            today or date.today(),
        )

        group_size = parse_int(payload.get("groupSize"))
        if group_size is not None and group_size < 1:
            group_size = None
        children = parse_int(payload.get("childrenCount"))

        locality = payload.get("location")
        if not isinstance(locality, str) or not locality.strip():
            locality = None

        needs = {
            need
            for question, need in _SUPPORT_QUESTIONS.items()
            if parse_preference(payload.get(question)) is True
        }
        immigration = str(payload.get("immigrationStatus") or "").lower()
        if "nrpf" in immigration or "no recourse" in immigration:
            needs.add(SupportNeed.NRPF)

        try:
            return cls(
                gender=gender,
                date_of_birth=dob,
                group_type=payload.get("groupType"),
                group_size=group_size,
                children_count=max(children or 0, 0),
                desired_stay_type=payload.get("shelterType"),
                location=GeoPoint.parse(payload.get("location_coordinates")),
                locality=locality.strip() if locality else None,
                wants_women_only=parse_preference(payload.get("womenOnly")) is True,
                has_pets=parse_preference(payload.get("pets")) is True,
                pet_size=payload.get("petSize"),
                needs_wheelchair_access=parse_preference(payload.get("wheelchair")) is True,
                needs_security=parse_preference(payload.get("securityNeeded")),
                has_curfew_tolerance=parse_preference(payload.get("curfew")),
                accepts_communal_living=parse_preference(payload.get("communalLiving")),
                is_smoker=parse_preference(payload.get("smoking")),
                has_housing_benefit=_housing_benefit(payload.get("benefits")),
                has_local_connection=_local_connection(payload.get("localConnection")),
                religion=_religion(payload.get("religion")),
                support_needs=frozenset(needs),
            )
        except ValidationError as e:
            raise IntakeValidationError(f"Invalid intake data: {e.error_count()} error(s)") from e


def _parse_dob(value, today: date) -> Optional[date]:
    if value is None or value == "":
        return None
    if isinstance(value, datetime):
        dob = value.date()
    elif isinstance(value, date):
        dob = value
    else:
        try:
            dob = date.fromisoformat(str(value).strip()[:10])
        except ValueError:
            raise IntakeValidationError(f"Invalid date of birth: {value!r}") from None
    if dob > today:
        raise IntakeValidationError(f"Invalid date of birth: {value!r}")
    return dob


# Beneficios que cubren el alquiler del albergue
_HOUSING_BENEFITS = ("housing benefit", "universal credit")

# Respuestas de conexión local: "no tengo" y "no sé"
_NO_CONNECTION = "no local connection"
_UNSURE = "not sure"


def _answers(value) -> list[str]:
    """Respuesta multiple choice como lista normalizada."""
    if value is None:
        return []
    if isinstance(value, str):
        value = [value]
    if not isinstance(value, (list, tuple, set, frozenset)):
        return []
    return [" ".join(str(v).split()).lower() for v in value if str(v).strip()]


def _housing_benefit(value) -> Optional[bool]:
    answers = _answers(value)
    if not answers:
        return None
    return any(a.startswith(_HOUSING_BENEFITS) for a in answers)


def _local_connection(value) -> Optional[bool]:
    answers = [a for a in _answers(value) if a != _UNSURE]
    if not answers:
        return None
    return any(a != _NO_CONNECTION for a in answers)


def _religion(value) -> Optional[str]:
    if not isinstance(value, str) or not value.strip():
        return None
    text = " ".join(value.split())
    if text.lower().startswith(("prefer not", "no preference")):
        return None
    return text
