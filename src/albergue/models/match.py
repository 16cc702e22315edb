"""
Resultado del matching.

Los alias camelCase mantienen el formato que ya consumen la UI y los
clientes de la API (shelterId, percentageMatch, matchDetails, ...).
"""

from typing import Optional

from pydantic import BaseModel, ConfigDict, Field
from pydantic.alias_generators import to_camel

from albergue.models.enums import GenderPolicy, PetPolicy, StayLength
from albergue.models.geo import GeoPoint
from albergue.models.shelter import ShelterCandidate


class ShelterInfo(BaseModel):
    """Copia desnormalizada de los campos relevantes del albergue."""

    model_config = ConfigDict(frozen=True, populate_by_name=True)

    id: str = Field(..., alias="_id")
    name: str = Field(..., alias="shelterName")
    locality: Optional[str] = Field(None, alias="location")
    location: Optional[GeoPoint] = Field(None, alias="location_coordinates")
    gender_policy: GenderPolicy = Field(..., alias="genderPolicy")
    max_stay_length: StayLength = Field(..., alias="maxStayLength")
    pet_policy: PetPolicy = Field(..., alias="petPolicy")
    accepts_families: bool = Field(..., alias="hasFamily")
    max_family_size: Optional[int] = Field(None, alias="maxFamilySize")
    accepts_couples: bool = Field(..., alias="acceptsCouples")
    min_age: Optional[int] = Field(None, alias="minAge")
    max_age: Optional[int] = Field(None, alias="maxAge")
    wheelchair_accessible: Optional[bool] = Field(None, alias="wheelchairAccessible")

    @classmethod
    def from_candidate(cls, shelter: ShelterCandidate) -> "ShelterInfo":
        return cls(
            id=shelter.id,
            name=shelter.name,
            locality=shelter.locality,
            location=shelter.location,
            gender_policy=shelter.gender_policy,
            max_stay_length=shelter.max_stay_length,
            pet_policy=shelter.pet_policy,
            accepts_families=shelter.accepts_families,
            max_family_size=shelter.max_family_size,
            accepts_couples=shelter.accepts_couples,
            min_age=shelter.min_age,
            max_age=shelter.max_age,
            wheelchair_accessible=shelter.wheelchair_accessible,
        )


class MatchDetail(BaseModel):
    """Puntaje de un criterio evaluado."""

    model_config = ConfigDict(frozen=True, alias_generator=to_camel, populate_by_name=True)

    criterion: str
    score: float = Field(..., ge=0)
    max_score: float = Field(..., ge=0)


class MatchResult(BaseModel):
    """Resultado de matching para un albergue elegible."""

    model_config = ConfigDict(frozen=True, alias_generator=to_camel, populate_by_name=True)

    shelter_id: str
    shelter_info: ShelterInfo
    percentage_match: int = Field(..., ge=0, le=100)
    match_details: tuple[MatchDetail, ...] = ()

    def to_dict(self) -> dict:
        """Serializa al formato JSON de la API."""
        return self.model_dump(mode="json", by_alias=True)
