"""
Tabla de reglas del matcher.

MatcherConfig reúne los gates (en orden) y los criterios
{nombre: CriterionConfig(max_score, compare)}. El orden de inserción de
los criterios es el orden de match_details.
"""

from dataclasses import dataclass
from datetime import date
from typing import Mapping, Optional

from albergue.config import Settings, get_settings
from albergue.matching import criteria
from albergue.matching.criteria import ComparisonFn
from albergue.matching.gates import GateFn, default_gate_functions
from albergue.models import ShelterCandidate, SupportNeed, UserProfile


@dataclass(frozen=True)
class Gate:
    """Regla hard con nombre."""

    name: str
    check: GateFn

    def evaluate(self, user: UserProfile, shelter: ShelterCandidate, today: date) -> bool:
        return self.check(user, shelter, today)


@dataclass(frozen=True)
class CriterionConfig:
    """Puntaje máximo y función de comparación de un criterio."""

    max_score: float
    compare: ComparisonFn

    def __post_init__(self) -> None:
        if self.max_score < 0:
            raise ValueError("max_score must be non-negative")


@dataclass(frozen=True)
class MatcherConfig:
    gates: tuple[Gate, ...]
    criteria: Mapping[str, CriterionConfig]

    @classmethod
    def from_settings(cls, settings: Optional[Settings] = None) -> "MatcherConfig":
        """Construye la tabla por defecto con pesos y umbrales de Settings."""
        settings = settings or get_settings()

        gates = tuple(
            Gate(name=name, check=check)
            for name, check in default_gate_functions(settings.max_travel_km)
        )

        table: dict[str, CriterionConfig] = {
            "Gender Policy": CriterionConfig(
                settings.weight_gender_policy, criteria.gender_policy_fraction
            ),
            "Stay Length": CriterionConfig(
                settings.weight_stay_length, criteria.stay_length_fraction
            ),
            "Location": CriterionConfig(
                settings.weight_location,
                criteria.location_fraction(
                    near_km=settings.location_near_km,
                    cutoff_km=settings.location_cutoff_km,
                ),
            ),
            "Pets": CriterionConfig(settings.weight_pets, criteria.pets_fraction),
            "Security": CriterionConfig(settings.weight_security, criteria.security_fraction),
            "Curfew": CriterionConfig(settings.weight_curfew, criteria.curfew_fraction),
            "Communal Living": CriterionConfig(
                settings.weight_communal_living, criteria.communal_living_fraction
            ),
            "Smoking": CriterionConfig(settings.weight_smoking, criteria.smoking_fraction),
            "Housing Benefit": CriterionConfig(
                settings.weight_housing_benefit, criteria.housing_benefit_fraction
            ),
            "Local Connection": CriterionConfig(
                settings.weight_local_connection, criteria.local_connection_fraction
            ),
            "Religion": CriterionConfig(settings.weight_religion, criteria.religion_fraction),
        }
        for need in SupportNeed:
            table[need.value] = CriterionConfig(
                settings.weight_support_service,
                criteria.support_service_fraction(need),
            )

        return cls(gates=gates, criteria=table)
