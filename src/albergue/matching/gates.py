"""
Filtros hard de elegibilidad.

Cada gate recibe (usuario, albergue, día de evaluación) y devuelve True si
el albergue sigue siendo elegible. Un solo False lo excluye del resultado.
"""

from datetime import date
from typing import Callable, Optional

from albergue.matching.geo import haversine_km
from albergue.models import (
    Gender,
    GenderPolicy,
    GroupType,
    PetPolicy,
    ShelterCandidate,
    UserProfile,
)

GateFn = Callable[[UserProfile, ShelterCandidate, date], bool]


def gender_policy_gate(user: UserProfile, shelter: ShelterCandidate, today: date) -> bool:
    if user.wants_women_only:
        # Solo albergues exclusivos para mujeres, nunca para usuarios varones
        return (
            shelter.gender_policy is GenderPolicy.WOMEN_ONLY
            and user.gender is not Gender.MALE
        )
    if shelter.gender_policy is GenderPolicy.MEN_ONLY:
        return user.gender is Gender.MALE
    if shelter.gender_policy is GenderPolicy.WOMEN_ONLY:
        return user.gender is Gender.FEMALE
    return True


def age_gate(user: UserProfile, shelter: ShelterCandidate, today: date) -> bool:
    age = user.age_on(today)
    if age is None:
        return True
    if shelter.min_age is not None and age < shelter.min_age:
        return False
    if shelter.max_age is not None and age > shelter.max_age:
        return False
    return True


def group_capacity_gate(user: UserProfile, shelter: ShelterCandidate, today: date) -> bool:
    if user.group_type is GroupType.FAMILY:
        if not shelter.accepts_families:
            return False
        if (
            shelter.max_family_size is not None
            and user.group_size is not None
            and user.group_size > shelter.max_family_size
        ):
            return False
    if user.group_type is GroupType.COUPLE and not shelter.accepts_couples:
        return False
    return True


def pets_gate(user: UserProfile, shelter: ShelterCandidate, today: date) -> bool:
    return not user.has_pets or shelter.pet_policy is not PetPolicy.NO_PETS


def wheelchair_gate(user: UserProfile, shelter: ShelterCandidate, today: date) -> bool:
    # Accesibilidad desconocida no alcanza
    return not user.needs_wheelchair_access or shelter.wheelchair_accessible is True


def travel_radius_gate(max_km: float) -> GateFn:
    """Excluye albergues a más de max_km cuando ambas coordenadas son conocidas."""

    def _check(user: UserProfile, shelter: ShelterCandidate, today: date) -> bool:
        if user.location is None or shelter.location is None:
            return True
        return haversine_km(user.location, shelter.location) <= max_km

    return _check


def default_gate_functions(max_travel_km: Optional[float] = None) -> list[tuple[str, GateFn]]:
    """Gates en orden de evaluación."""
    gates: list[tuple[str, GateFn]] = [
        ("Gender Policy", gender_policy_gate),
        ("Age", age_gate),
        ("Group Capacity", group_capacity_gate),
        ("Pets", pets_gate),
        ("Wheelchair Access", wheelchair_gate),
    ]
    if max_travel_km is not None:
        gates.append(("Travel Radius", travel_radius_gate(max_travel_km)))
    return gates
