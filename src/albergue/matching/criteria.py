"""
Criterios de puntaje.

Cada función de comparación devuelve la fracción del puntaje máximo que
obtiene el albergue (0.0 a 1.0), o None cuando el criterio no aplica al
usuario. Un criterio que no aplica no suma al numerador ni al denominador.
"""

from typing import Callable, Optional

from albergue.matching.geo import extract_city, haversine_km
from albergue.models import (
    LocalConnectionPolicy,
    PetPolicy,
    PetSize,
    ShelterCandidate,
    SupportNeed,
    UserProfile,
)

ComparisonFn = Callable[[UserProfile, ShelterCandidate], Optional[float]]

UNKNOWN_POLICY = 0.5


def gender_policy_fraction(user: UserProfile, shelter: ShelterCandidate) -> Optional[float]:
    # El gate ya garantizó compatibilidad; el criterio es solo explicativo
    return 1.0


def stay_length_fraction(user: UserProfile, shelter: ShelterCandidate) -> Optional[float]:
    if user.desired_stay_type is None:
        return 0.0
    if shelter.max_stay_length.nights >= user.desired_stay_type.nights:
        return 1.0
    return 0.5


def location_fraction(near_km: float, cutoff_km: float) -> ComparisonFn:
    """
    Puntaje por cercanía.

    Con coordenadas: completo hasta near_km, decrece linealmente y llega a 0
    en cutoff_km. Sin coordenadas: completo si coincide la ciudad.
    """

    def _compare(user: UserProfile, shelter: ShelterCandidate) -> Optional[float]:
        if user.location is not None and shelter.location is not None:
            distance = haversine_km(user.location, shelter.location)
            if distance <= near_km:
                return 1.0
            if distance >= cutoff_km:
                return 0.0
            return (cutoff_km - distance) / (cutoff_km - near_km)

        user_city = extract_city(user.locality)
        shelter_city = extract_city(shelter.locality)
        if user_city is None or shelter_city is None:
            return 0.0
        return 1.0 if user_city == shelter_city else 0.0

    return _compare


def pets_fraction(user: UserProfile, shelter: ShelterCandidate) -> Optional[float]:
    if not user.has_pets:
        return None
    if shelter.pet_policy is PetPolicy.ALL_PETS_ALLOWED:
        return 1.0
    if shelter.pet_policy is PetPolicy.SMALL_PETS_ALLOWED:
        return 0.0 if user.pet_size is PetSize.LARGE else 0.5
    return 0.0


def _offered(value: Optional[bool]) -> float:
    if value is None:
        return UNKNOWN_POLICY
    return 1.0 if value else 0.0


def security_fraction(user: UserProfile, shelter: ShelterCandidate) -> Optional[float]:
    if user.needs_security is None:
        return None
    if not user.needs_security:
        return 1.0
    return _offered(shelter.has_security)


def curfew_fraction(user: UserProfile, shelter: ShelterCandidate) -> Optional[float]:
    if user.has_curfew_tolerance is None:
        return None
    if user.has_curfew_tolerance:
        return 1.0
    return _offered(None if shelter.has_curfew is None else not shelter.has_curfew)


def communal_living_fraction(user: UserProfile, shelter: ShelterCandidate) -> Optional[float]:
    if user.accepts_communal_living is None:
        return None
    if user.accepts_communal_living:
        return 1.0
    return _offered(None if shelter.communal_living is None else not shelter.communal_living)


def smoking_fraction(user: UserProfile, shelter: ShelterCandidate) -> Optional[float]:
    if user.is_smoker is None:
        return None
    if shelter.smoking_allowed is None:
        return UNKNOWN_POLICY
    return 1.0 if shelter.smoking_allowed == user.is_smoker else 0.0


def housing_benefit_fraction(user: UserProfile, shelter: ShelterCandidate) -> Optional[float]:
    if user.has_housing_benefit is None:
        return None
    if not user.has_housing_benefit:
        return 1.0
    return _offered(shelter.housing_benefit_accepted)


_LOCAL_CONNECTION_FRACTION = {
    LocalConnectionPolicy.NOT_REQUIRED: 1.0,
    LocalConnectionPolicy.PREFERRED: 0.5,
    LocalConnectionPolicy.REQUIRED: 0.0,
}


def local_connection_fraction(user: UserProfile, shelter: ShelterCandidate) -> Optional[float]:
    if user.has_local_connection is None:
        return None
    if user.has_local_connection:
        return 1.0
    if shelter.local_connection is None:
        return UNKNOWN_POLICY
    return _LOCAL_CONNECTION_FRACTION[shelter.local_connection]


def religion_fraction(user: UserProfile, shelter: ShelterCandidate) -> Optional[float]:
    if user.religion is None:
        return None
    if shelter.allows_all_religions is None:
        return UNKNOWN_POLICY
    if shelter.allows_all_religions:
        return 1.0
    return 1.0 if user.religion.lower() in shelter.allowed_religions else 0.0


def support_service_fraction(need: SupportNeed) -> ComparisonFn:
    """Criterio para una necesidad de apoyo: solo aplica si el usuario la tiene."""

    def _compare(user: UserProfile, shelter: ShelterCandidate) -> Optional[float]:
        if need not in user.support_needs:
            return None
        return 1.0 if need in shelter.support_services else 0.0

    return _compare
