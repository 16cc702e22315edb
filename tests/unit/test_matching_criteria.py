import pytest

from albergue.matching import criteria
from albergue.models import GeoPoint, ShelterCandidate, SupportNeed, UserProfile


def shelter(**fields) -> ShelterCandidate:
    base = {
        "id": "s1",
        "gender_policy": "All Genders",
        "max_stay_length": "Up to 3 months",
        "pet_policy": "No pets allowed",
    }
    base.update(fields)
    return ShelterCandidate(**base)


def user(**fields) -> UserProfile:
    return UserProfile(gender="Female", **fields)


@pytest.mark.parametrize(
    "stay_type, max_stay, expected",
    [
        ("Short-term (few days/weeks)", "Up to 3 months", 1.0),
        ("Long-term (months or more)", "No fixed limit", 1.0),
        ("Long-term (months or more)", "Up to 28 days", 0.5),
        ("Emergency (tonight)", "1 night only", 1.0),
        (None, "Up to 3 months", 0.0),
    ],
)
def test_stay_length(stay_type, max_stay, expected):
    fraction = criteria.stay_length_fraction(
        user(desired_stay_type=stay_type), shelter(max_stay_length=max_stay)
    )
    assert fraction == expected


def test_location_by_distance_decays_linearly():
    compare = criteria.location_fraction(near_km=5, cutoff_km=50)
    origin = GeoPoint(lat=51.5, lng=0.0)

    near = compare(user(location=origin), shelter(location=origin))
    far = compare(user(location=origin), shelter(location=GeoPoint(lat=53.5, lng=0.0)))
    mid = compare(user(location=origin), shelter(location=GeoPoint(lat=51.75, lng=0.0)))

    assert near == 1.0
    assert far == 0.0
    assert 0.0 < mid < 1.0


def test_location_falls_back_to_city_text():
    compare = criteria.location_fraction(near_km=5, cutoff_km=50)

    assert compare(user(locality="Hackney"), shelter(locality="1 Road, London")) == 1.0
    assert compare(user(locality="Leeds"), shelter(locality="1 Road, London")) == 0.0
    assert compare(user(), shelter(locality="1 Road, London")) == 0.0


@pytest.mark.parametrize(
    "pet_policy, pet_size, expected",
    [
        ("All pets allowed", "Large", 1.0),
        ("Small pets allowed", "Small", 0.5),
        ("Small pets allowed", "Large", 0.0),
    ],
)
def test_pets(pet_policy, pet_size, expected):
    fraction = criteria.pets_fraction(
        user(has_pets=True, pet_size=pet_size), shelter(pet_policy=pet_policy)
    )
    assert fraction == expected


def test_pets_skipped_without_pets():
    assert criteria.pets_fraction(user(), shelter(pet_policy="All pets allowed")) is None


@pytest.mark.parametrize(
    "compare, user_field, shelter_field",
    [
        (criteria.security_fraction, "needs_security", "has_security"),
        (criteria.curfew_fraction, "has_curfew_tolerance", "has_curfew"),
        (criteria.communal_living_fraction, "accepts_communal_living", "communal_living"),
        (criteria.smoking_fraction, "is_smoker", "smoking_allowed"),
    ],
)
def test_preference_criteria_skip_without_preference(compare, user_field, shelter_field):
    assert compare(user(), shelter(**{shelter_field: True})) is None
    assert compare(user(), shelter(**{shelter_field: False})) is None


def test_security_needed():
    needs = user(needs_security=True)

    assert criteria.security_fraction(needs, shelter(has_security=True)) == 1.0
    assert criteria.security_fraction(needs, shelter(has_security=False)) == 0.0
    assert criteria.security_fraction(needs, shelter()) == criteria.UNKNOWN_POLICY
    assert criteria.security_fraction(user(needs_security=False), shelter()) == 1.0


def test_curfew_only_penalises_users_who_cannot_follow_one():
    cannot = user(has_curfew_tolerance=False)

    assert criteria.curfew_fraction(cannot, shelter(has_curfew=True)) == 0.0
    assert criteria.curfew_fraction(cannot, shelter(has_curfew=False)) == 1.0
    assert criteria.curfew_fraction(user(has_curfew_tolerance=True), shelter(has_curfew=True)) == 1.0


def test_communal_living():
    refuses = user(accepts_communal_living=False)

    assert criteria.communal_living_fraction(refuses, shelter(communal_living=True)) == 0.0
    assert criteria.communal_living_fraction(refuses, shelter(communal_living=False)) == 1.0


def test_smoking_matches_policy():
    smoker = user(is_smoker=True)
    non_smoker = user(is_smoker=False)

    assert criteria.smoking_fraction(smoker, shelter(smoking_allowed=True)) == 1.0
    assert criteria.smoking_fraction(smoker, shelter(smoking_allowed=False)) == 0.0
    assert criteria.smoking_fraction(non_smoker, shelter(smoking_allowed=False)) == 1.0
    assert criteria.smoking_fraction(non_smoker, shelter()) == criteria.UNKNOWN_POLICY


def test_support_service():
    compare = criteria.support_service_fraction(SupportNeed.MEDICAL)
    needs = user(support_needs=frozenset({SupportNeed.MEDICAL}))

    assert compare(user(), shelter()) is None
    assert compare(needs, shelter()) == 0.0
    assert compare(needs, shelter(support_services=frozenset({SupportNeed.MEDICAL}))) == 1.0


def test_housing_benefit():
    claimant = user(has_housing_benefit=True)

    assert criteria.housing_benefit_fraction(user(), shelter(housing_benefit_accepted=False)) is None
    assert criteria.housing_benefit_fraction(claimant, shelter(housing_benefit_accepted=True)) == 1.0
    assert criteria.housing_benefit_fraction(claimant, shelter(housing_benefit_accepted=False)) == 0.0
    assert criteria.housing_benefit_fraction(claimant, shelter()) == criteria.UNKNOWN_POLICY
    assert criteria.housing_benefit_fraction(
        user(has_housing_benefit=False), shelter(housing_benefit_accepted=False)
    ) == 1.0


@pytest.mark.parametrize(
    "policy, expected",
    [
        ("Required", 0.0),
        ("Preferred", 0.5),
        ("Not required", 1.0),
        (None, criteria.UNKNOWN_POLICY),
    ],
)
def test_local_connection_without_connection(policy, expected):
    fraction = criteria.local_connection_fraction(
        user(has_local_connection=False), shelter(local_connection=policy)
    )
    assert fraction == expected


def test_local_connection_with_connection_or_unanswered():
    required = shelter(local_connection="Required")

    assert criteria.local_connection_fraction(user(has_local_connection=True), required) == 1.0
    assert criteria.local_connection_fraction(user(), required) is None


def test_religion():
    muslim = user(religion="Muslim")
    restricted = shelter(allows_all_religions=False, allowed_religions=frozenset({"muslim", "sikh"}))

    assert criteria.religion_fraction(user(), restricted) is None
    assert criteria.religion_fraction(muslim, restricted) == 1.0
    assert criteria.religion_fraction(user(religion="Jewish"), restricted) == 0.0
    assert criteria.religion_fraction(muslim, shelter(allows_all_religions=True)) == 1.0
    assert criteria.religion_fraction(muslim, shelter()) == criteria.UNKNOWN_POLICY
