import pytest
from pydantic import ValidationError

from albergue.models import (
    GenderPolicy,
    LocalConnectionPolicy,
    MatchDetail,
    MatchResult,
    PetPolicy,
    ShelterCandidate,
    ShelterInfo,
    StayLength,
    SupportNeed,
)


def test_from_document_maps_policies(make_shelter):
    shelter = ShelterCandidate.from_document(
        make_shelter(
            "abc",
            genderPolicy="Women Only",
            maxStayLength="Up to 28 days",
            petPolicy="Small pets allowed",
            hasFamily=True,
            maxFamilySize="4",
            minAge="18",
            location_coordinates={"lat": 51.5, "lng": -0.12},
        )
    )

    assert shelter.id == "abc"
    assert shelter.name == "Shelter abc"
    assert shelter.gender_policy is GenderPolicy.WOMEN_ONLY
    assert shelter.max_stay_length is StayLength.UP_TO_28_DAYS
    assert shelter.pet_policy is PetPolicy.SMALL_PETS_ALLOWED
    assert shelter.accepts_families is True
    assert shelter.max_family_size == 4
    assert shelter.min_age == 18
    assert shelter.max_age is None
    assert shelter.location.lng == pytest.approx(-0.12)


def test_derived_flags_and_services(make_shelter):
    shelter = ShelterCandidate.from_document(
        make_shelter(
            accessibilityFeatures=["Wheelchair accessible", "Lift"],
            accommodationTypes=["Dormitory"],
            lgbtqFriendly="Yes",
            specializedGroups=["Veterans"],
            additionalServices=["Benefits advice"],
            foodType="Breakfast only",
            acceptNRPF="Yes",
        )
    )

    assert shelter.wheelchair_accessible is True
    assert shelter.communal_living is True
    assert shelter.support_services == {
        SupportNeed.LGBTQ_FRIENDLY,
        SupportNeed.VETERAN,
        SupportNeed.BENEFITS_ADVICE,
        SupportNeed.FOOD,
        SupportNeed.NRPF,
    }


def test_unknown_policies_stay_unknown(make_shelter):
    shelter = ShelterCandidate.from_document(make_shelter())

    assert shelter.wheelchair_accessible is None
    assert shelter.has_security is None
    assert shelter.smoking_allowed is None
    assert shelter.support_services == frozenset()


@pytest.mark.parametrize(
    "field, value",
    [
        ("genderPolicy", None),
        ("genderPolicy", "Whatever"),
        ("maxStayLength", "forever-ish"),
        ("petPolicy", None),
        ("_id", None),
    ],
)
def test_malformed_document_fails_validation(make_shelter, field, value):
    doc = make_shelter()
    if value is None:
        doc.pop(field)
    else:
        doc[field] = value

    with pytest.raises(ValidationError):
        ShelterCandidate.from_document(doc)


def test_women_only_is_not_read_as_men_only():
    assert GenderPolicy.parse("Women Only") is GenderPolicy.WOMEN_ONLY
    assert GenderPolicy.parse("Men Only") is GenderPolicy.MEN_ONLY
    assert GenderPolicy.parse("All Genders") is GenderPolicy.ALL_GENDERS


def test_match_result_serialises_with_camel_case(make_shelter):
    shelter = ShelterCandidate.from_document(make_shelter("s9"))
    result = MatchResult(
        shelter_id="s9",
        shelter_info=ShelterInfo.from_candidate(shelter),
        percentage_match=80,
        match_details=(MatchDetail(criterion="Gender Policy", score=10, max_score=10),),
    )

    data = result.to_dict()

    assert data["shelterId"] == "s9"
    assert data["percentageMatch"] == 80
    assert data["shelterInfo"]["_id"] == "s9"
    assert data["shelterInfo"]["shelterName"] == "Shelter s9"
    assert data["shelterInfo"]["genderPolicy"] == "All Genders"
    assert data["matchDetails"] == [
        {"criterion": "Gender Policy", "score": 10.0, "maxScore": 10.0}
    ]


def test_admission_requirements(make_shelter):
    shelter = ShelterCandidate.from_document(
        make_shelter(
            housingBenefitAccepted="Yes - with top-up payment",
            localConnectionRequired="Preferred but not essential",
            allowAllReligions="No",
            allowedReligions=["Hindu", "Sikh"],
        )
    )

    assert shelter.housing_benefit_accepted is True
    assert shelter.local_connection is LocalConnectionPolicy.PREFERRED
    assert shelter.allows_all_religions is False
    assert shelter.allowed_religions == {"hindu", "sikh"}


def test_religion_policy_from_admin_panel(make_shelter):
    shelter = ShelterCandidate.from_document(
        make_shelter(
            localConnectionRequired="Yes - strict requirement",
            religionPolicy={"allowAllReligions": "yes", "allowedReligions": []},
        )
    )

    assert shelter.local_connection is LocalConnectionPolicy.REQUIRED
    assert shelter.allows_all_religions is True
    assert shelter.housing_benefit_accepted is None
