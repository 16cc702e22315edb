import pytest

from albergue.database import create_supabase_client, repositories
from albergue.database.repositories import IntakeRepository, ShelterRepository
from albergue.errors import StoreError


def test_get_all_reads_every_page(fake_supabase, make_shelter, monkeypatch):
    monkeypatch.setattr(repositories, "PAGE_SIZE", 2)
    client = fake_supabase(shelters=[make_shelter(f"s{i}") for i in range(5)])
    repo = ShelterRepository(client=client, retry_attempts=1)

    shelters = repo.get_all()

    assert [s["_id"] for s in shelters] == ["s0", "s1", "s2", "s3", "s4"]
    assert client.tables["shelters"].calls == 3


def test_get_all_empty_store(fake_supabase):
    repo = ShelterRepository(client=fake_supabase(shelters=[]), retry_attempts=1)
    assert repo.get_all() == []


def test_store_failure_raises_store_error(fake_supabase):
    client = fake_supabase(shelters=[])
    client.tables["shelters"].failures = 1
    repo = ShelterRepository(client=client, retry_attempts=1)

    with pytest.raises(StoreError):
        repo.get_all()


def test_transient_failure_is_retried(fake_supabase, make_shelter):
    client = fake_supabase(shelters=[make_shelter("s1")])
    client.tables["shelters"].failures = 1
    repo = ShelterRepository(client=client, retry_attempts=2)

    assert len(repo.get_all()) == 1
    assert client.tables["shelters"].calls == 2


def test_intake_lookup_normalises_email(fake_supabase):
    client = fake_supabase(user_forms=[{"email": "ana@example.com", "gender": "Female"}])
    repo = IntakeRepository(client=client, retry_attempts=1)

    assert repo.get_by_email("  Ana@Example.com ")["gender"] == "Female"
    assert repo.get_by_email("other@example.com") is None


def test_intake_upsert_replaces_by_email(fake_supabase):
    client = fake_supabase(user_forms=[{"email": "ana@example.com", "gender": "Female"}])
    repo = IntakeRepository(client=client, retry_attempts=1)

    saved = repo.upsert({"email": "ANA@example.com", "gender": "Non-binary"})

    assert saved["email"] == "ana@example.com"
    assert "updated_at" in saved
    assert client.tables["user_forms"].rows == [saved]


def test_intake_upsert_requires_email(fake_supabase):
    repo = IntakeRepository(client=fake_supabase(), retry_attempts=1)

    with pytest.raises(ValueError):
        repo.upsert({"gender": "Female"})


def test_client_requires_credentials(settings):
    with pytest.raises(ValueError):
        create_supabase_client(settings.model_copy(update={"supabase_url": None}))
