import json
from datetime import date
from pathlib import Path
from types import SimpleNamespace

import pytest

from albergue.config import Settings
from albergue.matching import MatcherConfig, ShelterMatcher

# Path to tests/fixtures directory
FIXTURES_DIR = Path(__file__).parent / "fixtures"

TODAY = date(2025, 6, 1)


@pytest.fixture
def fixtures_dir() -> Path:
    return FIXTURES_DIR


@pytest.fixture
def load_json(fixtures_dir):
    """
    Fixture that returns a function: load_json("file.json") -> dict | list
    """
    def _load(name: str):
        return json.loads((fixtures_dir / name).read_text(encoding="utf-8"))
    return _load


@pytest.fixture
def settings() -> Settings:
    # Ignore any local .env so weights are the defaults
    return Settings(_env_file=None)


@pytest.fixture
def matcher(settings) -> ShelterMatcher:
    return ShelterMatcher(
        config=MatcherConfig.from_settings(settings),
        today=lambda: TODAY,
    )


@pytest.fixture
def make_intake():
    """
    Fixture that returns a function: make_intake(**answers) -> dict
    Defaults describe an adult woman looking for a short stay in London.
    """
    def _make(**overrides) -> dict:
        form = {
            "gender": "Female",
            "dob": "1990-05-01",
            "groupType": "Just me",
            "shelterType": "Short-term (few days/weeks)",
            "location": "Camden, London",
        }
        form.update(overrides)
        return {k: v for k, v in form.items() if v is not None}
    return _make


@pytest.fixture
def make_shelter():
    """
    Fixture that returns a function: make_shelter(id, **fields) -> dict
    Builds a raw shelter document as stored in the shelters table.
    """
    def _make(shelter_id: str = "s1", **overrides) -> dict:
        doc = {
            "_id": shelter_id,
            "shelterName": f"Shelter {shelter_id}",
            "location": "12 High Street, London",
            "genderPolicy": "All Genders",
            "maxStayLength": "Up to 3 months",
            "petPolicy": "No pets allowed",
            "hasFamily": False,
            "acceptsCouples": False,
        }
        doc.update(overrides)
        return {k: v for k, v in doc.items() if v is not None}
    return _make


class FakeQuery:
    """Query builder con la misma cadena que usa supabase-py."""

    def __init__(self, table: "FakeTable"):
        self.table = table
        self._filters: list[tuple[str, object]] = []
        self._range = None
        self._limit = None
        self._upsert = None

    def select(self, *_):
        return self

    def eq(self, column, value):
        self._filters.append((column, value))
        return self

    def range(self, start, end):
        self._range = (start, end)
        return self

    def limit(self, n):
        self._limit = n
        return self

    def upsert(self, data, on_conflict=None):
        self._upsert = (data, on_conflict)
        return self

    def execute(self):
        self.table.calls += 1
        if self.table.failures > 0:
            self.table.failures -= 1
            raise ConnectionError("store unavailable")

        if self._upsert is not None:
            data, key = self._upsert
            self.table.rows = [r for r in self.table.rows if r.get(key) != data.get(key)]
            self.table.rows.append(data)
            return SimpleNamespace(data=[data])

        rows = [
            r for r in self.table.rows
            if all(r.get(col) == val for col, val in self._filters)
        ]
        if self._range is not None:
            start, end = self._range
            rows = rows[start:end + 1]
        if self._limit is not None:
            rows = rows[: self._limit]
        return SimpleNamespace(data=rows)


class FakeTable:
    def __init__(self, rows=None, failures: int = 0):
        self.rows = list(rows or [])
        self.failures = failures
        self.calls = 0


class FakeSupabase:
    """Cliente en memoria: {nombre_tabla: FakeTable}."""

    def __init__(self, **tables):
        self.tables = {name: FakeTable(rows) for name, rows in tables.items()}

    def table(self, name: str):
        self.tables.setdefault(name, FakeTable())
        return FakeQuery(self.tables[name])


@pytest.fixture
def fake_supabase():
    return FakeSupabase
