"""
Script para correr el matching desde la línea de comandos.

Lee un formulario de intake (JSON) y lo matchea contra los albergues del
store, o contra un archivo JSON local si se pasa --shelters.

Uso:
    python -m albergue.scripts.run_matching --profile intake.json
    python -m albergue.scripts.run_matching --profile intake.json --shelters shelters.json --limit 5
"""

import argparse
import json
import sys
from pathlib import Path
from typing import Any

import structlog

from albergue.database import ShelterRepository
from albergue.errors import IntakeValidationError, StoreError
from albergue.logging_config import configure_logging
from albergue.matching import ShelterMatcher
from albergue.service import ShelterMatchingService

configure_logging()
logger = structlog.get_logger()


class JsonShelterFile:
    """Provee albergues desde un archivo JSON (lista o {'shelters': [...]})."""

    def __init__(self, path: Path):
        self.path = path

    def get_all(self) -> list[dict[str, Any]]:
        try:
            data = json.loads(self.path.read_text(encoding="utf-8"))
        except (OSError, ValueError) as e:
            raise StoreError(f"could not read {self.path}: {e}") from e

        if isinstance(data, dict):
            data = data.get("shelters", [])
        if not isinstance(data, list):
            raise StoreError(f"{self.path} must contain a list of shelters")
        return data


def load_profile(path: Path) -> dict[str, Any]:
    """
    Lee el intake desde un archivo JSON.

    Raises:
        IntakeValidationError: Si el archivo no es un objeto JSON válido
        OSError: Si el archivo no se puede leer
    """
    text = path.read_text(encoding="utf-8")
    try:
        data = json.loads(text)
    except ValueError as e:
        raise IntakeValidationError(f"Intake form is not valid JSON: {e}") from e
    if not isinstance(data, dict):
        raise IntakeValidationError("Intake form must be a JSON object")
    return data


def build_service(shelters_path=None) -> ShelterMatchingService:
    if shelters_path is not None:
        provider = JsonShelterFile(shelters_path)
    else:
        provider = ShelterRepository()
    return ShelterMatchingService(shelters=provider, matcher=ShelterMatcher.from_settings())


def main():
    """Entry point del script."""
    parser = argparse.ArgumentParser(description="Matching de albergues para un intake")
    parser.add_argument("--profile", type=Path, required=True, help="Intake en JSON")
    parser.add_argument("--shelters", type=Path, default=None, help="Albergues en JSON (opcional)")
    parser.add_argument("--limit", type=int, default=None, help="Máximo de resultados")
    args = parser.parse_args()

    logger.info("Iniciando matching...", profile=str(args.profile))

    try:
        profile = load_profile(args.profile)
        service = build_service(args.shelters)
        matches = service.find_matches(profile)
    except IntakeValidationError as e:
        logger.error("Intake inválido", error=str(e))
        print(json.dumps({"success": False, "message": str(e)}))
        sys.exit(2)
    except (StoreError, OSError, ValueError) as e:
        logger.error("Error en matching", error=str(e))
        print(json.dumps({"success": False, "message": "Failed to find matching shelters"}))
        sys.exit(1)

    print(json.dumps(service.build_response(matches, limit=args.limit), indent=2, ensure_ascii=False))
    sys.exit(0)


if __name__ == "__main__":
    main()
