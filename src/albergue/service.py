"""
Servicio de matching de albergues.

Une el formulario de intake, el store de albergues y el matcher. El
matcher no hace I/O: toda la carga de datos ocurre acá.
"""

from typing import Any, Mapping, Optional, Protocol, Sequence

import structlog

from albergue.matching import ShelterMatcher
from albergue.models import MatchResult, UserProfile

logger = structlog.get_logger()


class ShelterProvider(Protocol):
    def get_all(self) -> list[dict[str, Any]]: ...


class IntakeProvider(Protocol):
    def get_by_email(self, email: str) -> Optional[dict]: ...


class ShelterMatchingService:
    """
    Orquesta una corrida de matching.

    Flujo:
    1. Parsear el intake (IntakeValidationError si falta el género)
    2. Cargar el set completo de albergues (StoreError si el store falla)
    3. Matchear y rankear
    """

    def __init__(
        self,
        shelters: ShelterProvider,
        matcher: Optional[ShelterMatcher] = None,
        intakes: Optional[IntakeProvider] = None,
    ):
        self.shelters = shelters
        self.matcher = matcher or ShelterMatcher.from_settings()
        self.intakes = intakes

    def find_matches(self, intake: Mapping[str, Any]) -> list[MatchResult]:
        """
        Matchea un formulario de intake contra todos los albergues.

        Raises:
            IntakeValidationError: Datos del usuario inválidos
            StoreError: El store de albergues no respondió
        """
        user = UserProfile.from_intake(intake, today=self.matcher.today())
        candidates = self.shelters.get_all()
        matches = self.matcher.match_all(user, candidates)
        logger.info(
            "Matches encontrados",
            gender=user.gender.value,
            candidates=len(candidates),
            matches=len(matches),
        )
        return matches

    def find_matches_for_email(self, email: str) -> Optional[list[MatchResult]]:
        """
        Matchea el formulario guardado de un usuario.

        Returns:
            Lista de matches, o None si no hay formulario para ese email
        """
        if self.intakes is None:
            raise RuntimeError("No intake repository configured")
        form = self.intakes.get_by_email(email)
        if form is None:
            logger.info("Formulario no encontrado", email=email)
            return None
        return self.find_matches(form)

    @staticmethod
    def build_response(
        matches: Sequence[MatchResult],
        limit: Optional[int] = None,
    ) -> dict[str, Any]:
        """Payload de éxito: {'success': True, 'matches': [...]}."""
        if limit is not None:
            matches = matches[:limit]
        return {"success": True, "matches": [m.to_dict() for m in matches]}
