"""
Motor de matching entre usuarios y albergues.

Implementa:
- Gates: descartan albergues que no cumplen criterios absolutos
- Criterios: puntúan la compatibilidad de los albergues elegibles
- Ranking: orden estable por porcentaje de match
"""

import math
from concurrent.futures import ThreadPoolExecutor
from datetime import date
from typing import Any, Callable, Iterable, Mapping, Optional, Sequence, Union

import structlog
from pydantic import ValidationError

from albergue.config import Settings, get_settings
from albergue.matching.rules import MatcherConfig
from albergue.models import (
    MatchDetail,
    MatchResult,
    ShelterCandidate,
    ShelterInfo,
    UserProfile,
)

logger = structlog.get_logger()

CandidateInput = Union[ShelterCandidate, Mapping[str, Any]]


def percentage_match(details: Sequence[MatchDetail]) -> int:
    """
    Porcentaje entero 0-100 sobre los criterios evaluados.

    Redondeo half-up. Sin puntaje máximo posible el match es completo.
    """
    total_max = sum(d.max_score for d in details)
    if total_max <= 0:
        return 100
    raw = 100 * sum(d.score for d in details) / total_max
    return max(0, min(100, int(math.floor(raw + 0.5))))


class ShelterMatcher:
    """
    Matcher puro: sin I/O ni estado mutable compartido.

    Flujo por candidato:
    1. Validar el documento (malformado = se descarta y se loguea)
    2. Aplicar los gates en orden: el primero que falla excluye el albergue
    3. Puntuar los criterios que aplican al usuario
    4. Calcular percentage_match sobre los criterios evaluados
    """

    def __init__(
        self,
        config: Optional[MatcherConfig] = None,
        today: Optional[Callable[[], date]] = None,
        max_workers: int = 1,
        parallel_threshold: int = 200,
    ):
        self.config = config or MatcherConfig.from_settings()
        self._today = today or date.today
        self.max_workers = max_workers
        self.parallel_threshold = parallel_threshold

    @classmethod
    def from_settings(cls, settings: Optional[Settings] = None) -> "ShelterMatcher":
        settings = settings or get_settings()
        return cls(
            config=MatcherConfig.from_settings(settings),
            max_workers=settings.match_max_workers,
            parallel_threshold=settings.match_parallel_threshold,
        )

    def today(self) -> date:
        """Día de evaluación (edad y validación de la fecha de nacimiento)."""
        return self._today()

    def evaluate(self, user: UserProfile, shelter: CandidateInput) -> Optional[MatchResult]:
        """
        Evalúa un albergue para un usuario.

        Returns:
            MatchResult, o None si el albergue no es elegible o está malformado
        """
        candidate = self._coerce(shelter)
        if candidate is None:
            return None
        return self._evaluate_candidate(user, candidate, self._today())

    def match_all(
        self,
        user: UserProfile,
        shelters: Iterable[CandidateInput],
    ) -> list[MatchResult]:
        """
        Evalúa todos los candidatos y devuelve los elegibles rankeados.

        Orden: percentage_match descendente; empates conservan el orden
        original de los candidatos.
        """
        today = self._today()

        candidates: list[ShelterCandidate] = []
        total = 0
        for shelter in shelters:
            total += 1
            candidate = self._coerce(shelter)
            if candidate is not None:
                candidates.append(candidate)

        def _run(candidate: ShelterCandidate) -> Optional[MatchResult]:
            return self._evaluate_candidate(user, candidate, today)

        if self.max_workers > 1 and len(candidates) >= self.parallel_threshold:
            # map() devuelve en orden de entrada y espera a todos
            with ThreadPoolExecutor(max_workers=self.max_workers) as pool:
                results = list(pool.map(_run, candidates))
        else:
            results = [_run(c) for c in candidates]

        matches = [r for r in results if r is not None]
        matches.sort(key=lambda m: m.percentage_match, reverse=True)

        logger.info(
            "Matching completado",
            candidates=total,
            skipped=total - len(candidates),
            eligible=len(matches),
        )
        return matches

    def _evaluate_candidate(
        self,
        user: UserProfile,
        shelter: ShelterCandidate,
        today: date,
    ) -> Optional[MatchResult]:
        for gate in self.config.gates:
            if not gate.evaluate(user, shelter, today):
                logger.debug("Albergue excluido", shelter_id=shelter.id, gate=gate.name)
                return None

        details = []
        for name, criterion in self.config.criteria.items():
            fraction = criterion.compare(user, shelter)
            if fraction is None:
                continue
            fraction = max(0.0, min(1.0, fraction))
            details.append(
                MatchDetail(
                    criterion=name,
                    score=round(fraction * criterion.max_score, 2),
                    max_score=criterion.max_score,
                )
            )

        return MatchResult(
            shelter_id=shelter.id,
            shelter_info=ShelterInfo.from_candidate(shelter),
            percentage_match=percentage_match(details),
            match_details=tuple(details),
        )

    def _coerce(self, shelter: CandidateInput) -> Optional[ShelterCandidate]:
        if isinstance(shelter, ShelterCandidate):
            return shelter
        if not isinstance(shelter, Mapping):
            logger.warning("Candidato ignorado", type=type(shelter).__name__)
            return None
        try:
            return ShelterCandidate.from_document(shelter)
        except ValidationError as e:
            logger.warning(
                "Albergue malformado descartado",
                shelter_id=str(shelter.get("id", shelter.get("_id"))),
                errors=e.error_count(),
            )
            return None
