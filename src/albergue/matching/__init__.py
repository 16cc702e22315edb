"""
Motor de matching.

Combina gates hard y criterios ponderados para rankear los albergues
compatibles con cada usuario.
"""

from albergue.matching.engine import ShelterMatcher, percentage_match
from albergue.matching.rules import CriterionConfig, Gate, MatcherConfig

__all__ = [
    "ShelterMatcher",
    "percentage_match",
    "MatcherConfig",
    "CriterionConfig",
    "Gate",
]
