"""
Enumeraciones del dominio y su parseo desde los textos del formulario.

Los valores de cada enum son los textos que muestran la UI y los
documentos del store, así la serialización queda compatible.
"""

from enum import Enum
from typing import Optional


def _norm(value) -> str:
    return " ".join(str(value).split()).strip().lower()


class Gender(str, Enum):
    MALE = "Male"
    FEMALE = "Female"
    NON_BINARY = "Non-binary"
    OTHER = "Other"

    @classmethod
    def parse(cls, value) -> Optional["Gender"]:
        if isinstance(value, cls):
            return value
        if value is None or _norm(value) == "":
            return None
        text = _norm(value)
        if text in ("male", "m", "man"):
            return cls.MALE
        if text in ("female", "f", "woman"):
            return cls.FEMALE
        if text.replace("-", "").replace(" ", "") == "nonbinary":
            return cls.NON_BINARY
        # "Other", "Prefer not to say", etc.
        return cls.OTHER


class GroupType(str, Enum):
    INDIVIDUAL = "Individual"
    COUPLE = "Couple"
    FAMILY = "Family"
    GROUP = "Group"

    @classmethod
    def parse(cls, value) -> "GroupType":
        if isinstance(value, cls):
            return value
        text = _norm(value) if value is not None else ""
        if "partner" in text or "couple" in text:
            return cls.COUPLE
        if "family" in text:
            return cls.FAMILY
        if "friend" in text or "relative" in text or "group" in text:
            return cls.GROUP
        return cls.INDIVIDUAL


class StayType(str, Enum):
    """Duración de estadía que busca el usuario."""

    EMERGENCY = "Emergency (tonight)"
    SHORT_TERM = "Short-term (few days/weeks)"
    MEDIUM_TERM = "Medium-term (1-3 months)"
    LONG_TERM = "Long-term (months or more)"

    @property
    def nights(self) -> int:
        """Noches mínimas que el albergue debe ofrecer para cubrir la estadía."""
        return _STAY_TYPE_NIGHTS[self]

    @classmethod
    def parse(cls, value) -> Optional["StayType"]:
        if isinstance(value, cls):
            return value
        if value is None:
            return None
        text = _norm(value)
        if text.startswith("emergency"):
            return cls.EMERGENCY
        if text.startswith("short"):
            return cls.SHORT_TERM
        if text.startswith("medium"):
            return cls.MEDIUM_TERM
        if text.startswith("long"):
            return cls.LONG_TERM
        return None


_STAY_TYPE_NIGHTS = {
    StayType.EMERGENCY: 1,
    StayType.SHORT_TERM: 7,
    StayType.MEDIUM_TERM: 90,
    StayType.LONG_TERM: 180,
}


class StayLength(str, Enum):
    """Estadía máxima que ofrece un albergue (categorías ordenadas)."""

    ONE_NIGHT = "1 night only"
    UP_TO_7_NIGHTS = "Up to 7 nights"
    UP_TO_28_DAYS = "Up to 28 days"
    UP_TO_3_MONTHS = "Up to 3 months"
    UP_TO_6_MONTHS = "Up to 6 months"
    UP_TO_12_MONTHS = "Up to 12 months"
    MORE_THAN_12_MONTHS = "More than 12 months"
    NO_FIXED_LIMIT = "No fixed limit"

    @property
    def nights(self) -> float:
        return _STAY_LENGTH_NIGHTS[self]

    @classmethod
    def parse(cls, value) -> Optional["StayLength"]:
        if isinstance(value, cls):
            return value
        if value is None:
            return None
        text = _norm(value)
        for member in cls:
            if member.value.lower() == text:
                return member
        return None


_STAY_LENGTH_NIGHTS = {
    StayLength.ONE_NIGHT: 1,
    StayLength.UP_TO_7_NIGHTS: 7,
    StayLength.UP_TO_28_DAYS: 28,
    StayLength.UP_TO_3_MONTHS: 90,
    StayLength.UP_TO_6_MONTHS: 180,
    StayLength.UP_TO_12_MONTHS: 365,
    StayLength.MORE_THAN_12_MONTHS: 730,
    StayLength.NO_FIXED_LIMIT: float("inf"),
}


class GenderPolicy(str, Enum):
    MEN_ONLY = "Men Only"
    WOMEN_ONLY = "Women Only"
    ALL_GENDERS = "All Genders"

    @classmethod
    def parse(cls, value) -> Optional["GenderPolicy"]:
        if isinstance(value, cls):
            return value
        if value is None:
            return None
        text = _norm(value)
        # "women" contiene "men": chequear primero
        if "women" in text or "female" in text:
            return cls.WOMEN_ONLY
        if "men" in text or "male" in text:
            return cls.MEN_ONLY
        if "all" in text or "any" in text or "mixed" in text:
            return cls.ALL_GENDERS
        return None


class PetPolicy(str, Enum):
    NO_PETS = "No pets allowed"
    SMALL_PETS_ALLOWED = "Small pets allowed"
    ALL_PETS_ALLOWED = "All pets allowed"

    @classmethod
    def parse(cls, value) -> Optional["PetPolicy"]:
        if isinstance(value, cls):
            return value
        if value is None:
            return None
        text = _norm(value)
        if "no pet" in text or "service animal" in text:
            return cls.NO_PETS
        if "small" in text or "case by case" in text:
            return cls.SMALL_PETS_ALLOWED
        if "pets allowed" in text or "pets welcome" in text:
            return cls.ALL_PETS_ALLOWED
        return None


class PetSize(str, Enum):
    SMALL = "Small"
    LARGE = "Large"

    @classmethod
    def parse(cls, value) -> Optional["PetSize"]:
        if isinstance(value, cls):
            return value
        if value is None:
            return None
        text = _norm(value)
        if text.startswith("small"):
            return cls.SMALL
        if text.startswith("large") or text.startswith("big"):
            return cls.LARGE
        return None


class LocalConnectionPolicy(str, Enum):
    """Exigencia de conexión local del albergue."""

    REQUIRED = "Required"
    PREFERRED = "Preferred"
    NOT_REQUIRED = "Not required"

    @classmethod
    def parse(cls, value) -> Optional["LocalConnectionPolicy"]:
        if isinstance(value, cls):
            return value
        if value is None or isinstance(value, bool):
            return {True: cls.REQUIRED, False: cls.NOT_REQUIRED}.get(value)
        text = _norm(value)
        if text.startswith("preferred"):
            return cls.PREFERRED
        if text.startswith("yes"):
            return cls.REQUIRED
        if text.startswith("no"):
            return cls.NOT_REQUIRED
        return None


class SupportNeed(str, Enum):
    """Necesidades de apoyo: cada una es un criterio de matching propio."""

    LGBTQ_FRIENDLY = "LGBTQ+ Friendly"
    MEDICAL = "Medical Support"
    MENTAL_HEALTH = "Mental Health Support"
    SUBSTANCE_USE = "Substance Use Support"
    DOMESTIC_ABUSE = "Domestic Abuse Support"
    CARE_LEAVER = "Care Leaver Support"
    VETERAN = "Veteran Support"
    FOOD = "Food Provision"
    BENEFITS_ADVICE = "Benefits Advice"
    NRPF = "NRPF Accepted"


def parse_preference(value) -> Optional[bool]:
    """
    Parsea una respuesta Yes/No del formulario.

    Returns:
        True / False, o None cuando el usuario no expresó preferencia
    """
    if value is None or isinstance(value, bool):
        return value
    text = _norm(value)
    if text.startswith(("no preference", "not sure", "prefer not")):
        return None
    if text.startswith("yes") or text.startswith("can manage") or text == "true":
        return True
    if text.startswith("no") or text == "false":
        return False
    return None


def parse_int(value) -> Optional[int]:
    """Entero desde string del formulario ('3', ' 4 ', 5.0). None si no parsea."""
    if value is None or isinstance(value, bool):
        return None
    try:
        return int(float(str(value).strip()))
    except (ValueError, TypeError, OverflowError):
        return None
