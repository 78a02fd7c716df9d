"""Data model for a school subject (Pydantic v2)."""

from enum import Enum

from pydantic import BaseModel, ConfigDict, Field


class SubjectCategory(str, Enum):
    CORE = "core"
    ELECTIVE = "elective"
    VOCATIONAL = "vocational"
    ART_EDUCATION = "art_education"
    PHYSICAL_EDUCATION = "physical_education"
    VALUE_EDUCATION = "value_education"


class NepPriority(str, Enum):
    HIGH = "high"
    MEDIUM = "medium"
    LOW = "low"


# Placement order of the assignment engine: lower rank is placed first.
PRIORITY_RANK: dict[NepPriority, int] = {
    NepPriority.HIGH: 0,
    NepPriority.MEDIUM: 1,
    NepPriority.LOW: 2,
}


class Subject(BaseModel):
    """A subject as delivered by the catalog."""

    model_config = ConfigDict(frozen=True)

    id: str
    name: str                      # "Mathematics", "Art Education"
    code: str                      # "MATH", "ART"
    category: SubjectCategory
    credit_hours: int = Field(gt=0)
    nep_priority: NepPriority
    multidisciplinary: bool = False

    @property
    def name_token(self) -> str:
        """First word of the name in lower case ("Art Education" -> "art")."""
        parts = self.name.split()
        return parts[0].lower() if parts else ""

    @property
    def priority_rank(self) -> int:
        return PRIORITY_RANK[self.nep_priority]
