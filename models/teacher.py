"""Data model for a teacher (Pydantic v2)."""

from pydantic import BaseModel, ConfigDict, Field, field_validator


class Teacher(BaseModel):
    """A teacher as delivered by the catalog."""

    model_config = ConfigDict(frozen=True)

    id: str
    school_id: str
    name: str                                  # "Priya Sharma"
    email: str
    specialization: list[str] = []             # ordered tags, e.g. ["Mathematics", "Physics"]
    experience_years: int = Field(0, ge=0)
    nep_trained: bool = False

    @field_validator("specialization")
    @classmethod
    def _dedupe_specialization(cls, v: list[str]) -> list[str]:
        """Strips tags and drops empty or repeated ones, keeping the first occurrence."""
        seen: set[str] = set()
        result = []
        for tag in v:
            tag = tag.strip()
            key = tag.lower()
            if tag and key not in seen:
                seen.add(key)
                result.append(tag)
        return result
