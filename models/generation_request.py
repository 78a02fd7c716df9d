"""Generation request: target class, constraint block and preference hints."""

from pydantic import BaseModel, Field


class SchedulingConstraints(BaseModel):
    """Constraint block forwarded to the remote generator."""

    max_periods_per_day: int = Field(8, ge=1, le=12)
    break_duration: int = Field(15, ge=0)          # minutes
    nep_compliance_strict: bool = True
    multidisciplinary_sessions: bool = True
    co_curricular_mandatory: bool = True


class SchedulingPreferences(BaseModel):
    """Subject-name hints (not ids)."""

    morning_subjects: list[str] = Field(
        default_factory=lambda: ["Mathematics", "Science", "English"])
    afternoon_subjects: list[str] = Field(
        default_factory=lambda: ["Art Education", "Physical Education", "Music"])
    avoid_consecutive: list[str] = Field(
        default_factory=lambda: ["Mathematics", "Physics"])


class GenerationRequest(BaseModel):
    """Everything a generation run needs besides the catalog."""

    school_id: str = "default-school"
    class_id: str = "default-class"
    constraints: SchedulingConstraints = Field(default_factory=SchedulingConstraints)
    preferences: SchedulingPreferences = Field(default_factory=SchedulingPreferences)
