from config.schema import (
    AppConfig,
    LoggingConfig,
    RemoteGenerationConfig,
    SchedulingConfig,
)
from models.generation_request import (
    GenerationRequest,
    SchedulingConstraints,
    SchedulingPreferences,
)


def default_app_config() -> AppConfig:
    """Default configuration: remote generation on, heuristic fallback at 0.75/75."""
    return AppConfig(
        school_name="Demo School",
        remote=RemoteGenerationConfig(),
        scheduling=SchedulingConfig(),
        logging=LoggingConfig(),
    )


def default_constraints() -> SchedulingConstraints:
    """Constraint block of the generator form.

    8 periods per day, 15 minute breaks, strict NEP compliance,
    multidisciplinary sessions and mandatory co-curricular time.
    """
    return SchedulingConstraints(
        max_periods_per_day=8,
        break_duration=15,
        nep_compliance_strict=True,
        multidisciplinary_sessions=True,
        co_curricular_mandatory=True,
    )


def default_preferences() -> SchedulingPreferences:
    """Morning: core subjects. Afternoon: art, PE, music."""
    return SchedulingPreferences(
        morning_subjects=["Mathematics", "Science", "English"],
        afternoon_subjects=["Art Education", "Physical Education", "Music"],
        avoid_consecutive=["Mathematics", "Physics"],
    )


def default_request(config: AppConfig | None = None) -> GenerationRequest:
    """Generation request for the configured default school and class."""
    config = config or default_app_config()
    return GenerationRequest(
        school_id=config.scheduling.school_id,
        class_id=config.scheduling.class_id,
        constraints=default_constraints(),
        preferences=default_preferences(),
    )
