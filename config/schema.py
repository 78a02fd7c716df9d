from pydantic import BaseModel, Field
from enum import Enum


class LogLevel(str, Enum):
    DEBUG = "DEBUG"
    INFO = "INFO"
    WARNING = "WARNING"
    ERROR = "ERROR"


# ─── REMOTE GENERATION ───

class RemoteGenerationConfig(BaseModel):
    """Connection to the OpenAI-compatible text-generation service."""
    # Off = always use the heuristic engine (no credentials needed)
    enabled: bool = Field(True,
        description="Use the remote generator before the heuristic fallback")
    # Chat-completions endpoint
    api_url: str = Field("https://api.openai.com/v1/chat/completions",
        description="Chat-completions endpoint")
    # Model identifier sent with every request
    model: str = Field("gpt-4",
        description="Model identifier")
    # System instruction of the single request
    system_prompt: str = Field(
        "You are an AI assistant specialized in creating NEP 2020 compliant "
        "school timetables. Answer with JSON only.",
        description="System instruction")
    # Low temperature: deterministic answers over creative ones
    temperature: float = Field(0.3, ge=0.0, le=1.0,
        description="Sampling temperature")
    # Generous ceiling, a full week for one class is a long JSON document
    max_tokens: int = Field(3000, ge=256, le=32000,
        description="Max output tokens")
    # Bounded wait; a timeout counts as transport failure
    timeout_seconds: float = Field(60.0, gt=0, le=600,
        description="Request timeout (seconds)")
    # Name of the environment variable holding the bearer token.
    # The token itself is never written to the config file.
    api_key_env: str = Field("OPENAI_API_KEY",
        description="Environment variable with the API key")


# ─── SCHEDULING ───

class SchedulingConfig(BaseModel):
    """Defaults for generation runs."""
    # Default target school / class of a run
    school_id: str = Field("default-school")
    class_id: str = Field("default-class")
    # Confidence stamped on heuristic entries (marks them as fallback output)
    heuristic_confidence: float = Field(0.75, ge=0.0, le=1.0,
        description="Confidence of heuristic entries")
    # Overall score of the report stub attached to heuristic results
    fallback_compliance_score: int = Field(75, ge=0, le=100,
        description="Score of the fallback report stub")
    # Local catalog snapshot (stand-in for the record store)
    catalog_path: str = Field("output/catalog.json",
        description="Catalog JSON file")
    # Directory for generated timetables and exports
    output_dir: str = Field("output",
        description="Output directory")


# ─── LOGGING ───

class LoggingConfig(BaseModel):
    """Log output of CLI and API."""
    level: LogLevel = Field(LogLevel.INFO)


# ─── OVERALL CONFIG ───

class AppConfig(BaseModel):
    """Complete application configuration."""
    # Name shown in CLI headers and exports
    school_name: str = Field("Demo School",
        description="Name of the school")
    remote: RemoteGenerationConfig = Field(default_factory=RemoteGenerationConfig)
    scheduling: SchedulingConfig = Field(default_factory=SchedulingConfig)
    logging: LoggingConfig = Field(default_factory=LoggingConfig)
