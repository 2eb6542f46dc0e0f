"""Centralized configuration for bookmark-search using Pydantic Settings."""

from pydantic import BaseModel, ConfigDict, Field, model_validator
from pydantic_settings import BaseSettings, SettingsConfigDict

from bookmark_search.search.weights import FieldWeightScheme


class MatchConfig(BaseModel):
    """Tolerance parameters for the approximate matcher.

    ``location`` is where in a field a match is expected to start and
    ``distance`` how quickly the score decays as a match drifts away from it
    (``distance=0`` only accepts matches exactly at ``location``).
    ``threshold`` bounds the bitap search: alignments scoring worse are never
    fully evaluated.
    """

    model_config = ConfigDict(frozen=True, extra="forbid")

    location: int = Field(default=0, ge=0, description="Expected match start position")
    distance: int = Field(default=100, ge=0, description="Positional drift that costs one full score point")
    threshold: float = Field(default=0.4, ge=0.0, le=1.0, description="Worst alignment score still searched")
    max_pattern_length: int = Field(default=32, gt=0, description="Queries are truncated to this many characters")
    case_sensitive: bool = Field(default=False, description="Match case exactly")
    tokenize: bool = Field(default=False, description="Match whitespace-separated query tokens independently")


class Settings(BaseSettings):
    """Strictly typed configuration loaded from ``BOOKMARK_SEARCH_*`` environment variables."""

    model_config = SettingsConfigDict(
        env_prefix="BOOKMARK_SEARCH_",
        env_file=".env",
        env_file_encoding="utf-8",
        case_sensitive=False,
        validate_default=True,
        extra="ignore",
    )

    # Matching
    location: int = Field(default=0, ge=0)
    distance: int = Field(default=100, ge=0)
    threshold: float = Field(default=0.4, ge=0.0, le=1.0)
    max_pattern_length: int = Field(default=32, gt=0)
    case_sensitive: bool = False
    tokenize: bool = False

    # Ranking
    relevance_cutoff: float = Field(
        default=0.5,
        gt=0.0,
        le=1.0,
        description="Results scoring at or above this value are dropped from search output",
    )
    title_weight: float = Field(default=0.6, ge=0.0)
    url_weight: float = Field(default=0.4, ge=0.0)

    # Logging
    log_level: str = Field(default="info", description="Logging level")
    log_json: bool = Field(default=True, description="Emit structured JSON logs")

    @model_validator(mode="after")
    def _check_weights(self) -> "Settings":
        if self.title_weight + self.url_weight <= 0:
            raise ValueError("At least one of TITLE_WEIGHT or URL_WEIGHT must be positive")
        return self

    def match_config(self) -> MatchConfig:
        """Build the matcher configuration from these settings."""
        return MatchConfig(
            location=self.location,
            distance=self.distance,
            threshold=self.threshold,
            max_pattern_length=self.max_pattern_length,
            case_sensitive=self.case_sensitive,
            tokenize=self.tokenize,
        )

    def weight_scheme(self) -> FieldWeightScheme:
        return FieldWeightScheme.from_pairs((("title", self.title_weight), ("url", self.url_weight)))
