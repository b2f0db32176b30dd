"""Centralized configuration for tabular-search using Pydantic Settings."""

from typing import Literal

from pydantic import Field, model_validator
from pydantic_settings import BaseSettings, SettingsConfigDict


class Settings(BaseSettings):
    """Strictly typed engine configuration loaded from environment variables.

    Every knob has a default matching the engine's documented behavior, so an
    empty environment reproduces the reference ranking exactly.
    """

    model_config = SettingsConfigDict(
        env_file=".env",
        env_file_encoding="utf-8",
        case_sensitive=False,
        validate_default=True,
        extra="ignore",
    )

    # Ranking
    search_max_results: int = Field(default=20, ge=1, description="Result count used when the caller passes none")
    search_min_score: float = Field(
        default=0.01,
        ge=0.0,
        description="Rows must score strictly above this value to be returned",
    )

    # Fuzzy matching
    fuzzy_weight: float = Field(
        default=0.3,
        ge=0.0,
        le=1.0,
        description="Multiplier applied to the fuzzy match score before blending with cosine similarity",
    )
    fuzzy_max_edit_distance: int = Field(
        default=2,
        ge=0,
        description="Largest Levenshtein distance that still counts as a fuzzy term match",
    )

    # Field weighting
    default_title_weight: float = Field(default=2.0, gt=0.0, description="Weight of the title field when unset")
    default_column_weight: float = Field(default=1.0, gt=0.0, description="Weight of any other field when unset")

    # Tokenization
    min_token_length: int = Field(
        default=3,
        ge=1,
        description="Shortest whitespace token kept for space-delimited scripts",
    )
    prefix_length: int = Field(default=3, ge=1, description="Length of the prefix stub emitted during expansion")
    ngram_sizes: str = Field(default="2,3", description="Comma-separated n-gram sizes for unsegmented scripts")

    # Presentation
    highlight_style: Literal["html", "plain"] = Field(
        default="html",
        description="Highlight markup: html for <mark>term</mark>, plain for [[term]]",
    )

    # Logging
    log_level: str = Field(default="info", description="Logging level")
    log_json: bool = Field(default=True, description="Emit structured JSON logs")

    @model_validator(mode="after")
    def _check_ngram_sizes(self) -> "Settings":
        raw_sizes = [part.strip() for part in self.ngram_sizes.split(",") if part.strip()]
        if not raw_sizes:
            raise ValueError("NGRAM_SIZES must list at least one n-gram size (e.g. '2,3').")
        for raw in raw_sizes:
            if not raw.isdigit() or int(raw) < 1:
                raise ValueError(f"NGRAM_SIZES entries must be positive integers, got {raw!r}.")
        return self

    def get_ngram_sizes(self) -> tuple[int, ...]:
        """Get n-gram sizes in declaration order."""
        return tuple(int(part.strip()) for part in self.ngram_sizes.split(",") if part.strip())
