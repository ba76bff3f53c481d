"""
Configuration module - loads all env vars using pydantic-settings.
This is the SINGLE SOURCE OF TRUTH for all config values.
"""

import math
from functools import lru_cache

from pydantic import model_validator
from pydantic_settings import BaseSettings, SettingsConfigDict

from talentflow.services.matching_service import (
    MATCH_WEIGHT, RESUME_WEIGHT, DENSITY_WEIGHT, ScoreWeights
)


class Settings(BaseSettings):
    # MongoDB
    mongodb_uri: str = "mongodb://localhost:27017"
    mongodb_db: str = "talentflow"

    # Ranking policy (final score weights, must sum to 1.0)
    match_weight: float = MATCH_WEIGHT
    resume_weight: float = RESUME_WEIGHT
    density_weight: float = DENSITY_WEIGHT

    # Uploads
    max_upload_size_mb: int = 5

    # Logging
    log_level: str = "INFO"
    log_json: bool = False

    # App
    debug: bool = True

    @model_validator(mode="after")
    def check_weights(self):
        total = self.match_weight + self.resume_weight + self.density_weight
        if not math.isclose(total, 1.0, abs_tol=1e-9):
            raise ValueError(f"Ranking weights must sum to 1.0, got {total}")
        return self

    @property
    def score_weights(self) -> ScoreWeights:
        """Ranking weights as passed to the scoring functions"""
        return ScoreWeights(
            match=self.match_weight,
            resume=self.resume_weight,
            density=self.density_weight
        )

    # Pydantic v2 config
    model_config = SettingsConfigDict(
        env_file=".env",
        env_file_encoding="utf-8"
    )


@lru_cache()
def get_settings() -> Settings:
    return Settings()
