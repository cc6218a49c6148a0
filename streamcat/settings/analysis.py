"""Analytics configuration settings.

Thresholds and policies for the aggregate queries.
"""

from pydantic import Field, field_validator
from pydantic_settings import BaseSettings, SettingsConfigDict

VALID_REPORT_FORMATS = frozenset({"csv", "parquet", "json"})


class AnalysisSettings(BaseSettings):
    """Analytics queries configuration.

    Attributes:
        divergence_min_year: First release year kept by divergence queries.
        family_keywords_raw: Comma-separated genre substrings marking family content.
        divisive_min_count: Minimum rows per title in the divisive ranking.
        divisive_prior_weight: Shrinkage weight toward the global mean (0 disables).
        divisive_top_n: Keep only the N most divisive titles (None keeps all).
        report_format: Output format for exported relations.
    """

    divergence_min_year: int = Field(default=2000, alias="DIVERGENCE_MIN_YEAR")
    family_keywords_raw: str = Field(
        default="kids,family,children",
        alias="FAMILY_KEYWORDS",
    )
    divisive_min_count: int = Field(default=1, ge=1, alias="DIVISIVE_MIN_COUNT")
    divisive_prior_weight: float = Field(default=0.0, ge=0.0, alias="DIVISIVE_PRIOR_WEIGHT")
    divisive_top_n: int | None = Field(default=None, ge=1, alias="DIVISIVE_TOP_N")
    report_format: str = Field(default="csv", alias="REPORT_FORMAT")

    model_config = SettingsConfigDict(
        env_file=".env",
        env_file_encoding="utf-8",
        extra="ignore",
    )

    @field_validator("report_format")
    @classmethod
    def validate_report_format(cls, v: str) -> str:
        """Validate report format is supported."""
        v_lower = v.lower()
        if v_lower not in VALID_REPORT_FORMATS:
            raise ValueError(f"Invalid REPORT_FORMAT. Valid: {sorted(VALID_REPORT_FORMATS)}")
        return v_lower

    @property
    def family_keywords(self) -> list[str]:
        """Parse family keywords from comma-separated string."""
        return [k.strip().lower() for k in self.family_keywords_raw.split(",") if k.strip()]
