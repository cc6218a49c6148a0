"""Pydantic schema for source descriptors."""

from pathlib import Path
from typing import Self

from pydantic import BaseModel, ConfigDict, Field, model_validator

TABLE_NAME_PATTERN = r"^[A-Za-z_][A-Za-z0-9_]*(\.[A-Za-z_][A-Za-z0-9_]*)?$"
"""Plain or schema-qualified SQL identifier."""


class SourceDescriptor(BaseModel):
    """Where one source relation lives.

    Exactly one of ``path`` (export file) or ``table`` (database table)
    must be given.

    Attributes:
        name: Service name or "genres".
        path: Export file path (.csv, .parquet, .json, .ndjson).
        table: Database table name.
    """

    model_config = ConfigDict(frozen=True, str_strip_whitespace=True)

    name: str = Field(min_length=1)
    path: Path | None = None
    table: str | None = Field(default=None, pattern=TABLE_NAME_PATTERN)

    @model_validator(mode="after")
    def validate_location(self) -> Self:
        """Require exactly one location."""
        if (self.path is None) == (self.table is None):
            raise ValueError("Provide exactly one of 'path' or 'table'")
        return self

    @property
    def location(self) -> str:
        """Human-readable location for logs."""
        if self.table is not None:
            return f"table:{self.table}"
        return str(self.path)
